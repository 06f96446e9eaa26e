"""Main JSON Processor implementation."""

import logging
from collections.abc import Iterable, Mapping
from contextlib import nullcontext
from typing import Any, ContextManager, Dict, List, Optional, Type, TypeVar, Union

from .engines import MetadataResolver
from .error_handler import ErrorHandler
from .processors import JSONDeserializer, JSONSerializer
from .profiler import ConversionProfiler
from .tree import JSONArray, JSONObject, wrap
from .types import ConversionError, JSONProcessorError
from .utils.locking import AdvisoryLockRegistry

T = TypeVar("T")


class JSONProcessor:
    """
    Entry point for converting objects to JSON trees and back.

    Every public call holds the advisory lock of the caller-supplied root
    (object, tree, collection or mapping) until it returns, so two threads
    cannot convert the same root at once. Nested objects created during a
    call are not locked.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 lock_registry: Optional[AdvisoryLockRegistry] = None,
                 profiler: Optional[ConversionProfiler] = None):
        """
        Initialize the JSON Processor.

        Args:
            logger: Optional logger instance
            lock_registry: Optional lock registry, shared to coordinate several processors
            profiler: Optional profiler recording metrics for every call
        """
        self.logger = logger or logging.getLogger(__name__)
        self.locks = lock_registry or AdvisoryLockRegistry()
        self.profiler = profiler

        self.error_handler = ErrorHandler(self.logger)
        self.resolver = MetadataResolver(logger=self.logger)
        self.serializer = JSONSerializer(self.resolver, self.error_handler, self.logger)
        self.deserializer = JSONDeserializer(self.resolver, self.error_handler, self.logger)

    def serialize(self, obj: Any) -> JSONObject:
        """
        Serialize an object into a JSON object node.

        Args:
            obj: Object whose class declares processable fields

        Returns:
            JSONObject representing the object

        Raises:
            JSONProcessorError: If serialization fails
        """
        with self.locks.hold(obj), self._profile("serialize"):
            return self._guarded("serialize", self.serializer.serialize, obj)

    def serialize_all(self, objects: Union[Iterable, Mapping]) -> Union[JSONArray, JSONObject]:
        """
        Serialize many objects.

        A mapping of text keys to objects becomes an object node in insertion
        order; any other iterable becomes an array node in iteration order.

        Args:
            objects: Collection or mapping of objects

        Returns:
            JSONArray or JSONObject of serialized objects

        Raises:
            JSONProcessorError: If serializing any object fails
        """
        with self.locks.hold(objects), self._profile("serialize_all", _count(objects)):
            try:
                if isinstance(objects, Mapping):
                    result = JSONObject()
                    for key, obj in objects.items():
                        result.put(key, self.serialize(obj))
                        self._sample()
                    self.logger.debug(f"Serialized {len(result)} objects into a JSONObject")
                    return result

                array = JSONArray()
                for obj in objects:
                    array.append(self.serialize(obj))
                    self._sample()
                self.logger.debug(f"Serialized {array.length()} objects into a JSONArray")
                return array
            except JSONProcessorError:
                raise
            except Exception as e:
                self.logger.error(f"Bulk serialization failed: {e}")
                raise ConversionError(f"Could not serialize {type(objects).__name__}: {e}") from e

    def deserialize(self, target_type: Type[T], tree: Union[JSONObject, Dict[str, Any]]) -> T:
        """
        Rebuild an instance of target_type from a JSON object node.

        Args:
            target_type: Class with processable fields and a zero-argument constructor
            tree: JSONObject, or a plain dict that is wrapped first

        Returns:
            New instance of target_type

        Raises:
            JSONProcessorError: If deserialization fails
        """
        with self.locks.hold(tree), self._profile("deserialize"):
            return self._guarded("deserialize", self.deserializer.deserialize, target_type, wrap(tree))

    def deserialize_all(self, target_type: Type[T],
                        tree: Union[JSONArray, JSONObject, list, dict]) -> Union[List[T], Dict[str, T]]:
        """
        Rebuild many instances of target_type.

        An array node yields a list in array order; an object node yields a
        dict in key order. Every element must itself be an object node.

        Args:
            target_type: Class of every element
            tree: Array or object node, or a plain list or dict

        Returns:
            List or dict of instances

        Raises:
            JSONProcessorError: If deserializing any element fails
        """
        node = wrap(tree)
        with self.locks.hold(tree), self._profile("deserialize_all", _count(node)):
            try:
                if isinstance(node, JSONObject):
                    results = {}
                    for key in node.keys():
                        results[key] = self.deserialize(target_type, node.get_json_object(key))
                        self._sample()
                    self.logger.debug(f"Deserialized {len(results)} objects into {target_type.__qualname__}")
                    return results
                if isinstance(node, JSONArray):
                    items = []
                    for index in range(node.length()):
                        items.append(self.deserialize(target_type, node.get_json_object(index)))
                        self._sample()
                    self.logger.debug(f"Deserialized {len(items)} objects into {target_type.__qualname__}")
                    return items
                raise ConversionError(f"Expected a JSONArray or JSONObject, got {type(tree).__name__}")
            except JSONProcessorError:
                raise
            except Exception as e:
                self.logger.error(f"Bulk deserialization into {target_type.__qualname__} failed: {e}")
                raise ConversionError(f"Could not deserialize {type(tree).__name__} "
                                      f"into {target_type.__qualname__}: {e}") from e

    def describe(self, target_type: type) -> List[Dict[str, Any]]:
        """
        Describe the processable fields of a class.

        Returns:
            One dictionary per field, in definition order
        """
        return [descriptor.to_dict() for descriptor in self.resolver.discover(target_type)]

    def _guarded(self, operation: str, func: Any, *args: Any) -> Any:
        try:
            return func(*args)
        except JSONProcessorError as e:
            self.logger.error(f"{operation} failed: {e}")
            raise

    def _sample(self) -> None:
        if self.profiler is not None:
            self.profiler.sample_performance()

    def _profile(self, operation: str, objects: int = 1) -> ContextManager[Any]:
        if self.profiler is None:
            return nullcontext()
        return self.profiler.profile_operation(operation, objects)


def _count(objects: Any) -> int:
    try:
        return len(objects)
    except TypeError:
        return 0


_default_processor = JSONProcessor()


def serialize(obj: Any) -> JSONObject:
    """Serialize an object with the shared default processor."""
    return _default_processor.serialize(obj)


def serialize_all(objects: Union[Iterable, Mapping]) -> Union[JSONArray, JSONObject]:
    """Serialize many objects with the shared default processor."""
    return _default_processor.serialize_all(objects)


def deserialize(target_type: Type[T], tree: Union[JSONObject, Dict[str, Any]]) -> T:
    """Deserialize an object with the shared default processor."""
    return _default_processor.deserialize(target_type, tree)


def deserialize_all(target_type: Type[T],
                    tree: Union[JSONArray, JSONObject, list, dict]) -> Union[List[T], Dict[str, T]]:
    """Deserialize many objects with the shared default processor."""
    return _default_processor.deserialize_all(target_type, tree)
