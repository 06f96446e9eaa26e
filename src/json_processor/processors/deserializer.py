"""Deserializer rebuilding processable objects from JSON object nodes."""

import logging
from enum import Enum
from typing import Any, List, Optional, Type, Union

from ..engines.metadata_resolver import MetadataResolver
from ..error_handler import ErrorHandler
from ..models import ConversionContext, FieldDescriptor
from ..tree import JSONArray, JSONObject
from ..types import (
    DeserializerInterface,
    EnumFormat,
    FieldKind,
    ValueCategory,
    ValidationError,
    InstantiationError,
    ConversionError,
    UnreachableError,
)


class JSONDeserializer(DeserializerInterface):
    """
    Deserializer for classes declaring processable fields.

    Decodes every field by its declared type. Values of non-scalar,
    non-enum types are rebuilt as nested objects when the tree holds an
    object node there, and go through the field's mapper otherwise, so a
    mapper-backed field may still be written as a nested object.
    """

    def __init__(self, resolver: Optional[MetadataResolver] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the deserializer.

        Args:
            resolver: Optional MetadataResolver instance
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or MetadataResolver(logger=self.logger)
        self.dispatcher = self.resolver.dispatcher
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def deserialize(self, target_type: type, tree: JSONObject) -> Any:
        """
        Rebuild an instance of target_type from a JSON object node.

        Args:
            target_type: Class with processable fields and a zero-argument constructor
            tree: Object node holding one key per field

        Returns:
            New instance of target_type

        Raises:
            ValidationError: If the class has no processable fields or a
                non-nullable field's key is missing
            InstantiationError: If the class, a mapper or a container cannot be built
            ConversionError: If a value cannot be converted
        """
        if tree is None:
            raise ValidationError("Cannot deserialize from None")

        context = self._build_context(target_type, tree)
        instance = self._instantiate(target_type)

        with self.error_handler.boundary("deserialize", target_type):
            if not isinstance(tree, JSONObject):
                raise ConversionError(f"Expected a JSONObject, got {type(tree).__name__}")
            self._deserialize_fields(context, instance)

        self.logger.debug(f"Deserialized {context.type_name} from {len(tree)} keys")
        return instance

    def _build_context(self, target_type: type, tree: JSONObject) -> ConversionContext:
        fields = self.resolver.discover(target_type)
        if not fields:
            raise ValidationError(
                f"Class {target_type.__module__}.{target_type.__qualname__} has no processable fields",
                target=target_type
            )
        return ConversionContext(root=tree, target_type=target_type, fields=fields)

    def _instantiate(self, target_type: type) -> Any:
        try:
            return target_type()
        except Exception as e:
            raise InstantiationError(
                f"Could not instantiate object of class {target_type.__module__}.{target_type.__qualname__}",
                target=target_type
            ) from e

    def _deserialize_fields(self, context: ConversionContext, instance: Any) -> None:
        tree = context.root
        for field in context.fields:
            if tree.has(field.name):
                field.write(instance, self._deserialize_field(field, tree))
            elif not field.nullable:
                raise ValidationError(f"Field {field.name} cannot be None")

    def _deserialize_field(self, field: FieldDescriptor, tree: JSONObject) -> Any:
        if field.kind == FieldKind.COLLECTION:
            return self._deserialize_collection(field, tree.get_json_array(field.name))
        if field.kind == FieldKind.MAP:
            return self._deserialize_map(field, tree.get_json_object(field.name))
        if field.kind == FieldKind.OBJECT:
            return self._deserialize_value(field, field.field_type, tree, field.name)
        raise UnreachableError(f"Unreachable: field kind {field.kind} is not supported")

    def _deserialize_value(self, field: FieldDescriptor, annotation: Any,
                           source: Union[JSONObject, JSONArray], locator: Union[str, int]) -> Any:
        """
        Decode one singular value by its declared type.

        Args:
            field: Descriptor supplying enum format and mapper
            annotation: Declared type of the value
            source: Node holding the value
            locator: Key or index of the value in source

        Returns:
            The decoded value
        """
        cls = self.dispatcher.runtime_class(self.dispatcher.unwrap_optional(annotation))
        category = self.dispatcher.resolve_category(cls)

        if category == ValueCategory.SCALAR:
            accessor = getattr(source, self.dispatcher.scalar_accessor(cls))
            return accessor(locator)
        if category == ValueCategory.ENUM:
            return self._deserialize_enum(cls, source.get(locator), field.enum_format)

        value = source.get(locator)
        if isinstance(value, JSONObject):
            return self.deserialize(cls, value)
        try:
            return field.mapper.from_json_value(value)
        except Exception as e:
            raise ConversionError(
                f"Could not deserialize object of class {cls.__qualname__} "
                f"using mapper of class {type(field.mapper).__qualname__}"
            ) from e

    def _deserialize_enum(self, cls: Type[Enum], value: Any, enum_format: EnumFormat) -> Enum:
        if enum_format == EnumFormat.ORDINAL:
            members = list(cls)
            ordinal = int(str(value))
            if not 0 <= ordinal < len(members):
                raise ConversionError(f"Ordinal {ordinal} is out of range for enum {cls.__qualname__}")
            return members[ordinal]
        if enum_format == EnumFormat.STRING:
            try:
                return cls[str(value)]
            except KeyError:
                raise ConversionError(f"No constant {value!r} in enum {cls.__qualname__}") from None
        raise UnreachableError(f"Unreachable: enum format {enum_format} is not supported")

    def _deserialize_collection(self, field: FieldDescriptor, array: JSONArray) -> Any:
        collection = self._new_container(field.container_type)
        elements = [
            self._deserialize_value(field, field.element_type, array, index)
            for index in range(array.length())
        ]
        return self._fill_collection(collection, elements)

    @staticmethod
    def _fill_collection(collection: Any, elements: List[Any]) -> Any:
        """Add elements in order; immutable collections are rebuilt from them."""
        if hasattr(collection, "append"):
            for element in elements:
                collection.append(element)
            return collection
        if hasattr(collection, "add"):
            for element in elements:
                collection.add(element)
            return collection
        return type(collection)(elements)

    def _deserialize_map(self, field: FieldDescriptor, node: JSONObject) -> Any:
        mapping = self._new_container(field.container_type)
        for key in node.keys():
            mapping[key] = self._deserialize_value(field, field.value_type, node, key)
        return mapping

    @staticmethod
    def _new_container(container_type: type) -> Any:
        try:
            return container_type()
        except Exception as e:
            raise InstantiationError(
                f"Could not instantiate container of class {getattr(container_type, '__qualname__', container_type)}"
            ) from e
