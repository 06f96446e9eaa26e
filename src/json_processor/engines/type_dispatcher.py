"""Type dispatch for runtime values and declared field types."""

import inspect
import logging
from collections.abc import Collection, Mapping
from decimal import Decimal
from enum import Enum
from numbers import Number
from types import UnionType
from typing import Any, Dict, Optional, Tuple, Union, get_args, get_origin

from ..models.json_field import has_processable_fields
from ..tree import JSONArray, JSONObject
from ..types import FieldKind, ValueCategory

# Declared scalar types and the typed tree accessor that reads each one back.
# Matching is by exact type, so subclasses (IntEnum, user str types) do not count.
SCALAR_ACCESSORS: Dict[type, str] = {
    str: "get_string",
    bool: "get_boolean",
    int: "get_int",
    float: "get_float",
    Decimal: "get_decimal",
    Number: "get_number",
    JSONObject: "get_json_object",
    JSONArray: "get_json_array",
}

# Collections that are always treated as singular values.
_OPAQUE_COLLECTIONS: Tuple[type, ...] = (str, bytes, bytearray, memoryview, JSONObject, JSONArray)


class TypeDispatcher:
    """
    Decides how a runtime value or a declared type is represented.

    Classification is capability based: any Mapping is a map and any other
    Collection is a collection, so user-defined container subclasses classify
    the same way as the builtins.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the type dispatcher.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def classify(self, cls: Any) -> FieldKind:
        """
        Classify a class into a container shape.

        Args:
            cls: Class to classify; non-classes are singular

        Returns:
            FieldKind of the class
        """
        if not isinstance(cls, type) or issubclass(cls, _OPAQUE_COLLECTIONS):
            return FieldKind.OBJECT
        if issubclass(cls, Mapping):
            return FieldKind.MAP
        if issubclass(cls, Collection):
            return FieldKind.COLLECTION
        return FieldKind.OBJECT

    def classify_value(self, value: Any) -> FieldKind:
        """Classify a runtime value by its class."""
        return self.classify(type(value))

    def resolve_category(self, cls: Any) -> ValueCategory:
        """
        Resolve the category of a singular type.

        Checks run in a fixed priority order: exact scalar type, enum,
        class with processable fields, then opaque. An enum that also
        declares processable fields is still an enum.

        Args:
            cls: Declared or runtime class

        Returns:
            ValueCategory of the class
        """
        if cls in SCALAR_ACCESSORS:
            return ValueCategory.SCALAR
        if isinstance(cls, type) and issubclass(cls, Enum):
            return ValueCategory.ENUM
        if has_processable_fields(cls):
            return ValueCategory.NESTED
        return ValueCategory.OPAQUE

    def scalar_accessor(self, cls: type) -> str:
        """Name of the typed tree accessor for a scalar class."""
        return SCALAR_ACCESSORS[cls]

    @staticmethod
    def unwrap_optional(annotation: Any) -> Any:
        """Strip an ``Optional[...]`` wrapper from an annotation."""
        if get_origin(annotation) in (Union, UnionType):
            args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(args) == 1:
                return args[0]
        return annotation

    @staticmethod
    def runtime_class(annotation: Any) -> type:
        """
        Resolve the class behind an annotation.

        ``List[str]`` resolves to ``list`` and ``Sequence[str]`` to the
        abstract ``collections.abc.Sequence``. Annotations that name no
        class, such as ``Any`` or a TypeVar, resolve to ``object``.
        """
        if annotation is Any:
            return object
        origin = get_origin(annotation)
        if isinstance(origin, type):
            return origin
        if isinstance(annotation, type):
            return annotation
        return object

    @staticmethod
    def type_arguments(annotation: Any) -> Tuple[Any, ...]:
        """Generic arguments of an annotation, empty when it has none."""
        return get_args(annotation)

    @staticmethod
    def is_instantiable(cls: Any) -> bool:
        """
        Check whether a class can be built directly.

        Abstract classes and protocols cannot; concrete classes can.
        """
        if not isinstance(cls, type):
            return False
        if inspect.isabstract(cls):
            return False
        return not getattr(cls, "_is_protocol", False)
