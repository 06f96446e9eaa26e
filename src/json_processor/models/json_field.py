"""Field marker declaring per-field conversion configuration."""

from typing import Any, Callable, List, Optional, Tuple, Type

from ..mappers.base import DefaultMapper, JSONValueMapper
from ..types import EnumFormat


class JSONField:
    """
    Marks a class attribute as processable and carries its configuration.

    The marker is a data descriptor: values assigned on an instance are kept in
    the instance ``__dict__``. An attribute that was never assigned reads as
    ``default``, or as a value built once per instance by ``default_factory``.
    The attribute's type comes from the class annotation.
    """

    def __init__(self, nullable: bool = False,
                 enum_format: EnumFormat = EnumFormat.STRING,
                 mapper: Type[JSONValueMapper] = DefaultMapper,
                 collection_impl: type = list,
                 map_impl: type = dict,
                 default: Any = None,
                 default_factory: Optional[Callable[[], Any]] = None):
        """
        Initialize the field marker.

        Args:
            nullable: Whether the value may be absent on read and write
            enum_format: Enum representation, by name or by ordinal
            mapper: Mapper class instantiated once per field descriptor
            collection_impl: Concrete collection built when the declared type is abstract
            map_impl: Concrete mapping built when the declared type is abstract
            default: Value read from an instance that never assigned the attribute
            default_factory: Zero-argument callable building a per-instance default

        Raises:
            ValueError: If default is a list, dict or set, or both defaults are given
        """
        self.nullable = nullable
        self.enum_format = enum_format
        self.mapper = mapper
        self.collection_impl = collection_impl
        self.map_impl = map_impl
        if default is not None and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")
        if isinstance(default, (list, dict, set)):
            raise ValueError(f"Mutable default {type(default).__name__} is not allowed, use default_factory")
        self.default = default
        self.default_factory = default_factory
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        if self.name in instance.__dict__:
            return instance.__dict__[self.name]
        if self.default_factory is not None:
            return instance.__dict__.setdefault(self.name, self.default_factory())
        return self.default

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value

    def __delete__(self, instance: Any) -> None:
        instance.__dict__.pop(self.name, None)

    def __repr__(self) -> str:
        return (f"JSONField(name={self.name!r}, nullable={self.nullable}, "
                f"enum_format={self.enum_format.name}, mapper={self.mapper.__name__})")


def declared_markers(cls: type) -> List[Tuple[str, JSONField]]:
    """
    List the JSONField markers declared directly on a class.

    Inherited markers are not included. Order is definition order.
    """
    return [(name, value) for name, value in vars(cls).items() if isinstance(value, JSONField)]


def has_processable_fields(cls: Any) -> bool:
    """Check whether a class declares at least one JSONField, without validating it."""
    if not isinstance(cls, type):
        return False
    return any(isinstance(value, JSONField) for value in vars(cls).values())


def json_field(nullable: bool = False,
               enum_format: EnumFormat = EnumFormat.STRING,
               mapper: Type[JSONValueMapper] = DefaultMapper,
               collection_impl: type = list,
               map_impl: type = dict,
               default: Any = None,
               default_factory: Optional[Callable[[], Any]] = None) -> Any:
    """
    Declare a processable field.

    Example:
        class User:
            name: str = json_field()
            role: Role = json_field(enum_format=EnumFormat.ORDINAL)
            tags: Sequence[str] = json_field(collection_impl=deque)

    Returns:
        A JSONField marker, typed as Any so it can sit behind any annotation
    """
    return JSONField(
        nullable=nullable,
        enum_format=enum_format,
        mapper=mapper,
        collection_impl=collection_impl,
        map_impl=map_impl,
        default=default,
        default_factory=default_factory,
    )
