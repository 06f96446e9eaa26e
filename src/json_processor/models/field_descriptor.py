"""Field descriptor model implementation."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..mappers.base import JSONValueMapper
from ..types import EnumFormat, FieldKind


@dataclass
class FieldDescriptor:
    """
    Resolved metadata for one processable field of a class.

    Built fresh by the metadata resolver on every conversion call. The
    container type is settled at build time: the declared class when it can
    be instantiated, otherwise the field's configured implementation.
    """

    name: str
    owner: type
    declared_type: Any
    field_type: type
    kind: FieldKind
    nullable: bool
    enum_format: EnumFormat
    mapper: JSONValueMapper
    element_type: Any = object
    key_type: Any = str
    value_type: Any = object
    container_type: Optional[type] = None

    def read(self, instance: Any) -> Any:
        """Read this field's current value from an instance."""
        return getattr(instance, self.name)

    def write(self, instance: Any, value: Any) -> None:
        """Assign this field's value on an instance."""
        setattr(instance, self.name, value)

    def to_dict(self) -> Dict[str, Any]:
        """
        Describe the descriptor with plain values.

        Returns:
            Dictionary suitable for display
        """
        result = {
            "name": self.name,
            "type": _type_name(self.declared_type),
            "kind": self.kind.value,
            "nullable": self.nullable,
            "enum_format": self.enum_format.value,
            "mapper": type(self.mapper).__name__,
        }
        if self.kind == FieldKind.COLLECTION:
            result["element_type"] = _type_name(self.element_type)
            result["container_type"] = _type_name(self.container_type)
        elif self.kind == FieldKind.MAP:
            result["value_type"] = _type_name(self.value_type)
            result["container_type"] = _type_name(self.container_type)
        return result


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__name__
    return str(tp).replace("typing.", "")
