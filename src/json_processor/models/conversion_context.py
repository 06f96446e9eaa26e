"""Conversion context model implementation."""

from dataclasses import dataclass, field
from typing import Any, List

from .field_descriptor import FieldDescriptor


@dataclass
class ConversionContext:
    """
    Transient state of one serialize or deserialize call.

    Owned by the call that built it. A nested object gets its own context.
    """

    root: Any
    target_type: type
    fields: List[FieldDescriptor] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        return f"{self.target_type.__module__}.{self.target_type.__qualname__}"
