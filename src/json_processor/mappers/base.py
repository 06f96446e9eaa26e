"""Value mapper protocol."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class JSONValueMapper(ABC, Generic[T, R]):
    """
    Converts a single domain value to and from a JSON-compatible representation.

    A field binds one mapper instance per descriptor, so subclasses must be
    constructible without arguments. Either operation may raise; the engine
    wraps the failure into a ConversionError naming the value and mapper types.
    """

    @abstractmethod
    def to_json_value(self, value: T) -> R:
        """Convert a domain value to its JSON-compatible representation."""
        pass

    @abstractmethod
    def from_json_value(self, value: R) -> T:
        """Convert a JSON-compatible representation back to a domain value."""
        pass


class DefaultMapper(JSONValueMapper[Any, Any]):
    """Identity mapper used when a field configures none."""

    def to_json_value(self, value: Any) -> Any:
        return value

    def from_json_value(self, value: Any) -> Any:
        return value
