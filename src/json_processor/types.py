"""Core type definitions for the JSON Processor."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class EnumFormat(Enum):
    """Enumeration of enum representations in the JSON tree."""
    STRING = "string"
    ORDINAL = "ordinal"


class FieldKind(Enum):
    """Enumeration of container shapes a type can have."""
    OBJECT = "object"
    COLLECTION = "collection"
    MAP = "map"


class ValueCategory(Enum):
    """Enumeration of singular value categories, in dispatch priority order."""
    SCALAR = "scalar"
    ENUM = "enum"
    NESTED = "nested"
    OPAQUE = "opaque"


class ErrorType(Enum):
    """Enumeration of error types."""
    VALIDATION = "validation"
    INSTANTIATION = "instantiation"
    CONVERSION = "conversion"
    UNREACHABLE = "unreachable"


@dataclass
class ValidationIssue:
    """Validation issue details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of a declaration check."""
    is_valid: bool
    errors: List[ValidationIssue]
    warnings: List[str]


class JSONProcessorError(Exception):
    """
    Base exception for JSON processing errors.

    ``target`` is set once a conversion boundary has described the failure
    in terms of the offending class; such errors propagate through outer
    boundaries unchanged.
    """

    error_type = ErrorType.CONVERSION

    def __init__(self, message: str, target: Optional[type] = None):
        super().__init__(message)
        self.target = target


class ValidationError(JSONProcessorError):
    """Raised when a declaration or a value breaks a structural constraint."""
    error_type = ErrorType.VALIDATION


class InstantiationError(JSONProcessorError):
    """Raised when a class cannot be built with a zero-argument constructor."""
    error_type = ErrorType.INSTANTIATION


class ConversionError(JSONProcessorError):
    """Raised when a value cannot be converted to or from its representation."""
    error_type = ErrorType.CONVERSION


class UnreachableError(JSONProcessorError):
    """Raised on an internally inconsistent classification."""
    error_type = ErrorType.UNREACHABLE


# Abstract base classes for interfaces

class SerializerInterface(ABC):
    """Abstract interface for object serialization."""

    @abstractmethod
    def serialize(self, obj: Any) -> Any:
        """Serialize an object into a JSON object node."""
        pass


class DeserializerInterface(ABC):
    """Abstract interface for object deserialization."""

    @abstractmethod
    def deserialize(self, target_type: type, tree: Any) -> Any:
        """Rebuild an instance of target_type from a JSON object node."""
        pass
