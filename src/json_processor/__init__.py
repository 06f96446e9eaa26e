"""
JSON Processor - Map annotated Python objects to JSON trees and back.

Classes mark their processable attributes with ``json_field()``; the
processor walks those fields to build ``JSONObject`` trees and to rebuild
instances from them.
"""

from .json_processor import JSONProcessor, serialize, serialize_all, deserialize, deserialize_all
from .models import json_field, JSONField, FieldDescriptor
from .tree import JSONObject, JSONArray, JSONTreeError
from .mappers import JSONValueMapper, DefaultMapper
from .types import (
    EnumFormat,
    JSONProcessorError,
    ValidationError,
    InstantiationError,
    ConversionError,
    UnreachableError,
)

__version__ = "1.0.0"
__all__ = [
    "JSONProcessor",
    "serialize",
    "serialize_all",
    "deserialize",
    "deserialize_all",
    "json_field",
    "JSONField",
    "FieldDescriptor",
    "JSONObject",
    "JSONArray",
    "JSONTreeError",
    "JSONValueMapper",
    "DefaultMapper",
    "EnumFormat",
    "JSONProcessorError",
    "ValidationError",
    "InstantiationError",
    "ConversionError",
    "UnreachableError",
]
