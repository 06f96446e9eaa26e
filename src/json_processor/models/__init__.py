"""Data models for the JSON Processor."""

from .json_field import JSONField, json_field, has_processable_fields
from .field_descriptor import FieldDescriptor
from .conversion_context import ConversionContext

__all__ = ["JSONField", "json_field", "has_processable_fields", "FieldDescriptor", "ConversionContext"]
