"""Serializer turning processable objects into JSON object nodes."""

import logging
from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any, Optional

from ..engines.metadata_resolver import MetadataResolver
from ..error_handler import ErrorHandler
from ..models import ConversionContext, FieldDescriptor
from ..tree import JSONArray, JSONObject
from ..types import (
    SerializerInterface,
    EnumFormat,
    FieldKind,
    ValueCategory,
    ValidationError,
    ConversionError,
    UnreachableError,
)


class JSONSerializer(SerializerInterface):
    """
    Serializer for objects declaring processable fields.

    Walks the fields of the object's runtime class in definition order and
    dispatches on each value's runtime class. Values whose class declares
    processable fields are serialized recursively as nested objects.
    """

    def __init__(self, resolver: Optional[MetadataResolver] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the serializer.

        Args:
            resolver: Optional MetadataResolver instance
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or MetadataResolver(logger=self.logger)
        self.dispatcher = self.resolver.dispatcher
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def serialize(self, obj: Any) -> JSONObject:
        """
        Serialize an object into a JSON object node.

        Args:
            obj: Object whose class declares processable fields

        Returns:
            JSONObject keyed by field name

        Raises:
            ValidationError: If the class has no processable fields or a
                non-nullable field holds None
            InstantiationError: If a field's mapper cannot be instantiated
            ConversionError: If a value cannot be converted
        """
        if obj is None:
            raise ValidationError("Cannot serialize None")

        context = self._build_context(obj)
        with self.error_handler.boundary("serialize", context.target_type):
            return self._serialize_fields(context)

    def _build_context(self, obj: Any) -> ConversionContext:
        target_type = type(obj)
        fields = self.resolver.discover(target_type)
        if not fields:
            raise ValidationError(
                f"Class {target_type.__module__}.{target_type.__qualname__} has no processable fields",
                target=target_type
            )
        return ConversionContext(root=obj, target_type=target_type, fields=fields)

    def _serialize_fields(self, context: ConversionContext) -> JSONObject:
        result = JSONObject()

        for field in context.fields:
            value = field.read(context.root)
            if value is None:
                if not field.nullable:
                    raise ValidationError(f"Field {field.name} cannot be None")
                continue

            kind = self.dispatcher.classify_value(value)
            if kind == FieldKind.COLLECTION:
                result.put(field.name, self._serialize_collection(value, field))
            elif kind == FieldKind.MAP:
                result.put(field.name, self._serialize_map(value, field))
            elif kind == FieldKind.OBJECT:
                result.put(field.name, self._serialize_value(value, field))
            else:
                raise UnreachableError(f"Unreachable: field kind {kind} is not supported")

        self.logger.debug(f"Serialized {context.type_name} with {len(result)} keys")
        return result

    def _serialize_value(self, value: Any, field: FieldDescriptor) -> Any:
        """Apply the singular value rules: enum, nested object, then mapper."""
        category = self.dispatcher.resolve_category(type(value))
        if category == ValueCategory.ENUM:
            return self._serialize_enum(value, field.enum_format)
        if category == ValueCategory.NESTED:
            return self.serialize(value)
        try:
            return field.mapper.to_json_value(value)
        except Exception as e:
            raise ConversionError(
                f"Could not serialize object of class {type(value).__qualname__} "
                f"using mapper of class {type(field.mapper).__qualname__}"
            ) from e

    def _serialize_enum(self, value: Enum, enum_format: EnumFormat) -> Any:
        if enum_format == EnumFormat.ORDINAL:
            return list(type(value)).index(value)
        if enum_format == EnumFormat.STRING:
            return value.name
        raise UnreachableError(f"Unreachable: enum format {enum_format} is not supported")

    def _serialize_collection(self, collection: Collection, field: FieldDescriptor) -> JSONArray:
        array = JSONArray()
        for element in collection:
            if element is not None:
                array.append(self._serialize_value(element, field))
        return array

    def _serialize_map(self, mapping: Mapping, field: FieldDescriptor) -> JSONObject:
        result = JSONObject()
        for key, value in mapping.items():
            if key is None:
                raise ValidationError(f"Map key of field {field.name} cannot be None")
            result.put(self._key_text(key), self._serialize_value(value, field))
        return result

    @staticmethod
    def _key_text(key: Any) -> str:
        if isinstance(key, Enum):
            return key.name
        return str(key)
