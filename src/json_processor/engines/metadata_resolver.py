"""Field metadata discovery for processable classes."""

import inspect
import logging
import sys
from typing import Any, Dict, List, Optional, Set

from ..mappers.base import JSONValueMapper
from ..models.field_descriptor import FieldDescriptor
from ..models.json_field import JSONField, declared_markers, has_processable_fields
from ..types import FieldKind, InstantiationError, ValidationError
from ..utils.validation import ValidationUtils
from .type_dispatcher import TypeDispatcher


class MetadataResolver:
    """
    Discovers and validates the processable fields of a class.

    Only attributes declared directly on the class are scanned, in definition
    order. Nothing is cached: every call rebuilds the descriptors, including
    a fresh mapper instance per field.
    """

    def __init__(self, dispatcher: Optional[TypeDispatcher] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the metadata resolver.

        Args:
            dispatcher: Optional TypeDispatcher instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.dispatcher = dispatcher or TypeDispatcher(self.logger)

    def discover(self, cls: Any) -> List[FieldDescriptor]:
        """
        Build the ordered field descriptors of a class.

        Every marked field is validated before its descriptor is built, and
        the first failure aborts discovery for the whole class.

        Args:
            cls: Class to inspect

        Returns:
            List of FieldDescriptor in definition order

        Raises:
            ValidationError: If cls is not a class or a marked field is ClassVar or Final
            InstantiationError: If a field's mapper cannot be instantiated
        """
        if not isinstance(cls, type):
            raise ValidationError(f"{cls!r} is not a class")

        markers = declared_markers(cls)
        annotations = self._own_annotations(cls, {name for name, _ in markers})
        descriptors = []

        for name, marker in markers:
            result = ValidationUtils.validate_field_declaration(cls, name, annotations)
            for warning in result.warnings:
                self.logger.debug(warning)
            if not result.is_valid:
                raise ValidationError(result.errors[0].message, target=cls)
            descriptors.append(self._build_descriptor(cls, name, marker, annotations.get(name, object)))

        self.logger.debug(f"Discovered {len(descriptors)} processable fields on {cls.__qualname__}")
        return descriptors

    def has_processable_fields(self, cls: Any) -> bool:
        """Check whether a class declares any processable field."""
        return has_processable_fields(cls)

    def _build_descriptor(self, owner: type, name: str, marker: JSONField,
                          annotation: Any) -> FieldDescriptor:
        """
        Build one field descriptor.

        Args:
            owner: Class declaring the field
            name: Attribute name
            marker: The field's JSONField marker
            annotation: The field's annotation, ``object`` when absent

        Returns:
            FieldDescriptor for the field
        """
        declared_type = self.dispatcher.unwrap_optional(annotation)
        field_type = self.dispatcher.runtime_class(declared_type)
        kind = self.dispatcher.classify(field_type)
        args = self.dispatcher.type_arguments(declared_type)

        descriptor = FieldDescriptor(
            name=name,
            owner=owner,
            declared_type=declared_type,
            field_type=field_type,
            kind=kind,
            nullable=marker.nullable,
            enum_format=marker.enum_format,
            mapper=self._instantiate_mapper(owner, name, marker)
        )

        if kind == FieldKind.COLLECTION:
            descriptor.element_type = args[0] if args else object
            descriptor.container_type = self._select_container(field_type, marker.collection_impl)
        elif kind == FieldKind.MAP:
            descriptor.key_type = args[0] if args else str
            descriptor.value_type = args[1] if len(args) > 1 else object
            descriptor.container_type = self._select_container(field_type, marker.map_impl)

        return descriptor

    def _select_container(self, field_type: type, configured: type) -> type:
        """Prefer the declared class; fall back to the configured implementation."""
        if self.dispatcher.is_instantiable(field_type):
            return field_type
        return configured

    def _instantiate_mapper(self, owner: type, name: str, marker: JSONField) -> JSONValueMapper:
        try:
            return marker.mapper()
        except Exception as e:
            raise InstantiationError(
                f"Could not instantiate field mapper {getattr(marker.mapper, '__name__', marker.mapper)} "
                f"for field {name} in class {owner.__qualname__}",
                target=owner
            ) from e

    def _own_annotations(self, cls: type, processable: Set[str]) -> Dict[str, Any]:
        """
        Annotations declared on the class itself, with string annotations evaluated.

        Each string is evaluated on its own against the defining module and the
        class namespace. An unresolvable annotation on a processable field fails
        discovery; on any other attribute it is kept as raw text.

        Raises:
            ValidationError: If a processable field's annotation cannot be resolved
        """
        try:
            raw = inspect.get_annotations(cls)
        except NameError as e:
            raise ValidationError(f"Could not resolve annotations of {cls.__qualname__}: {e}",
                                  target=cls) from e

        module = sys.modules.get(cls.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(cls))

        annotations = {}
        for name, annotation in raw.items():
            if isinstance(annotation, str):
                try:
                    annotation = eval(annotation, globalns, localns)
                except Exception as e:
                    if name in processable:
                        raise ValidationError(
                            f"Could not resolve type {annotation!r} of field {name} "
                            f"in class {cls.__qualname__}: {e}",
                            target=cls
                        ) from e
                    self.logger.debug(f"Keeping unresolved annotation {annotation!r} of {cls.__qualname__}.{name}")
            annotations[name] = annotation
        return annotations
