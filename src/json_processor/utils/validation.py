"""Validation utilities for processable field declarations."""

from typing import Any, ClassVar, Final, List, Mapping, Optional, get_origin

from ..types import ValidationResult, ValidationIssue, ErrorType


class ValidationUtils:
    """Utility class for validating field declarations."""

    @staticmethod
    def validate_field_declaration(owner: type, name: str,
                                   annotations: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a processable field declaration.

        A processable field must be an instance attribute: annotating it
        ``ClassVar`` makes it static, annotating it ``Final`` makes it final,
        and both are rejected.

        Args:
            owner: Class declaring the field
            name: Attribute name
            annotations: The class's own annotations

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationIssue] = []
        warnings: List[str] = []
        location = f"{owner.__module__}.{owner.__qualname__}.{name}"

        if name not in annotations:
            warnings.append(f"Field {name} in class {owner.__qualname__} has no annotation "
                            f"and is treated as an opaque value")
        else:
            modifier = ValidationUtils._modifier_of(annotations[name])
            if modifier is not None:
                errors.append(ValidationIssue(
                    type=ErrorType.VALIDATION,
                    message=f"Field {name} in class {owner.__module__}.{owner.__qualname__} "
                            f"is {modifier} and cannot be processed",
                    location=location
                ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _modifier_of(annotation: Any) -> Optional[str]:
        """Return "static" or "final" when the annotation declares one."""
        if annotation is ClassVar or get_origin(annotation) is ClassVar:
            return "static"
        if annotation is Final or get_origin(annotation) is Final:
            return "final"
        if isinstance(annotation, str):
            head = annotation.split("[", 1)[0].strip().rsplit(".", 1)[-1]
            if head == "ClassVar":
                return "static"
            if head == "Final":
                return "final"
        return None
