"""Error handling implementation for the JSON Processor."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Type

from .types import (
    JSONProcessorError,
    ValidationError,
    InstantiationError,
    ConversionError,
    UnreachableError,
)

_TAXONOMY = (ValidationError, InstantiationError, ConversionError, UnreachableError)


class ErrorHandler:
    """
    Wraps failures at conversion boundaries.

    Each object boundary (the top-level call and every nested object) wraps
    the failures raised inside it exactly once, naming the class being
    converted and keeping the original as ``__cause__``. A failure that a
    boundary already described passes through outer boundaries unchanged.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def boundary(self, action: str, target: type) -> Iterator[None]:
        """
        Context manager wrapping failures raised while converting one object.

        Args:
            action: Verb describing the conversion, e.g. "serialize"
            target: Class being converted

        Raises:
            JSONProcessorError: Of the same taxonomy kind as the cause, or
                ConversionError for foreign exceptions
        """
        try:
            yield
        except JSONProcessorError as e:
            if e.target is not None:
                raise
            raise self.wrap(e, action, target) from e
        except Exception as e:
            raise self.wrap(e, action, target) from e

    def wrap(self, error: Exception, action: str, target: type) -> JSONProcessorError:
        """
        Build the boundary error for a cause.

        Args:
            error: The underlying cause
            action: Verb describing the conversion
            target: Class being converted

        Returns:
            A new JSONProcessorError describing the failure
        """
        kind = self.kind_of(error)
        message = f"Could not {action} object of class {_qualified_name(target)}: {error}"
        self.logger.debug(f"{kind.__name__} at {action} boundary of {target.__qualname__}: "
                          f"{type(error).__name__}: {error}")
        return kind(message, target=target)

    @staticmethod
    def kind_of(error: Exception) -> Type[JSONProcessorError]:
        """Taxonomy kind of a cause; foreign exceptions are conversion failures."""
        for kind in _TAXONOMY:
            if isinstance(error, kind):
                return kind
        return ConversionError


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
