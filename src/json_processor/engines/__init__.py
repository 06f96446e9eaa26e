"""Field metadata and type dispatch engines."""

from .type_dispatcher import TypeDispatcher
from .metadata_resolver import MetadataResolver

__all__ = ["TypeDispatcher", "MetadataResolver"]
