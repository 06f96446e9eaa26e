"""Serialization and deserialization processors."""

from .serializer import JSONSerializer
from .deserializer import JSONDeserializer

__all__ = ["JSONSerializer", "JSONDeserializer"]
