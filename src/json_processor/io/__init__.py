"""File I/O operations for the JSON Processor."""

from .reader import JSONReader
from .writer import JSONWriter

__all__ = ["JSONReader", "JSONWriter"]
