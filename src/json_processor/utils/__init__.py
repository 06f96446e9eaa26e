"""Utility functions for the JSON Processor."""

from .locking import AdvisoryLockRegistry
from .tools import JSONTools
from .validation import ValidationUtils

__all__ = ["AdvisoryLockRegistry", "JSONTools", "ValidationUtils"]
