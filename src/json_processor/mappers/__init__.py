"""Value mappers for field conversion."""

from .base import JSONValueMapper, DefaultMapper
from .temporal import (
    UUIDMapper,
    DateMapper,
    TimeMapper,
    DateTimeMapper,
    ZonedDateTimeMapper,
    OffsetDateTimeMapper,
    DurationMapper,
)

__all__ = [
    "JSONValueMapper",
    "DefaultMapper",
    "UUIDMapper",
    "DateMapper",
    "TimeMapper",
    "DateTimeMapper",
    "ZonedDateTimeMapper",
    "OffsetDateTimeMapper",
    "DurationMapper",
]
