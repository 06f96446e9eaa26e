"""Built-in mappers for UUID and temporal values."""

import uuid
from datetime import date, datetime, time, timedelta, timezone
from numbers import Number

from .base import JSONValueMapper

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_DATE = date(1970, 1, 1)
_NANOS_PER_MICRO = 1000
_MICROS_PER_SECOND = 1_000_000


def _to_epoch_millis(value: datetime) -> int:
    return (value - _EPOCH) // timedelta(milliseconds=1)


def _from_epoch_millis(value: Number) -> datetime:
    return _EPOCH + timedelta(milliseconds=int(value))


class UUIDMapper(JSONValueMapper[uuid.UUID, str]):
    """UUID to and from its canonical text form."""

    def to_json_value(self, value: uuid.UUID) -> str:
        return str(value)

    def from_json_value(self, value: str) -> uuid.UUID:
        return uuid.UUID(value)


class DateMapper(JSONValueMapper[date, int]):
    """Date to and from the number of days since 1970-01-01."""

    def to_json_value(self, value: date) -> int:
        return (value - _EPOCH_DATE).days

    def from_json_value(self, value: Number) -> date:
        return _EPOCH_DATE + timedelta(days=int(value))


class TimeMapper(JSONValueMapper[time, int]):
    """Time of day to and from nanoseconds since midnight."""

    def to_json_value(self, value: time) -> int:
        micros = ((value.hour * 60 + value.minute) * 60 + value.second) * _MICROS_PER_SECOND
        return (micros + value.microsecond) * _NANOS_PER_MICRO

    def from_json_value(self, value: Number) -> time:
        micros = int(value) // _NANOS_PER_MICRO
        seconds, microsecond = divmod(micros, _MICROS_PER_SECOND)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second, microsecond)


class DateTimeMapper(JSONValueMapper[datetime, int]):
    """Naive datetime to and from epoch milliseconds, read as UTC wall time."""

    def to_json_value(self, value: datetime) -> int:
        return _to_epoch_millis(value.replace(tzinfo=timezone.utc))

    def from_json_value(self, value: Number) -> datetime:
        return _from_epoch_millis(value).replace(tzinfo=None)


class ZonedDateTimeMapper(JSONValueMapper[datetime, int]):
    """Aware datetime to and from epoch milliseconds, read back in the local zone."""

    def to_json_value(self, value: datetime) -> int:
        return _to_epoch_millis(value)

    def from_json_value(self, value: Number) -> datetime:
        return _from_epoch_millis(value).astimezone()


class OffsetDateTimeMapper(JSONValueMapper[datetime, int]):
    """Aware datetime to and from epoch milliseconds, read back in UTC."""

    def to_json_value(self, value: datetime) -> int:
        return _to_epoch_millis(value)

    def from_json_value(self, value: Number) -> datetime:
        return _from_epoch_millis(value)


class DurationMapper(JSONValueMapper[timedelta, int]):
    """Timedelta to and from whole milliseconds."""

    def to_json_value(self, value: timedelta) -> int:
        return value // timedelta(milliseconds=1)

    def from_json_value(self, value: Number) -> timedelta:
        return timedelta(milliseconds=int(value))
