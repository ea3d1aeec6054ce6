"""Microsecond resolution timestamps that are hashable and comparable."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

__all__ = ["Timestamp", "ORIGIN_TIME", "as_timestamp", "parse_timestamp"]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?"
    r"(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


class Timestamp(int):
    """Microseconds since the Unix epoch."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Timestamp({int(self)})"

    def truncate(self, d: timedelta) -> Timestamp:
        """Round down to a multiple of ``d`` counted from ``ORIGIN_TIME``.

        Durations that are zero or negative leave the timestamp unchanged.
        """
        if d <= timedelta(0):
            return self
        step = d // _MICROSECOND
        remainder = (self - ORIGIN_TIME) % step
        return Timestamp(self - remainder)

    def add(self, d: timedelta) -> Timestamp:
        """Return the timestamp moved by the fixed duration ``d``."""
        return Timestamp(self + d // _MICROSECOND)

    def sub(self, other: int) -> timedelta:
        """Return the difference between this timestamp and ``other``."""
        return timedelta(microseconds=int(self) - int(other))

    def to_datetime(self) -> datetime:
        """Return the timestamp as an aware datetime in UTC."""
        return _EPOCH + timedelta(microseconds=int(self))

    def to_json(self) -> str:
        """Return the timestamp as an RFC 3339 string in UTC."""
        dt = self.to_datetime()
        text = (
            f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
            f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        )
        if dt.microsecond:
            text += "." + f"{dt.microsecond:06d}".rstrip("0")
        return text + "Z"

    @classmethod
    def from_json(cls, value: object) -> Timestamp:
        """Parse an RFC 3339 string."""
        if not isinstance(value, str):
            raise TypeError(f"expected RFC 3339 string, got {type(value).__name__}")
        return cls(parse_timestamp(value))


# Midnight of the first Monday of year 2000 in UTC (2000-01-03T00:00:00Z).
ORIGIN_TIME = Timestamp(946857600000000)


def as_timestamp(t: datetime) -> Timestamp:
    """Convert a datetime to a Timestamp; naive datetimes are taken as UTC."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return Timestamp((t - _EPOCH) // _MICROSECOND)


def parse_timestamp(text: str) -> Timestamp:
    """Parse an RFC 3339 time, dropping precision below a microsecond."""
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, zone = match.group(7), match.group(8)

    if zone == "Z":
        tz = timezone.utc
    else:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"cannot parse {text!r}: time zone offset out of range")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(offset if zone[0] == "+" else -offset)

    try:
        dt = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"cannot parse {text!r}: {exc}") from exc

    micros = (dt - _EPOCH) // _MICROSECOND
    if fraction:
        micros += int(fraction[:6].ljust(6, "0"))
    return Timestamp(micros)