"""Filters that reduce the data returned by data methods."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from clarify.fields.timestamp import parse_timestamp

__all__ = ["DataFilter", "data_and", "time_range", "series_in"]

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _normalize_time(t: datetime | None) -> datetime | None:
    """Make ``t`` aware (naive means UTC); the zero time becomes None."""
    if t is None:
        return None
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    if t == _ZERO_TIME:
        return None
    return t


def _format_time(t: datetime) -> str:
    """Format ``t`` as RFC 3339 with trailing fraction zeros removed."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    if t.microsecond:
        text += "." + f"{t.microsecond:06d}".rstrip("0")
    offset = t.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    minutes = offset // timedelta(minutes=1)
    sign = "+" if minutes > 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _parse_time(value: object) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected RFC 3339 string, got {type(value).__name__}")
    return _normalize_time(parse_timestamp(value).to_datetime())


@dataclass(frozen=True)
class DataFilter:
    """Restricts data to a time range and a set of series keys.

    ``None`` for a time bound means unbounded, and ``None`` for ``series``
    means all series.
    """

    gte: datetime | None = None
    lt: datetime | None = None
    series: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "gte", _normalize_time(self.gte))
        object.__setattr__(self, "lt", _normalize_time(self.lt))
        if self.series is not None:
            object.__setattr__(self, "series", tuple(self.series))

    def to_json(self) -> dict[str, Any]:
        series: dict[str, Any] = {}
        if self.series:
            series["$in"] = list(self.series)
        return {
            "times": {
                "$gte": _format_time(self.gte or _ZERO_TIME),
                "$lt": _format_time(self.lt or _ZERO_TIME),
            },
            "series": series,
        }

    @classmethod
    def from_json(cls, value: object) -> DataFilter:
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")
        times = value.get("times") or {}
        series = value.get("series") or {}
        if not isinstance(times, Mapping) or not isinstance(series, Mapping):
            raise TypeError("times and series must be JSON objects")
        keys = series.get("$in")
        if keys is not None and (
            not isinstance(keys, list) or not all(isinstance(k, str) for k in keys)
        ):
            raise ValueError("series.$in: expected a JSON array of strings")
        return cls(
            gte=_parse_time(times.get("$gte")),
            lt=_parse_time(times.get("$lt")),
            series=None if keys is None else tuple(keys),
        )


def data_and(*filters: DataFilter) -> DataFilter:
    """Join data filters with logical AND.

    The latest lower bound, the earliest upper bound and the intersection of
    series keys are kept.
    """
    gte: datetime | None = None
    lt: datetime | None = None
    series: tuple[str, ...] | None = None
    for f in filters:
        if f.gte is not None and (gte is None or f.gte > gte):
            gte = f.gte
        if f.lt is not None and (lt is None or f.lt < lt):
            lt = f.lt
        if f.series is None:
            continue
        if series is None:
            series = f.series
        else:
            series = tuple(key for key in series if key in f.series)
    return DataFilter(gte=gte, lt=lt, series=series)


def time_range(gte: datetime | None, lt: datetime | None) -> DataFilter:
    """Return a filter matching times in the range [gte, lt)."""
    return DataFilter(gte=gte, lt=lt)


def series_in(*keys: str) -> DataFilter:
    """Return a filter keeping only the series with the given keys."""
    return DataFilter(series=tuple(keys) if keys else None)