"""Data queries: filter, rollup, time zone and point limits."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, tzinfo
from typing import Any

from clarify.fields.data_filter import DataFilter, _format_time, data_and
from clarify.fields.duration import format_fixed_duration, month_duration_null_zero

__all__ = ["DataQuery", "data"]


@dataclass(frozen=True)
class DataQuery:
    """An immutable data query; every method returns a new query."""

    _filter: DataFilter = field(default_factory=DataFilter)
    _rollup: str = ""
    _last: int = 0
    _origin: str = ""
    _first_day_of_week: int = 0
    _time_zone: str = ""

    def origin(self, o: datetime) -> DataQuery:
        """Return a query with a custom rollup bucket origin.

        The origin takes precedence over the first day of week.
        """
        return replace(self, _origin=_format_time(o))

    def rollup_window(self) -> DataQuery:
        """Return a query with a window based rollup."""
        return replace(self, _rollup="window")

    def rollup_duration(self, d: timedelta, first_day_of_week: int) -> DataQuery:
        """Return a query with fixed duration rollup buckets.

        ``first_day_of_week`` counts from Monday as 0 to Sunday as 6, like
        ``datetime.weekday()``.
        """
        iso_day = first_day_of_week % 7 + 1
        return replace(
            self, _rollup=format_fixed_duration(d), _first_day_of_week=iso_day
        )

    def rollup_months(self, months: int) -> DataQuery:
        """Return a query with calendar month rollup buckets."""
        return replace(self, _rollup=str(month_duration_null_zero(months)))

    def time_zone_location(self, tz: tzinfo | None) -> DataQuery:
        """Return a query using the time zone name of ``tz``; None means UTC."""
        if tz is None:
            return self.time_zone("UTC")
        return self.time_zone(getattr(tz, "key", None) or str(tz))

    def time_zone(self, name: str) -> DataQuery:
        """Return a query using the TZ database zone ``name``."""
        return replace(self, _time_zone=name)

    def where(self, filter: DataFilter) -> DataQuery:
        """Return a query whose filter is joined with ``filter`` by logical AND."""
        return replace(self, _filter=data_and(self._filter, filter))

    def last(self, n: int) -> DataQuery:
        """Return a query keeping only the last ``n`` points per series.

        A value of zero or less applies no limit.
        """
        return replace(self, _last=n)

    def __str__(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"), ensure_ascii=False)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"filter": self._filter.to_json()}
        if self._rollup:
            out["rollup"] = self._rollup
        if self._last:
            out["last"] = self._last
        if self._origin:
            out["origin"] = self._origin
        if self._first_day_of_week:
            out["firstDayOfWeek"] = self._first_day_of_week
        if self._time_zone:
            out["timeZone"] = self._time_zone
        return out

    @classmethod
    def from_json(cls, value: object) -> DataQuery:
        if not isinstance(value, Mapping):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")
        strings = {key: value.get(key, "") for key in ("rollup", "origin", "timeZone")}
        for key, text in strings.items():
            if not isinstance(text, str):
                raise ValueError(f"{key}: expected a JSON string")
        integers = {key: value.get(key, 0) for key in ("last", "firstDayOfWeek")}
        for key, number in integers.items():
            if isinstance(number, bool) or not isinstance(number, int):
                raise ValueError(f"{key}: expected a JSON integer")
        return cls(
            _filter=DataFilter.from_json(value.get("filter")),
            _rollup=strings["rollup"],
            _last=integers["last"],
            _origin=strings["origin"],
            _first_day_of_week=integers["firstDayOfWeek"],
            _time_zone=strings["timeZone"],
        )


def data() -> DataQuery:
    """Return a new, empty data query."""
    return DataQuery()