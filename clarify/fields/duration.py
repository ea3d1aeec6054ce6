"""RFC 3339 durations: calendar durations in months and fixed durations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal

from clarify.fields.errors import (
    BadCalendarDurationError,
    BadFixedDurationError,
    MixedCalendarDurationError,
)
from clarify.fields.timestamp import Timestamp, as_timestamp

__all__ = [
    "CalendarDuration",
    "CalendarDurationNullZero",
    "FixedDuration",
    "FixedDurationNullZero",
    "month_duration",
    "fixed_calendar_duration",
    "month_duration_null_zero",
    "fixed_calendar_duration_null_zero",
    "parse_calendar_duration",
    "parse_fixed_duration",
    "format_fixed_duration",
]

_MICROSECOND = timedelta(microseconds=1)
_TIME_PART = (
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<fractions>\d+(?:\.\d+)?)S)?)?"
)
_YEAR_TO_FRACTION = re.compile(
    r"(?P<sign>-)?P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?" + _TIME_PART,
    re.ASCII,
)
_WEEK_TO_FRACTION = re.compile(
    r"(?P<sign>-)?P(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?" + _TIME_PART,
    re.ASCII,
)


def _fixed_micros(match: re.Match) -> int:
    """Sum the week-to-fraction components of a match as microseconds."""

    def whole(name: str) -> int:
        return int(match.group(name) or 0)

    micros = (
        whole("weeks") * 7 * 86_400_000_000
        + whole("days") * 86_400_000_000
        + whole("hours") * 3_600_000_000
        + whole("minutes") * 60_000_000
    )
    fractions = match.group("fractions")
    if fractions:
        micros += int(float(fractions) * 1e9) // 1000
    return micros


def _parse_year_to_fraction(s: str) -> CalendarDuration | None:
    match = _YEAR_TO_FRACTION.fullmatch(s.upper())
    if match is None:
        return None
    months = 12 * int(match.group("years") or 0) + int(match.group("months") or 0)
    micros = _fixed_micros(match)
    if months == 0 and micros == 0:
        return None
    sign = -1 if match.group("sign") else 1
    try:
        duration = timedelta(microseconds=sign * micros)
    except OverflowError:
        return None
    return CalendarDuration(months=sign * months, duration=duration)


def _parse_week_to_fraction(s: str) -> timedelta | None:
    match = _WEEK_TO_FRACTION.fullmatch(s.upper())
    if match is None:
        return None
    sign = -1 if match.group("sign") else 1
    try:
        return timedelta(microseconds=sign * _fixed_micros(match))
    except OverflowError:
        return None


def format_fixed_duration(d: timedelta) -> str:
    """Format ``d`` as an RFC 3339 duration using hours, minutes and seconds."""
    micros = d // _MICROSECOND
    prefix = "PT"
    if micros < 0:
        micros = -micros
        prefix = "-PT"
    parts = [prefix]
    hours, micros = divmod(micros, 3_600_000_000)
    if hours:
        parts.append(f"{hours}H")
    minutes, micros = divmod(micros, 60_000_000)
    if minutes:
        parts.append(f"{minutes}M")
    if micros:
        seconds = Decimal(micros).scaleb(-6).normalize()
        parts.append(f"{seconds:f}S")
    return "".join(parts)


def _format_calendar_duration(cd: CalendarDuration) -> str:
    if cd.months and cd.duration:
        raise ValueError("can't specify both months and duration")
    if cd.months:
        months = cd.months
        text = "P"
        if months < 0:
            text, months = "-P", -months
        years, months = divmod(months, 12)
        if years:
            text += f"{years}Y"
        if months:
            text += f"{months}M"
        return text
    if cd.duration:
        return format_fixed_duration(cd.duration)
    return "PT0S"


def _add_months(t: datetime, months: int) -> datetime:
    """Add calendar months, letting day overflow roll into the next month."""
    year, month0 = divmod(t.year * 12 + t.month - 1 + months, 12)
    return t.replace(year=year, month=month0 + 1, day=1) + timedelta(days=t.day - 1)


@dataclass(frozen=True)
class CalendarDuration:
    """A duration of either whole months or a fixed length of time."""

    months: int = 0
    duration: timedelta = field(default_factory=timedelta)

    def is_zero(self) -> bool:
        return self.months == 0 and not self.duration

    def add_to_time(self, t: datetime) -> datetime:
        """Add the duration to ``t``; months follow the calendar of ``t``."""
        if self.months:
            t = _add_months(t, self.months)
        if self.duration:
            if t.tzinfo is None:
                t = t + self.duration
            else:
                t = (t.astimezone(timezone.utc) + self.duration).astimezone(t.tzinfo)
        return t

    def add_to_timestamp(self, t: Timestamp, tz: tzinfo | None) -> Timestamp:
        """Add the duration to ``t``; months follow the calendar in ``tz``."""
        if self.months:
            local = t.to_datetime().astimezone(tz or timezone.utc)
            t = as_timestamp(_add_months(local, self.months))
        if self.duration:
            return Timestamp(t + self.duration // _MICROSECOND)
        return Timestamp(t)

    def __str__(self) -> str:
        try:
            return _format_calendar_duration(self)
        except ValueError:
            return ""

    def to_json(self) -> str | None:
        return _format_calendar_duration(self)

    @classmethod
    def from_json(cls, value: object) -> CalendarDuration:
        if not isinstance(value, str):
            raise TypeError(f"expected duration string, got {type(value).__name__}")
        parsed = _parse_year_to_fraction(value)
        if parsed is None:
            raise BadCalendarDurationError()
        if parsed.months and parsed.duration:
            raise MixedCalendarDurationError()
        return cls(months=parsed.months, duration=parsed.duration)


@dataclass(frozen=True)
class CalendarDurationNullZero(CalendarDuration):
    """A calendar duration whose zero value is encoded as JSON null."""

    def __str__(self) -> str:
        if self.is_zero():
            return ""
        return super().__str__()

    def to_json(self) -> str | None:
        if self.is_zero():
            return None
        return _format_calendar_duration(self)

    @classmethod
    def from_json(cls, value: object) -> CalendarDurationNullZero:
        if value is None:
            return cls()
        if not isinstance(value, str):
            raise TypeError(f"expected duration string, got {type(value).__name__}")
        parsed = _parse_year_to_fraction(value)
        if parsed is None:
            raise BadCalendarDurationError()
        return cls(months=parsed.months, duration=parsed.duration)


def month_duration(months: int) -> CalendarDuration:
    """Return a calendar duration spanning ``months`` months."""
    return CalendarDuration(months=months)


def fixed_calendar_duration(d: timedelta) -> CalendarDuration:
    """Return a calendar duration spanning the fixed duration ``d``."""
    return CalendarDuration(duration=d)


def month_duration_null_zero(months: int) -> CalendarDurationNullZero:
    """Return a null-zero calendar duration spanning ``months`` months."""
    return CalendarDurationNullZero(months=months)


def fixed_calendar_duration_null_zero(d: timedelta) -> CalendarDurationNullZero:
    """Return a null-zero calendar duration spanning the fixed duration ``d``."""
    return CalendarDurationNullZero(duration=d)


def parse_calendar_duration(s: str) -> CalendarDuration:
    """Parse an RFC 3339 duration in the range year to fraction."""
    parsed = _parse_year_to_fraction(s)
    if parsed is None:
        raise BadCalendarDurationError()
    return parsed


@dataclass(frozen=True)
class FixedDuration:
    """A fixed duration encoded as an RFC 3339 duration string."""

    duration: timedelta = field(default_factory=timedelta)

    def __str__(self) -> str:
        return format_fixed_duration(self.duration)

    def to_json(self) -> str | None:
        return format_fixed_duration(self.duration)

    @classmethod
    def from_json(cls, value: object) -> FixedDuration:
        if not isinstance(value, str):
            raise TypeError(f"expected duration string, got {type(value).__name__}")
        parsed = _parse_week_to_fraction(value)
        if parsed is None:
            raise BadFixedDurationError()
        return cls(parsed)


@dataclass(frozen=True)
class FixedDurationNullZero(FixedDuration):
    """A fixed duration whose zero value is encoded as JSON null."""

    def to_json(self) -> str | None:
        if not self.duration:
            return None
        return format_fixed_duration(self.duration)

    @classmethod
    def from_json(cls, value: object) -> FixedDurationNullZero:
        if value is None:
            return cls()
        return super().from_json(value)


def parse_fixed_duration(s: str) -> FixedDurationNullZero:
    """Parse an RFC 3339 duration in the range week to fraction."""
    parsed = _parse_week_to_fraction(s)
    if parsed is None:
        raise BadFixedDurationError()
    return FixedDurationNullZero(parsed)