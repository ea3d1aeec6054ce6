"""Data frames: series of values keyed by timestamp."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from clarify.fields.number import Number
from clarify.fields.timestamp import Timestamp

__all__ = ["DataSeries", "DataFrame"]


class DataSeries(dict):
    """Maps timestamps to float values."""

    def timestamps(self) -> list[Timestamp]:
        """Return the sorted timestamps that hold a non-NaN value."""
        return sorted(t for t, v in self.items() if not math.isnan(v))


class DataFrame(dict):
    """Maps series keys to data series."""

    def timestamps(self) -> list[Timestamp]:
        """Return sorted timestamps with a non-NaN value in at least one series."""
        return sorted(
            {t for series in self.values() for t, v in series.items() if not math.isnan(v)}
        )

    def to_json(self) -> dict[str, Any]:
        times = self.timestamps()
        series = {
            key: [Number(self[key].get(t, math.nan)).to_json() for t in times]
            for key in sorted(self)
        }
        return {"times": [Timestamp(t).to_json() for t in times], "series": series}

    @classmethod
    def from_json(cls, value: object) -> DataFrame:
        """Decode a frame; extra values beyond the timestamps are dropped."""
        if not isinstance(value, Mapping):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")
        times = [Timestamp.from_json(t) for t in value.get("times") or []]
        frame = cls()
        for key, values in (value.get("series") or {}).items():
            series = DataSeries()
            for t, raw in zip(times, values):
                number = Number.from_json(raw)
                if not number.is_nan():
                    series[t] = float(number)
            frame[key] = series
        return frame