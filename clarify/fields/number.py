"""Floating point numbers where not-a-number is encoded as JSON null."""

from __future__ import annotations

import math

__all__ = ["Number"]


class Number(float):
    """A float whose NaN value encodes to JSON null."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Number({float(self)!r})"

    def is_nan(self) -> bool:
        return math.isnan(self)

    def to_json(self) -> float | None:
        """Return the value for JSON encoding; NaN becomes None."""
        if math.isnan(self):
            return None
        if math.isinf(self):
            raise ValueError("infinite values can not be encoded as JSON")
        return float(self)

    @classmethod
    def from_json(cls, value: object) -> Number:
        """Decode a JSON number; null gives NaN."""
        if value is None:
            return cls(math.nan)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected JSON number, got {type(value).__name__}")
        return cls(value)