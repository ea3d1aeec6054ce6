"""Mapping types for enum values, annotations and labels."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable

__all__ = ["EnumValues", "Annotations", "Labels"]


class EnumValues(dict):
    """Maps integer item values to display strings."""

    def clone(self) -> EnumValues:
        """Return a copy that can be changed without affecting this one."""
        return EnumValues(self)

    def to_json(self) -> dict[str, str]:
        """Return a JSON object; keys become strings in sorted string order."""
        return {
            str(key): value
            for key, value in sorted(self.items(), key=lambda kv: str(kv[0]))
        }


class Annotations(dict):
    """String annotations keyed by name."""

    def get(self, key: str) -> str:  # type: ignore[override]
        """Return the value for ``key``, or an empty string."""
        return super().get(key, "")

    def set(self, key: str, value: str) -> None:
        """Set the annotation ``key`` to ``value``."""
        self[key] = value


class Labels(dict):
    """Maps label keys to sorted lists of distinct values."""

    def clone(self) -> Labels:
        """Return a deep copy of the labels."""
        return Labels({key: list(values) for key, values in self.items()})

    def to_json(self) -> dict[str, list[str]]:
        """Return a JSON object with keys in sorted order."""
        return {key: list(self[key]) for key in sorted(self)}

    def get(self, key: str) -> list[str]:  # type: ignore[override]
        """Return all values for ``key``, or an empty list."""
        return super().get(key, [])

    def set(self, key: str, values: Iterable[str]) -> None:
        """Replace the values of ``key``; duplicates are dropped.

        Without values the key is deleted.
        """
        unique = sorted(set(values))
        if not unique:
            self.pop(key, None)
            return
        self[key] = unique

    def add(self, key: str, value: str) -> None:
        """Add ``value`` to ``key`` unless present; values are kept sorted."""
        current = super().get(key)
        if not current:
            self[key] = [value]
            return
        ordered = sorted(current)
        i = bisect_left(ordered, value)
        if i == len(ordered) or ordered[i] != value:
            ordered.insert(i, value)
        self[key] = ordered

    def remove(self, key: str, value: str) -> None:
        """Remove ``value`` from ``key``; the key is deleted once empty."""
        current = super().get(key)
        if not current:
            self.pop(key, None)
            return
        ordered = sorted(current)
        i = bisect_left(ordered, value)
        if i < len(ordered) and ordered[i] == value:
            del ordered[i]
        if not ordered:
            del self[key]
            return
        self[key] = ordered