"""Filters for matching resources, combined with logical AND and OR."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from clarify.fields.comparison import Comparison, Comparisons

__all__ = ["ResourceFilter", "and_", "or_", "filter_all"]


@dataclass(frozen=True)
class ResourceFilter:
    """A filter matching resources by field comparisons, AND and OR clauses."""

    all_of: tuple[ResourceFilter, ...] = ()
    any_of: tuple[ResourceFilter, ...] = ()
    paths: Comparisons = field(default_factory=Comparisons)

    def match_all(self) -> bool:
        """Return True if the filter is empty and so matches every resource."""
        return not self.all_of and not self.any_of and not self.paths

    def __str__(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"), ensure_ascii=False)

    def to_json(self) -> dict[str, Any]:
        """Return the filter as a JSON object with keys in sorted order."""
        out: dict[str, Any] = {}
        for path, cmp in self.paths.items():
            if path.startswith("$"):
                raise ValueError(
                    f"path {path!r}: operator prefix ($) not allowed in path filters"
                )
            out[path] = cmp.to_json()
        if self.all_of:
            out["$and"] = [f.to_json() for f in self.all_of]
        if self.any_of:
            out["$or"] = [f.to_json() for f in self.any_of]
        return dict(sorted(out.items()))

    @classmethod
    def from_json(cls, value: object) -> ResourceFilter:
        """Decode a filter object; JSON null matches all resources."""
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")

        all_of = _decode_clauses(value, "$and")
        any_of = _decode_clauses(value, "$or")
        paths = Comparisons()
        for key, raw in value.items():
            if key in ("$and", "$or"):
                continue
            if key.startswith("$"):
                raise ValueError(f"bad conjunction {key!r}")
            paths[key] = Comparison.from_json(raw)

        # Clauses holding a single entry are replaced by that entry.
        if not paths and not any_of and len(all_of) == 1:
            inner = all_of[0]
            return cls(all_of=inner.all_of, any_of=inner.any_of, paths=inner.paths)
        if not paths and not all_of and len(any_of) == 1:
            inner = any_of[0]
            return cls(all_of=inner.all_of, any_of=inner.any_of, paths=inner.paths)
        return cls(all_of=all_of, any_of=any_of, paths=paths)


def _decode_clauses(value: Mapping, key: str) -> tuple[ResourceFilter, ...]:
    raw = value.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"{key}: expected a JSON array")
    return tuple(ResourceFilter.from_json(item) for item in raw)


FilterLike = Union[ResourceFilter, Comparisons]


def _as_filter(f: FilterLike) -> ResourceFilter:
    if isinstance(f, ResourceFilter):
        return f
    if isinstance(f, Mapping):
        return ResourceFilter(paths=Comparisons(f))
    raise TypeError(f"can not use {type(f).__name__} as a resource filter")


def and_(*filters: FilterLike) -> ResourceFilter:
    """Join filters with logical AND, flattening nested AND-only filters."""
    joined: list[ResourceFilter] = []
    for item in filters:
        f = _as_filter(item)
        if not f.any_of and not f.paths:
            joined.extend(f.all_of)
        else:
            joined.append(f)
    if len(joined) == 1:
        return joined[0]
    return ResourceFilter(all_of=tuple(joined))


def or_(*filters: FilterLike) -> ResourceFilter:
    """Join filters with logical OR; any match-all filter makes the result match all."""
    joined: list[ResourceFilter] = []
    for item in filters:
        f = _as_filter(item)
        if f.match_all():
            return ResourceFilter()
        if not f.all_of and not f.paths:
            joined.extend(f.any_of)
        else:
            joined.append(f)
    if len(joined) == 1:
        return joined[0]
    return ResourceFilter(any_of=tuple(joined))


def filter_all() -> ResourceFilter:
    """Return an empty filter, which matches all resources."""
    return ResourceFilter()