"""Resource queries: filter, sort order and paging."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from clarify.fields.resource_filter import FilterLike, ResourceFilter, and_

__all__ = ["ResourceQuery", "DEFAULT_QUERY_LIMIT", "query"]

DEFAULT_QUERY_LIMIT = 50


@dataclass(frozen=True)
class ResourceQuery:
    """An immutable resource query; every method returns a new query."""

    _filter: ResourceFilter = field(default_factory=ResourceFilter)
    _sort: tuple[str, ...] = ()
    _limit: int = 0
    _limit_set: bool = False
    _skip: int = 0
    _total: bool = False

    def where(self, filter: FilterLike) -> ResourceQuery:
        """Return a query whose filter is joined with ``filter`` by logical AND."""
        return replace(self, _filter=and_(self._filter, filter))

    def sort(self, *fields: str) -> ResourceQuery:
        """Return a query that also sorts by ``fields``; prefix "-" for descending."""
        return replace(self, _sort=self._sort + tuple(fields))

    def skip(self, n: int) -> ResourceQuery:
        """Return a query that skips the first ``n`` matches."""
        return replace(self, _skip=n)

    def limit(self, n: int) -> ResourceQuery:
        """Return a query limited to ``n`` results; -1 means the maximum allowed."""
        return replace(self, _limit=n, _limit_set=True)

    def skip_value(self) -> int:
        return self._skip

    def limit_value(self) -> int:
        return self._limit if self._limit_set else DEFAULT_QUERY_LIMIT

    def next_page(self) -> ResourceQuery:
        """Return a query whose skip value is advanced by the limit."""
        return replace(self, _skip=self._skip + self.limit_value())

    def total(self, force: bool) -> ResourceQuery:
        """Return a query that forces a total count when ``force`` is true."""
        return replace(self, _total=force)

    def __str__(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"), ensure_ascii=False)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"filter": self._filter.to_json()}
        if self._sort:
            out["sort"] = list(self._sort)
        out["limit"] = self.limit_value()
        out["skip"] = self._skip
        out["total"] = self._total
        return out

    @classmethod
    def from_json(cls, value: object) -> ResourceQuery:
        if not isinstance(value, Mapping):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")
        sort = value.get("sort") or []
        if not isinstance(sort, list) or not all(isinstance(s, str) for s in sort):
            raise ValueError("sort: expected a JSON array of strings")
        limit = value.get("limit", DEFAULT_QUERY_LIMIT)
        skip = value.get("skip", 0)
        for name, number in (("limit", limit), ("skip", skip)):
            if isinstance(number, bool) or not isinstance(number, int):
                raise ValueError(f"{name}: expected a JSON integer")
        total = value.get("total", False)
        if not isinstance(total, bool):
            raise ValueError("total: expected a JSON boolean")
        return cls(
            _filter=ResourceFilter.from_json(value.get("filter")),
            _sort=tuple(sort),
            _limit=limit,
            _limit_set=True,
            _skip=skip,
            _total=total,
        )


def query() -> ResourceQuery:
    """Return a new query matching all resources."""
    return ResourceQuery()