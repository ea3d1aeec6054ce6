"""Summaries and selection results returned by methods."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "SaveSummary",
    "CreateSummary",
    "SelectionFormat",
    "SelectionMeta",
    "Selection",
]


def _obj(value: object) -> Mapping:
    if not isinstance(value, Mapping):
        raise TypeError(f"expected JSON object, got {type(value).__name__}")
    return value


@dataclass
class SaveSummary:
    """Identity of a saved resource and whether it was created or updated."""

    id: str = ""
    created: bool = False
    updated: bool = False

    @classmethod
    def from_json(cls, value: object) -> SaveSummary:
        obj = _obj(value)
        return cls(
            id=str(obj.get("id") or ""),
            created=bool(obj.get("created", False)),
            updated=bool(obj.get("updated", False)),
        )


@dataclass
class CreateSummary:
    """Identity of a resource and whether it was created."""

    id: str = ""
    created: bool = False

    @classmethod
    def from_json(cls, value: object) -> CreateSummary:
        obj = _obj(value)
        return cls(id=str(obj.get("id") or ""), created=bool(obj.get("created", False)))


@dataclass
class SelectionFormat:
    """How a resource selection is formatted."""

    data_as_array: bool = False
    group_included_by_type: bool = False

    def to_json(self) -> dict[str, Any]:
        return {
            "dataAsArray": self.data_as_array,
            "groupIncludedByType": self.group_included_by_type,
        }

    @classmethod
    def from_json(cls, value: object) -> SelectionFormat:
        if value is None:
            return cls()
        obj = _obj(value)
        return cls(
            data_as_array=bool(obj.get("dataAsArray", False)),
            group_included_by_type=bool(obj.get("groupIncludedByType", False)),
        )


@dataclass
class SelectionMeta:
    """Top-level meta information about a selection."""

    total: int = 0
    format: SelectionFormat = field(default_factory=SelectionFormat)

    @classmethod
    def from_json(cls, value: object) -> SelectionMeta:
        if value is None:
            return cls()
        obj = _obj(value)
        total = obj.get("total", 0)
        if isinstance(total, bool) or not isinstance(total, int):
            raise ValueError("total: expected a JSON integer")
        return cls(total=total, format=SelectionFormat.from_json(obj.get("format")))


@dataclass
class Selection:
    """Resource selection results."""

    meta: SelectionMeta = field(default_factory=SelectionMeta)
    data: Any = None
    included: Any = None

    @classmethod
    def from_json(
        cls,
        value: object,
        data: Callable[[Any], Any],
        included: Callable[[Any], Any],
    ) -> Selection:
        """Decode a selection, using ``data`` and ``included`` to decode those parts."""
        obj = _obj(value)
        return cls(
            meta=SelectionMeta.from_json(obj.get("meta")),
            data=data(obj.get("data")),
            included=included(obj.get("included")),
        )