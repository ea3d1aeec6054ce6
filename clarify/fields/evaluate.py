"""Aggregation methods and inputs for evaluating items, groups and formulas."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from clarify.fields.resource_query import ResourceQuery

__all__ = [
    "TimeAggregation",
    "GroupAggregation",
    "EvaluateItem",
    "EvaluateGroup",
    "Calculation",
]

_BAD_METHOD = "bad aggregation method"


class TimeAggregation(IntEnum):
    """How values are aggregated over time within each bucket."""

    DEFAULT = 0
    COUNT = 1
    MIN = 2
    MAX = 3
    SUM = 4
    AVG = 5
    SECONDS = 6
    PERCENT = 7
    RATE = 8

    def to_text(self) -> str:
        return _TIME_TEXT[self]

    @classmethod
    def from_text(cls, text: str) -> TimeAggregation:
        try:
            return _TIME_PARSE[text]
        except KeyError:
            raise ValueError(_BAD_METHOD) from None

    def __str__(self) -> str:
        return self.to_text()

    def is_state(self) -> bool:
        """Return True for aggregations that count a specific state."""
        return self in (TimeAggregation.SECONDS, TimeAggregation.PERCENT, TimeAggregation.RATE)


_TIME_TEXT = {
    TimeAggregation.DEFAULT: "",
    TimeAggregation.COUNT: "count",
    TimeAggregation.MIN: "min",
    TimeAggregation.MAX: "max",
    TimeAggregation.SUM: "sum",
    TimeAggregation.AVG: "avg",
    TimeAggregation.SECONDS: "state-seconds",
    TimeAggregation.PERCENT: "state-percent",
    TimeAggregation.RATE: "state-rate",
}
_TIME_PARSE = {text: member for member, text in _TIME_TEXT.items()}
_TIME_PARSE.update(
    {
        "state-histogram-seconds": TimeAggregation.SECONDS,
        "state-histogram-percent": TimeAggregation.PERCENT,
        "state-histogram-rate": TimeAggregation.RATE,
    }
)


class GroupAggregation(IntEnum):
    """How values from several items in a group are aggregated."""

    DEFAULT = 0
    COUNT = 1
    MIN = 2
    MAX = 3
    SUM = 4
    AVG = 5

    def to_text(self) -> str:
        return _GROUP_TEXT[self]

    @classmethod
    def from_text(cls, text: str) -> GroupAggregation:
        try:
            return _GROUP_PARSE[text]
        except KeyError:
            raise ValueError(_BAD_METHOD) from None

    def __str__(self) -> str:
        return self.to_text()


_GROUP_TEXT = {
    GroupAggregation.DEFAULT: "",
    GroupAggregation.COUNT: "count",
    GroupAggregation.MIN: "min",
    GroupAggregation.MAX: "max",
    GroupAggregation.SUM: "sum",
    GroupAggregation.AVG: "avg",
}
_GROUP_PARSE = {text: member for member, text in _GROUP_TEXT.items()}


def _put_nonzero(out: dict[str, Any], key: str, value: Any) -> None:
    if value:
        out[key] = value


@dataclass
class EvaluateItem:
    """An item to evaluate, referenced by ``alias`` in calculations."""

    alias: str = ""
    id: str = ""
    time_aggregation: TimeAggregation = TimeAggregation.DEFAULT
    state: int = 0
    lead: int = 0
    lag: int = 0

    def to_json(self) -> dict[str, Any]:
        """Encode the item; ``state`` is included only for state aggregations."""
        out: dict[str, Any] = {}
        _put_nonzero(out, "alias", self.alias)
        _put_nonzero(out, "id", self.id)
        _put_nonzero(out, "timeAggregation", self.time_aggregation.to_text())
        if self.time_aggregation.is_state():
            out["state"] = self.state
        _put_nonzero(out, "lead", self.lead)
        _put_nonzero(out, "lag", self.lag)
        return out


@dataclass
class EvaluateGroup:
    """A group of items selected by ``query`` and aggregated together."""

    alias: str = ""
    query: ResourceQuery = field(default_factory=ResourceQuery)
    time_aggregation: TimeAggregation = TimeAggregation.DEFAULT
    group_aggregation: GroupAggregation = GroupAggregation.DEFAULT
    state: int = 0
    lead: int = 0
    lag: int = 0

    def to_json(self) -> dict[str, Any]:
        """Encode the group; ``state`` is included only for state aggregations."""
        out: dict[str, Any] = {}
        _put_nonzero(out, "alias", self.alias)
        out["query"] = self.query.to_json()
        _put_nonzero(out, "timeAggregation", self.time_aggregation.to_text())
        _put_nonzero(out, "groupAggregation", self.group_aggregation.to_text())
        if self.time_aggregation.is_state():
            out["state"] = self.state
        _put_nonzero(out, "lead", self.lead)
        _put_nonzero(out, "lag", self.lag)
        return out


@dataclass
class Calculation:
    """A named formula over item, group and calculation aliases."""

    alias: str
    formula: str

    def to_json(self) -> dict[str, Any]:
        return {"alias": self.alias, "formula": self.formula}