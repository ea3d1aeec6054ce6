"""Field comparisons used in resource filters."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

__all__ = [
    "Comparison",
    "Comparisons",
    "compare_field",
    "merge_operators",
    "equal",
    "not_equal",
    "in_",
    "not_in",
    "greater",
    "greater_or_equal",
    "less",
    "less_or_equal",
    "range_",
    "regex",
]

_LIST_KEYS = ("$in", "$nin")
_VALUE_KEYS = ("$gt", "$gte", "$lt", "$lte")
_KEY_ORDER = _LIST_KEYS + _VALUE_KEYS + ("$regex",)

_SIMPLE_START = '"0123456789.tfn'
_ORDERED_START = '"0123456789.'

_Ops = dict[str, Any]


def _encode(v: object) -> tuple[str, Any]:
    to_json = getattr(v, "to_json", None)
    if callable(to_json):
        v = to_json()
    try:
        text = json.dumps(v, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"can not encode {v!r} as JSON: {exc}") from exc
    return text, json.loads(text)


def _simple_json(v: object) -> Any:
    text, value = _encode(v)
    if not text or text[0] not in _SIMPLE_START:
        raise ValueError(
            "does not marshal to simple JSON type (string, number, bool or null)"
        )
    return value


def _ordered_json(v: object) -> Any:
    text, value = _encode(v)
    if not text or text[0] not in _ORDERED_START:
        raise ValueError("does not marshal to sortable JSON type (string or number)")
    return value


def _normalize(ops: _Ops | None) -> _Ops | None:
    """Reduce operator sets equivalent to "equal null" to None."""
    if ops is None:
        return None
    if any(key != "$in" for key in ops):
        return ops
    values = ops.get("$in")
    if values is None:
        return None
    if len(values) == 1 and values[0] is None:
        return None
    return ops


class Comparison:
    """Compares a value with one or more operators.

    A comparison built with no arguments is equivalent to ``equal(None)``.
    """

    __slots__ = ("_ops",)

    def __init__(self) -> None:
        self._ops: _Ops | None = None

    @classmethod
    def _from_ops(cls, ops: _Ops | None) -> Comparison:
        cmp = cls()
        cmp._ops = ops
        return cmp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Comparison):
            return NotImplemented
        return _normalize(self._ops) == _normalize(other._ops)

    def __repr__(self) -> str:
        return f"Comparison({self})"

    def __str__(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"), ensure_ascii=False)

    def to_json(self) -> dict[str, Any] | None:
        """Return the operator object, or None for an equal-null comparison."""
        ops = _normalize(self._ops)
        if ops is None:
            return None
        out: dict[str, Any] = {}
        for key in _KEY_ORDER:
            if key not in ops:
                continue
            value = ops[key]
            if key in _LIST_KEYS:
                if value:
                    out[key] = list(value)
            else:
                out[key] = value
        return out

    @classmethod
    def from_json(cls, value: object) -> Comparison:
        """Decode an operator object, or treat any other value as equality."""
        if not isinstance(value, Mapping):
            return cls._from_ops(_normalize({"$in": (value,)}))

        ops: _Ops = {}
        for key in _LIST_KEYS:
            items = value.get(key)
            if items is None:
                continue
            if not isinstance(items, list):
                raise ValueError(f"{key}: expected a JSON array")
            ops[key] = tuple(items)
        for key in _VALUE_KEYS:
            if key in value:
                ops[key] = value[key]
        pattern = value.get("$regex")
        if pattern is not None:
            if not isinstance(pattern, str):
                raise ValueError("$regex: expected a JSON string")
            if pattern:
                ops["$regex"] = pattern
        if "$ne" in value:
            ops["$nin"] = ops.get("$nin", ()) + (value["$ne"],)
        return cls._from_ops(_normalize(ops))


class Comparisons(dict):
    """Maps field paths to the comparison each path must satisfy."""

    def to_json(self) -> dict[str, Any]:
        return {path: self[path].to_json() for path in sorted(self)}


def compare_field(path: str, cmp: Comparison) -> Comparisons:
    """Return a filter comparing a single field path."""
    return Comparisons({path: cmp})


def merge_operators(*cmps: Comparison) -> Comparison:
    """Merge comparisons into one; on conflicting operators the last one wins.

    ``equal`` and ``in_`` share ``$in``, ``not_equal`` and ``not_in`` share
    ``$nin``, and ``range_`` shares ``$gte`` and ``$lt`` with
    ``greater_or_equal`` and ``less``.
    """
    target: _Ops = {}
    for cmp in cmps:
        ops = cmp._ops
        if ops is None:
            target["$in"] = (None,)
            continue
        for key in _LIST_KEYS:
            if ops.get(key):
                target[key] = ops[key]
        for key in _VALUE_KEYS:
            if key in ops:
                target[key] = ops[key]
        if ops.get("$regex"):
            target["$regex"] = ops["$regex"]
    return Comparison._from_ops(_normalize(target))


def equal(v: object) -> Comparison:
    """Match values equal to ``v``, a string, non-negative number, bool or None."""
    return Comparison._from_ops(_normalize({"$in": (_simple_json(v),)}))


def not_equal(v: object) -> Comparison:
    """Match values not equal to ``v``."""
    return Comparison._from_ops({"$nin": (_simple_json(v),)})


def in_(*elements: object) -> Comparison:
    """Match values equal to any of ``elements``."""
    values = tuple(_simple_json(e) for e in elements)
    return Comparison._from_ops(_normalize({"$in": values}))


def not_in(*elements: object) -> Comparison:
    """Match values equal to none of ``elements``."""
    return Comparison._from_ops({"$nin": tuple(_simple_json(e) for e in elements)})


def greater(gt: object) -> Comparison:
    """Match values > ``gt``, a string or non-negative number."""
    return Comparison._from_ops({"$gt": _ordered_json(gt)})


def greater_or_equal(gte: object) -> Comparison:
    """Match values >= ``gte``."""
    return Comparison._from_ops({"$gte": _ordered_json(gte)})


def less(lt: object) -> Comparison:
    """Match values < ``lt``."""
    return Comparison._from_ops({"$lt": _ordered_json(lt)})


def less_or_equal(lte: object) -> Comparison:
    """Match values <= ``lte``."""
    return Comparison._from_ops({"$lte": _ordered_json(lte)})


def range_(gte: object, lt: object) -> Comparison:
    """Match values in the half-open range [gte, lt)."""
    return Comparison._from_ops(
        {"$gte": _ordered_json(gte), "$lt": _ordered_json(lt)}
    )


def regex(pattern: str) -> Comparison:
    """Match values that match the regular expression ``pattern``."""
    return Comparison._from_ops({"$regex": pattern} if pattern else {})