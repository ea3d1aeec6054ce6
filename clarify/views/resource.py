"""Generic resource views: identifiers, relationships and meta data."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from clarify.fields.binary import Hexadecimal
from clarify.fields.data_filter import _format_time
from clarify.fields.maps import Annotations
from clarify.fields.timestamp import parse_timestamp

__all__ = [
    "MetaSave",
    "Identifier",
    "NullIdentifier",
    "ToOne",
    "ToMany",
    "Meta",
    "Resource",
]

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _expect_object(value: object) -> Mapping:
    if not isinstance(value, Mapping):
        raise TypeError(f"expected JSON object, got {type(value).__name__}")
    return value


def _jsonable(value: Any) -> Any:
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    return value


def _encode_line(value: Any) -> bytes:
    """Encode ``value`` compactly with HTML-safe escaping and a newline."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for raw, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(raw, escaped)
    return (text + "\n").encode("utf-8")


def _format_datetime(t: datetime | None) -> str:
    return _format_time(t if t is not None else _ZERO_TIME)


def _parse_datetime(value: object) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected RFC 3339 string, got {type(value).__name__}")
    t = parse_timestamp(value).to_datetime()
    return None if t == _ZERO_TIME else t


def _annotations(value: object) -> Annotations:
    if value is None:
        return Annotations()
    return Annotations({str(k): str(v) for k, v in _expect_object(value).items()})


@dataclass
class MetaSave:
    """Mutable meta fields of a resource."""

    annotations: Annotations = field(default_factory=Annotations)

    def to_json(self) -> dict[str, Any]:
        if not self.annotations:
            return {}
        return {"annotations": dict(sorted(self.annotations.items()))}


@dataclass
class Identifier:
    """Uniquely identifies a resource entry."""

    type: str = ""
    id: str = ""

    def to_json(self) -> dict[str, Any] | None:
        return {"type": self.type, "id": self.id}

    @classmethod
    def from_json(cls, value: object) -> Identifier:
        obj = _expect_object(value)
        return cls(type=str(obj.get("type") or ""), id=str(obj.get("id") or ""))


@dataclass
class NullIdentifier(Identifier):
    """An identifier whose empty value encodes as JSON null."""

    def to_json(self) -> dict[str, Any] | None:
        if not self.type and not self.id:
            return None
        return super().to_json()

    @classmethod
    def from_json(cls, value: object) -> NullIdentifier:
        if value is None:
            return cls()
        obj = _expect_object(value)
        return cls(type=str(obj.get("type") or ""), id=str(obj.get("id") or ""))


@dataclass
class ToOne:
    """A to-one relationship entry."""

    data: NullIdentifier = field(default_factory=NullIdentifier)
    meta: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.meta:
            out["meta"] = dict(sorted(self.meta.items()))
        out["data"] = self.data.to_json()
        return out

    @classmethod
    def from_json(cls, value: object) -> ToOne:
        if value is None:
            return cls()
        obj = _expect_object(value)
        return cls(
            data=NullIdentifier.from_json(obj.get("data")),
            meta=dict(obj.get("meta") or {}),
        )


@dataclass
class ToMany:
    """A to-many relationship entry."""

    data: list[Identifier] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.meta:
            out["meta"] = dict(sorted(self.meta.items()))
        out["data"] = [i.to_json() for i in self.data]
        return out

    @classmethod
    def from_json(cls, value: object) -> ToMany:
        if value is None:
            return cls()
        obj = _expect_object(value)
        items = obj.get("data") or []
        if not isinstance(items, list):
            raise ValueError("data: expected a JSON array")
        return cls(
            data=[Identifier.from_json(i) for i in items],
            meta=dict(obj.get("meta") or {}),
        )


@dataclass
class Meta:
    """Meta data of a resource select view."""

    annotations: Annotations = field(default_factory=Annotations)
    attributes_hash: Hexadecimal = Hexadecimal()
    relationships_hash: Hexadecimal = Hexadecimal()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.annotations:
            out["annotations"] = dict(sorted(self.annotations.items()))
        if self.attributes_hash:
            out["attributesHash"] = self.attributes_hash.to_json()
        if self.relationships_hash:
            out["relationshipsHash"] = self.relationships_hash.to_json()
        out["createdAt"] = _format_datetime(self.created_at)
        out["updatedAt"] = _format_datetime(self.updated_at)
        return out

    @classmethod
    def from_json(cls, value: object) -> Meta:
        if value is None:
            return cls()
        obj = _expect_object(value)
        return cls(
            annotations=_annotations(obj.get("annotations")),
            attributes_hash=Hexadecimal.from_json(obj.get("attributesHash")),
            relationships_hash=Hexadecimal.from_json(obj.get("relationshipsHash")),
            created_at=_parse_datetime(obj.get("createdAt")),
            updated_at=_parse_datetime(obj.get("updatedAt")),
        )


@dataclass
class Resource:
    """A generic resource select view.

    Encoding sets the attribute and relationship hashes in the encoded meta
    to SHA-1 sums of the encoded attributes and relationships.
    """

    type: str = ""
    id: str = ""
    meta: Meta = field(default_factory=Meta)
    attributes: Any = None
    relationships: Any = None

    def to_json(self) -> dict[str, Any]:
        attrs = _encode_line(_jsonable(self.attributes))
        rels = _encode_line(_jsonable(self.relationships))
        meta = replace(
            self.meta,
            attributes_hash=Hexadecimal(hashlib.sha1(attrs).digest()),
            relationships_hash=Hexadecimal(hashlib.sha1(rels).digest()),
        )
        return {
            "type": self.type,
            "id": self.id,
            "meta": meta.to_json(),
            "attributes": json.loads(attrs),
            "relationships": json.loads(rels),
        }

    @classmethod
    def _decode(
        cls,
        value: object,
        attributes: Callable[[Any], Any],
        relationships: Callable[[Any], Any],
    ) -> Any:
        obj = _expect_object(value)
        return cls(
            type=str(obj.get("type") or ""),
            id=str(obj.get("id") or ""),
            meta=Meta.from_json(obj.get("meta")),
            attributes=attributes(obj.get("attributes") or {}),
            relationships=relationships(obj.get("relationships") or {}),
        )