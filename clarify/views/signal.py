"""Signal views."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from clarify.fields.duration import format_fixed_duration, parse_fixed_duration
from clarify.fields.maps import Annotations, EnumValues, Labels
from clarify.views.resource import Resource, ToOne, _annotations, _expect_object

__all__ = [
    "ValueType",
    "SourceType",
    "SignalSaveAttributes",
    "SignalAttributes",
    "SignalRelationships",
    "SignalSave",
    "SignalInclude",
    "Signal",
]


class ValueType(str, Enum):
    """How data values are interpreted."""

    NUMERIC = "numeric"
    ENUM = "enum"


class SourceType(str, Enum):
    """How data values were produced."""

    MEASUREMENT = "measurement"
    AGGREGATION = "aggregation"
    PREDICTION = "prediction"


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _enum_or_text(enum: type[Enum], value: object) -> Any:
    text = "" if value is None else str(value)
    try:
        return enum(text)
    except ValueError:
        return text


def _encode_duration(d: timedelta) -> str | None:
    return format_fixed_duration(d) if d else None


def _decode_duration(value: object) -> timedelta:
    if value is None:
        return timedelta(0)
    if not isinstance(value, str):
        raise TypeError(f"expected duration string, got {type(value).__name__}")
    parsed = parse_fixed_duration(value)
    if isinstance(parsed, timedelta):
        return parsed
    return parsed.duration


def _labels(value: object) -> Labels:
    labels = Labels()
    for key, values in (value or {}).items():
        labels[str(key)] = [str(v) for v in values]
    return labels


def _enum_values(value: object) -> EnumValues:
    return EnumValues({int(k): str(v) for k, v in (value or {}).items()})


def _common_kwargs(obj: Mapping) -> dict[str, Any]:
    return {
        "name": str(obj.get("name") or ""),
        "description": str(obj.get("description") or ""),
        "value_type": _enum_or_text(ValueType, obj.get("valueType")),
        "source_type": _enum_or_text(SourceType, obj.get("sourceType")),
        "eng_unit": str(obj.get("engUnit") or ""),
        "sample_interval": _decode_duration(obj.get("sampleInterval")),
        "gap_detection": _decode_duration(obj.get("gapDetection")),
        "labels": _labels(obj.get("labels")),
        "enum_values": _enum_values(obj.get("enumValues")),
    }


def _common_json(a: Any) -> dict[str, Any]:
    return {
        "name": a.name,
        "description": a.description,
        "valueType": _text(a.value_type),
        "sourceType": _text(a.source_type),
        "engUnit": a.eng_unit,
        "sampleInterval": _encode_duration(a.sample_interval),
        "gapDetection": _encode_duration(a.gap_detection),
        "labels": a.labels.to_json(),
        "enumValues": a.enum_values.to_json(),
    }


@dataclass
class SignalSaveAttributes:
    """Signal attributes that are part of the save view."""

    name: str = ""
    description: str = ""
    value_type: Any = ""
    source_type: Any = ""
    eng_unit: str = ""
    sample_interval: timedelta = timedelta(0)
    gap_detection: timedelta = timedelta(0)
    labels: Labels = field(default_factory=Labels)
    enum_values: EnumValues = field(default_factory=EnumValues)

    def to_json(self) -> dict[str, Any]:
        return _common_json(self)

    @classmethod
    def from_json(cls, value: object) -> SignalSaveAttributes:
        return cls(**_common_kwargs(_expect_object(value)))


@dataclass
class SignalAttributes(SignalSaveAttributes):
    """Signal attributes of the select view, including read-only ones."""

    input: str = ""

    def to_json(self) -> dict[str, Any]:
        out = _common_json(self)
        out["input"] = self.input
        return out

    @classmethod
    def from_json(cls, value: object) -> SignalAttributes:
        obj = _expect_object(value)
        return cls(**_common_kwargs(obj), input=str(obj.get("input") or ""))


@dataclass
class SignalRelationships:
    """Relationships of a signal."""

    integration: ToOne = field(default_factory=ToOne)
    item: ToOne = field(default_factory=ToOne)

    def to_json(self) -> dict[str, Any]:
        return {"integration": self.integration.to_json(), "item": self.item.to_json()}

    @classmethod
    def from_json(cls, value: object) -> SignalRelationships:
        obj = _expect_object(value)
        return cls(
            integration=ToOne.from_json(obj.get("integration")),
            item=ToOne.from_json(obj.get("item")),
        )


@dataclass
class SignalSave(SignalSaveAttributes):
    """The save view of a signal."""

    annotations: Annotations = field(default_factory=Annotations)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.annotations:
            out["annotations"] = dict(sorted(self.annotations.items()))
        out.update(_common_json(self))
        return out

    @classmethod
    def from_json(cls, value: object) -> SignalSave:
        obj = _expect_object(value)
        return cls(
            **_common_kwargs(obj), annotations=_annotations(obj.get("annotations"))
        )


@dataclass
class Signal(Resource):
    """The select view of a signal."""

    attributes: SignalAttributes = field(default_factory=SignalAttributes)
    relationships: SignalRelationships = field(default_factory=SignalRelationships)

    @classmethod
    def from_json(cls, value: object) -> Signal:
        return cls._decode(
            value, SignalAttributes.from_json, SignalRelationships.from_json
        )


@dataclass
class SignalInclude:
    """Resources included with a signal selection."""

    items: list = field(default_factory=list)

    @classmethod
    def from_json(cls, value: object) -> SignalInclude:
        from clarify.views.item import Item

        obj = _expect_object(value or {})
        return cls(items=[Item.from_json(i) for i in obj.get("items") or []])