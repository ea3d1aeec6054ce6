"""Item views."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from clarify.fields.maps import Annotations
from clarify.views.resource import Resource, ToOne, _annotations, _expect_object
from clarify.views.signal import Signal, _common_json, _common_kwargs

__all__ = [
    "ItemSaveAttributes",
    "ItemAttributes",
    "ItemRelationships",
    "ItemSave",
    "Item",
    "published_item",
]


@dataclass
class ItemSaveAttributes:
    """Item attributes that are part of the save view."""

    name: str = ""
    description: str = ""
    value_type: Any = ""
    source_type: Any = ""
    eng_unit: str = ""
    sample_interval: Any = None
    gap_detection: Any = None
    labels: Any = None
    enum_values: Any = None
    visible: bool = False

    def __post_init__(self) -> None:
        from datetime import timedelta

        from clarify.fields.maps import EnumValues, Labels

        if self.sample_interval is None:
            self.sample_interval = timedelta(0)
        if self.gap_detection is None:
            self.gap_detection = timedelta(0)
        if self.labels is None:
            self.labels = Labels()
        if self.enum_values is None:
            self.enum_values = EnumValues()

    def to_json(self) -> dict[str, Any]:
        out = _common_json(self)
        out["visible"] = self.visible
        return out

    @classmethod
    def _kwargs(cls, value: object) -> dict[str, Any]:
        obj = _expect_object(value)
        return {**_common_kwargs(obj), "visible": bool(obj.get("visible", False))}

    @classmethod
    def from_json(cls, value: object) -> ItemSaveAttributes:
        return cls(**cls._kwargs(value))


@dataclass
class ItemAttributes(ItemSaveAttributes):
    """Item attributes of the select view."""


@dataclass
class ItemRelationships:
    """Relationships of an item."""

    created_by: ToOne = field(default_factory=ToOne)
    updated_by: ToOne = field(default_factory=ToOne)
    organization: ToOne = field(default_factory=ToOne)

    def to_json(self) -> dict[str, Any]:
        return {
            "createdBy": self.created_by.to_json(),
            "updatedBy": self.updated_by.to_json(),
            "organization": self.organization.to_json(),
        }

    @classmethod
    def from_json(cls, value: object) -> ItemRelationships:
        obj = _expect_object(value)
        return cls(
            created_by=ToOne.from_json(obj.get("createdBy")),
            updated_by=ToOne.from_json(obj.get("updatedBy")),
            organization=ToOne.from_json(obj.get("organization")),
        )


@dataclass
class ItemSave(ItemSaveAttributes):
    """The save view of an item."""

    annotations: Annotations = field(default_factory=Annotations)

    def to_json(self) -> dict[str, Any]:
        out = super().to_json()
        if self.annotations:
            out["annotations"] = dict(sorted(self.annotations.items()))
        return out

    @classmethod
    def from_json(cls, value: object) -> ItemSave:
        obj = _expect_object(value)
        return cls(**cls._kwargs(obj), annotations=_annotations(obj.get("annotations")))


@dataclass
class Item(Resource):
    """The select view of an item."""

    attributes: ItemAttributes = field(default_factory=ItemAttributes)
    relationships: ItemRelationships = field(default_factory=ItemRelationships)

    @classmethod
    def from_json(cls, value: object) -> Item:
        return cls._decode(value, ItemAttributes.from_json, ItemRelationships.from_json)


def published_item(signal: Signal, *transforms: Callable[[ItemSave], None]) -> ItemSave:
    """Build a hidden item save view from ``signal``, then run ``transforms`` in order."""
    a = signal.attributes
    item = ItemSave(
        name=a.name,
        description=a.description,
        value_type=a.value_type,
        source_type=a.source_type,
        eng_unit=a.eng_unit,
        sample_interval=a.sample_interval,
        gap_detection=a.gap_detection,
        labels=a.labels.clone(),
        enum_values=a.enum_values.clone(),
        visible=False,
    )
    for transform in transforms:
        transform(item)
    return item