from clarify.fields.maps import Annotations, EnumValues, Labels
from clarify.views.resource import NullIdentifier
from clarify.views.signal import (
    Signal,
    SignalAttributes,
    SignalSave,
    SignalSaveAttributes,
    SourceType,
    ValueType,
)


def test_enum_values():
    assert ValueType("enum") is ValueType.ENUM
    assert SourceType("prediction") is SourceType.PREDICTION


def test_save_attributes_round_trip():
    attrs = SignalSaveAttributes(
        name="n",
        value_type=ValueType.NUMERIC,
        labels=Labels({"loc": ["a", "b"]}),
        enum_values=EnumValues({1: "one"}),
    )
    assert SignalSaveAttributes.from_json(attrs.to_json()) == attrs


def test_empty_durations_encode_null():
    out = SignalSaveAttributes().to_json()
    assert out["sampleInterval"] is None
    assert out["gapDetection"] is None


def test_signal_save_annotations_first():
    save = SignalSave(name="n", annotations=Annotations({"k": "v"}))
    out = save.to_json()
    assert list(out)[0] == "annotations"
    assert SignalSave.from_json(out) == save


def test_signal_from_json():
    doc = {
        "type": "signals",
        "id": "s1",
        "meta": {},
        "attributes": {"name": "sig", "input": "in", "valueType": "enum"},
        "relationships": {"item": {"data": {"type": "items", "id": "i1"}}},
    }
    signal = Signal.from_json(doc)
    assert signal.id == "s1"
    assert signal.attributes == SignalAttributes(name="sig", input="in", value_type=ValueType.ENUM)
    assert signal.relationships.item.data == NullIdentifier("items", "i1")
    assert signal.relationships.integration.data.to_json() is None