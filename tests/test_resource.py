from dataclasses import dataclass
from datetime import datetime, timezone

from clarify.views.resource import Identifier, Meta, NullIdentifier, Resource, ToMany, ToOne


@dataclass
class Attrs:
    name: str

    def to_json(self):
        return {"name": self.name}


def test_null_identifier_empty_is_null():
    assert NullIdentifier().to_json() is None
    assert NullIdentifier.from_json(None) == NullIdentifier()


def test_identifier_round_trip():
    ident = Identifier(type="items", id="abc")
    assert Identifier.from_json(ident.to_json()) == ident


def test_to_one_round_trip():
    rel = ToOne(data=NullIdentifier(type="signals", id="x"))
    assert ToOne.from_json(rel.to_json()) == rel
    assert ToOne().to_json() == {"data": None}


def test_to_many_round_trip():
    rel = ToMany(data=[Identifier("a", "1"), Identifier("b", "2")])
    assert ToMany.from_json(rel.to_json()) == rel


def test_meta_zero_time():
    assert Meta().to_json()["createdAt"] == "0001-01-01T00:00:00Z"


def test_meta_round_trip():
    now = datetime(2022, 1, 1, 12, 30, tzinfo=timezone.utc)
    meta = Meta(created_at=now, updated_at=now)
    assert Meta.from_json(meta.to_json()) == meta


def test_resource_hashes_depend_on_attributes():
    a = Resource(type="t", id="1", attributes=Attrs("x"), relationships={})
    b = Resource(type="t", id="1", attributes=Attrs("y"), relationships={})
    ja, jb = a.to_json(), b.to_json()
    assert len(ja["meta"]["attributesHash"]) == 40
    assert ja["meta"]["attributesHash"] != jb["meta"]["attributesHash"]
    assert ja["meta"]["relationshipsHash"] == jb["meta"]["relationshipsHash"]
    assert ja["attributes"] == {"name": "x"}
    assert a.meta.attributes_hash == b""