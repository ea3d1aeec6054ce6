import pytest

from clarify.fields.comparison import Comparisons, compare_field, equal, in_
from clarify.fields.resource_filter import (
    ResourceFilter,
    and_,
    filter_all,
    or_,
)


@pytest.mark.parametrize(
    "f, expect",
    [
        (filter_all(), "{}"),
        (
            and_(filter_all(), compare_field("id", equal("a"))),
            '{"id":{"$in":["a"]}}',
        ),
        (
            and_(filter_all(), compare_field("id", in_("a", "b"))),
            '{"id":{"$in":["a","b"]}}',
        ),
        (
            or_(filter_all(), compare_field("id", equal("a"))),
            "{}",
        ),
    ],
)
def test_filter_string(f, expect):
    assert str(f) == expect


def test_match_all():
    assert filter_all().match_all() is True
    assert and_(compare_field("id", equal("a"))).match_all() is False


def test_and_without_filters_matches_all():
    assert and_().match_all() is True


def test_and_two_paths():
    f = and_(compare_field("a", equal("x")), compare_field("b", equal("y")))
    assert f.to_json() == {
        "$and": [{"a": {"$in": ["x"]}}, {"b": {"$in": ["y"]}}]
    }


def test_or_two_paths():
    f = or_(compare_field("a", equal("x")), compare_field("b", equal("y")))
    assert f.to_json() == {
        "$or": [{"a": {"$in": ["x"]}}, {"b": {"$in": ["y"]}}]
    }


def test_and_flattens_nested_and():
    a = compare_field("a", equal("x"))
    b = compare_field("b", equal("y"))
    c = compare_field("c", equal("z"))
    f = and_(and_(a, b), c)
    assert len(f.all_of) == 3
    assert f.any_of == ()


def test_or_flattens_nested_or():
    a = compare_field("a", equal("x"))
    b = compare_field("b", equal("y"))
    c = compare_field("c", equal("z"))
    f = or_(or_(a, b), c)
    assert len(f.any_of) == 3
    assert f.all_of == ()


def test_operator_path_rejected():
    f = ResourceFilter(paths=Comparisons({"$bad": equal("a")}))
    with pytest.raises(ValueError):
        f.to_json()


def test_round_trip():
    f = or_(
        compare_field("a", equal("x")),
        and_(compare_field("b", in_("y", "z")), compare_field("c", equal(True))),
    )
    assert ResourceFilter.from_json(f.to_json()) == f


def test_from_json_bad_conjunction():
    with pytest.raises(ValueError):
        ResourceFilter.from_json({"$not": {}})


def test_from_json_simplifies_single_and():
    f = ResourceFilter.from_json({"$and": [{"id": {"$in": ["a"]}}]})
    assert f == ResourceFilter.from_json({"id": {"$in": ["a"]}})
    assert f.all_of == ()
    assert str(f) == '{"id":{"$in":["a"]}}'


def test_from_json_null_matches_all():
    assert ResourceFilter.from_json(None).match_all() is True


def test_from_json_equality_shorthand():
    f = ResourceFilter.from_json({"id": "a"})
    assert f.paths["id"] == equal("a")


def test_keys_sorted():
    f = ResourceFilter(
        paths=Comparisons({"name": equal("n"), "id": equal("a")})
    )
    assert list(f.to_json()) == ["id", "name"]