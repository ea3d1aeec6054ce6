import pytest

from clarify.fields.evaluate import (
    Calculation,
    EvaluateGroup,
    EvaluateItem,
    GroupAggregation,
    TimeAggregation,
)
from clarify.fields.resource_query import query


@pytest.mark.parametrize("member", list(TimeAggregation))
def test_time_aggregation_round_trip(member):
    assert TimeAggregation.from_text(member.to_text()) is member


@pytest.mark.parametrize("member", list(GroupAggregation))
def test_group_aggregation_round_trip(member):
    assert GroupAggregation.from_text(member.to_text()) is member


def test_time_aggregation_text():
    assert TimeAggregation.SECONDS.to_text() == "state-seconds"
    assert TimeAggregation.DEFAULT.to_text() == ""
    assert str(TimeAggregation.AVG) == "avg"


@pytest.mark.parametrize(
    "text, expect",
    [
        ("state-histogram-seconds", TimeAggregation.SECONDS),
        ("state-histogram-percent", TimeAggregation.PERCENT),
        ("state-histogram-rate", TimeAggregation.RATE),
    ],
)
def test_time_aggregation_aliases(text, expect):
    assert TimeAggregation.from_text(text) is expect


def test_bad_aggregation_text():
    with pytest.raises(ValueError):
        TimeAggregation.from_text("median")
    with pytest.raises(ValueError):
        GroupAggregation.from_text("state-seconds")


def test_item_omits_state_for_plain_aggregation():
    item = EvaluateItem(alias="i0", id="abc", time_aggregation=TimeAggregation.AVG, state=10)
    assert item.to_json() == {"alias": "i0", "id": "abc", "timeAggregation": "avg"}


def test_item_includes_state_for_state_aggregation():
    item = EvaluateItem(alias="i0", id="abc", time_aggregation=TimeAggregation.SECONDS, state=10)
    assert item.to_json() == {
        "alias": "i0",
        "id": "abc",
        "timeAggregation": "state-seconds",
        "state": 10,
    }


def test_item_state_zero_still_included_for_state_aggregation():
    item = EvaluateItem(time_aggregation=TimeAggregation.RATE)
    assert item.to_json()["state"] == 0


def test_group_encoding():
    group = EvaluateGroup(
        alias="g1",
        query=query().limit(10),
        time_aggregation=TimeAggregation.PERCENT,
        group_aggregation=GroupAggregation.AVG,
        state=10,
        lead=2,
    )
    encoded = group.to_json()
    assert encoded["query"] == query().limit(10).to_json()
    assert encoded["groupAggregation"] == "avg"
    assert encoded["state"] == 10
    assert encoded["lead"] == 2
    assert "lag" not in encoded


def test_group_default_omits_aggregations():
    encoded = EvaluateGroup(alias="g1").to_json()
    assert "timeAggregation" not in encoded
    assert "groupAggregation" not in encoded
    assert "state" not in encoded
    assert encoded["query"] == query().to_json()


def test_calculation_encoding():
    calc = Calculation(alias="c1", formula="sin(g1)")
    assert calc.to_json() == {"alias": "c1", "formula": "sin(g1)"}