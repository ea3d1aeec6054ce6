from datetime import datetime, timedelta, timezone

import pytest

from clarify.fields.data_filter import DataFilter, data_and, series_in, time_range

UTC = timezone.utc
T0 = datetime(2022, 1, 1, 0, 0, tzinfo=UTC)
T4 = datetime(2022, 1, 1, 4, 0, tzinfo=UTC)


def test_time_range_to_json():
    encoded = time_range(T0, T4).to_json()
    assert encoded["times"]["$gte"] == "2022-01-01T00:00:00Z"
    assert encoded["times"]["$lt"] == "2022-01-01T04:00:00Z"
    assert encoded["series"] == {}


def test_series_in_to_json_keeps_order():
    encoded = series_in("b", "a").to_json()
    assert encoded["series"] == {"$in": ["b", "a"]}


def test_unset_times_encode_as_zero_time():
    encoded = series_in("a").to_json()
    assert encoded["times"]["$gte"] == "0001-01-01T00:00:00Z"
    assert encoded["times"]["$lt"] == encoded["times"]["$gte"]


def test_series_in_without_keys_is_unfiltered():
    assert series_in().series is None


def test_naive_datetime_taken_as_utc():
    naive = time_range(datetime(2022, 1, 1), None)
    assert naive.gte == T0


def test_fraction_has_trailing_zeros_removed():
    t = datetime(2022, 1, 1, 0, 0, 0, 500000, tzinfo=UTC)
    assert time_range(t, None).to_json()["times"]["$gte"] == "2022-01-01T00:00:00.5Z"


def test_offset_time_keeps_offset():
    t = datetime(2022, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    assert time_range(t, None).to_json()["times"]["$gte"].endswith("+02:00")


def test_data_and_keeps_narrowest_range():
    t1 = T0 + timedelta(hours=1)
    t3 = T0 + timedelta(hours=3)
    result = data_and(time_range(T0, t3), time_range(t1, T4))
    assert result.gte == t1
    assert result.lt == t3


def test_data_and_ignores_unset_bounds():
    result = data_and(time_range(T0, None), time_range(None, T4))
    assert result.gte == T0
    assert result.lt == T4


def test_data_and_intersects_series():
    result = data_and(series_in("a", "b", "c"), series_in("c", "a"))
    assert result.series == ("a", "c")


def test_data_and_keeps_series_when_other_is_unset():
    result = data_and(series_in("a"), time_range(T0, T4))
    assert result.series == ("a",)
    assert result.gte == T0


def test_data_and_disjoint_series_is_empty():
    result = data_and(series_in("a"), series_in("b"))
    assert result.series == ()
    assert result.to_json()["series"] == {}


def test_data_and_of_nothing_is_empty_filter():
    assert data_and() == DataFilter()


@pytest.mark.parametrize(
    "f",
    [DataFilter(), time_range(T0, T4), series_in("x", "y"), data_and(time_range(T0, T4), series_in("x"))],
)
def test_json_round_trip(f):
    assert DataFilter.from_json(f.to_json()) == f


def test_from_json_rejects_bad_time():
    with pytest.raises(ValueError):
        DataFilter.from_json({"times": {"$gte": "yesterday"}})


def test_from_json_rejects_non_object():
    with pytest.raises(TypeError):
        DataFilter.from_json([1, 2])