from datetime import datetime, timedelta, timezone

import pytest

from clarify.fields.data_filter import DataFilter, data_and, series_in, time_range
from clarify.fields.data_query import DataQuery, data

UTC = timezone.utc
T0 = datetime(2022, 1, 1, 0, 0, tzinfo=UTC)
T4 = datetime(2022, 1, 1, 4, 0, tzinfo=UTC)


def test_empty_query_holds_only_filter():
    assert data().to_json() == {"filter": DataFilter().to_json()}


def test_rollup_duration_monday():
    encoded = data().rollup_duration(timedelta(hours=1), 0).to_json()
    assert encoded["rollup"] == "PT1H"
    assert encoded["firstDayOfWeek"] == 1


def test_rollup_duration_sunday_is_iso_seven():
    encoded = data().rollup_duration(timedelta(hours=1), 6).to_json()
    assert encoded["firstDayOfWeek"] == 7


def test_rollup_months():
    assert data().rollup_months(12).to_json()["rollup"] == "P1Y"


def test_rollup_months_zero_has_no_rollup():
    assert "rollup" not in data().rollup_months(0).to_json()


def test_rollup_window():
    assert data().rollup_window().to_json()["rollup"] == "window"


def test_time_zone_name():
    assert data().time_zone("Europe/Berlin").to_json()["timeZone"] == "Europe/Berlin"


@pytest.mark.parametrize("tz", [None, UTC])
def test_time_zone_location_utc(tz):
    assert data().time_zone_location(tz).to_json()["timeZone"] == "UTC"


def test_last_and_no_limit():
    assert data().last(3).to_json()["last"] == 3
    assert "last" not in data().last(0).to_json()


def test_origin_formatted_as_rfc3339():
    assert data().origin(T0).to_json()["origin"] == "2022-01-01T00:00:00Z"


def test_where_joins_with_and():
    q = data().where(time_range(T0, T4)).where(series_in("x"))
    expected = data_and(time_range(T0, T4), series_in("x"))
    assert q.to_json()["filter"] == expected.to_json()


def test_methods_do_not_change_original():
    base = data()
    base.last(5).rollup_window().time_zone("UTC")
    assert base.to_json() == data().to_json()


def test_json_round_trip():
    q = (
        data()
        .where(time_range(T0, T4))
        .rollup_duration(timedelta(minutes=15), 0)
        .origin(T0)
        .time_zone("UTC")
        .last(2)
    )
    assert DataQuery.from_json(q.to_json()) == q


def test_from_json_rejects_bad_last():
    with pytest.raises(ValueError):
        DataQuery.from_json({"last": "two"})