import math

import pytest

from clarify.fields.timestamp import Timestamp
from clarify.views.data_frame import DataFrame, DataSeries


def test_series_timestamps_sorted_without_nan():
    s = DataSeries({Timestamp(3): 1.0, Timestamp(1): 2.0, Timestamp(2): math.nan})
    assert s.timestamps() == [1, 3]


def test_frame_timestamps_union():
    df = DataFrame({"a": DataSeries({Timestamp(2): 1.0}), "b": DataSeries({Timestamp(1): 1.0, Timestamp(2): 3.0})})
    assert df.timestamps() == [1, 2]


def test_to_json_fills_missing_with_null():
    df = DataFrame({"a": DataSeries({Timestamp(0): 1.5}), "b": DataSeries({Timestamp(1): 2.0})})
    out = df.to_json()
    assert out["times"][0] == "1970-01-01T00:00:00Z"
    assert out["series"]["a"] == [1.5, None]
    assert out["series"]["b"] == [None, 2.0]


def test_round_trip():
    df = DataFrame({"a": DataSeries({Timestamp(5): 1.0, Timestamp(9): 2.0})})
    assert DataFrame.from_json(df.to_json()) == df


def test_from_json_drops_extra_values_and_nulls():
    doc = {"times": ["1970-01-01T00:00:00Z"], "series": {"a": [None, 4.0], "b": [7.0, 8.0]}}
    df = DataFrame.from_json(doc)
    assert df["a"] == {}
    assert df["b"] == {Timestamp(0): 7.0}


def test_from_json_rejects_non_object():
    with pytest.raises(TypeError):
        DataFrame.from_json([])