import math

import pandas as pd
import pytest

from viz_dashboard.core.dataset import Dataset, Record, to_number


def _raw(**overrides):
    raw = {
        "title": "Oil demand to peak",
        "topic": "oil",
        "sector": "Energy",
        "region": "Asia",
        "country": "India",
        "city": "",
        "pestle": "Economic",
        "source": "EIA",
        "start_year": "",
        "end_year": 2030,
        "intensity": 6,
        "likelihood": 3,
        "relevance": 2,
        "published": "2017-01-09",
        "insight": "extra field",
    }
    raw.update(overrides)
    return raw


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("  ", None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        (float("-inf"), None),
        ("inf", None),
        ("-Infinity", None),
        ("1e400", None),
        ("abc", None),
        (3, 3),
        (2.5, 2.5),
        ("2017", 2017),
        ("2.5", 2.5),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_record_from_dict_parses_fields():
    rec = Record.from_dict(_raw())

    assert rec.title == "Oil demand to peak"
    assert rec.start_year is None
    assert rec.end_year == 2030
    assert rec.intensity == 6
    assert rec.published == "2017-01-09"
    assert rec.extra == {"insight": "extra field"}
    assert rec.metric("intensity") == 6


def test_record_missing_fields_are_blank_or_none():
    rec = Record.from_dict({"title": "T"})
    assert rec.topic == ""
    assert rec.intensity is None
    assert rec.published is None


def test_record_metric_rejects_text_attributes():
    with pytest.raises(KeyError):
        Record(title="x").metric("topic")


def test_record_from_dict_rejects_non_objects():
    with pytest.raises(TypeError):
        Record.from_dict(["not", "a", "record"])


def test_dataset_from_json_keeps_response_order():
    ds = Dataset.from_json([_raw(title="Z"), _raw(title="A"), _raw(title="M")])
    assert ds.titles() == ["Z", "A", "M"]
    assert len(ds) == 3


def test_dataset_from_json_requires_array():
    with pytest.raises(TypeError):
        Dataset.from_json({"data": []})


def test_max_metric_ignores_missing_values():
    ds = Dataset.from_json(
        [_raw(intensity=""), _raw(intensity=4), _raw(intensity=None), _raw(intensity=9)]
    )
    assert ds.max_metric("intensity") == 9
    assert not math.isnan(ds.max_metric("intensity"))


def test_max_metric_is_zero_when_nothing_present():
    assert Dataset.empty().max_metric("intensity") == 0
    assert Dataset.from_json([_raw(relevance="")]).max_metric("relevance") == 0


def test_to_frame_includes_extra_columns():
    df = Dataset.from_json([_raw(), _raw(title="B")]).to_frame()

    assert isinstance(df, pd.DataFrame)
    assert list(df["title"]) == ["Oil demand to peak", "B"]
    assert "insight" in df.columns


def test_to_frame_empty_has_columns():
    df = Dataset.empty().to_frame()
    assert df.empty
    assert "title" in df.columns


def test_infinite_values_do_not_contribute():
    # json.loads turns a bare Infinity token into float("inf")
    ds = Dataset.from_json([_raw(intensity=float("inf")), _raw(intensity="inf"), _raw(intensity=5)])
    assert ds.metric_values("intensity") == [None, None, 5]
    assert ds.max_metric("intensity") == 5
