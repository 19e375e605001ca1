import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from fb_marketing_mcp.core.query_params import (
    DEFAULT_INSIGHT_METRICS,
    coerce_budget,
    coerce_number,
    normalize_limit,
    normalize_metrics,
    normalize_time_increment,
    normalize_time_range,
)


@pytest.mark.parametrize(
    "raw,expected",
    [(None, None), ("", None), ("  ", None), ("42", 42), ("1,500", 1500), ("2.5", 2.5), (7, 7), (1.25, 1.25)],
)
def test_coerce_number(raw, expected):
    assert coerce_number(raw, "value") == expected


@pytest.mark.parametrize("raw", ["abc", True, "1e"])
def test_coerce_number_rejects_non_numeric(raw):
    with pytest.raises(ValueError):
        coerce_number(raw, "value")


def test_coerce_budget_requires_positive_whole_units():
    assert coerce_budget("1000", "daily_budget") == 1000
    assert coerce_budget(1000.0, "daily_budget") == 1000
    with pytest.raises(ValueError):
        coerce_budget("10.5", "daily_budget")
    with pytest.raises(ValueError):
        coerce_budget(0, "daily_budget")


def test_normalize_limit_clamps():
    assert normalize_limit(None, default=10, maximum=100) == 10
    assert normalize_limit("0", default=10, maximum=100) == 1
    assert normalize_limit(250, default=10, maximum=100) == 100


def test_normalize_metrics_defaults_and_accepts_csv():
    assert normalize_metrics(None) == list(DEFAULT_INSIGHT_METRICS)
    assert normalize_metrics([]) == list(DEFAULT_INSIGHT_METRICS)
    assert normalize_metrics("spend, clicks,spend") == ["spend", "clicks"]


def test_normalize_time_range():
    assert normalize_time_range(" 2024-01-01", "2024-01-01") == {"since": "2024-01-01", "until": "2024-01-01"}
    with pytest.raises(ValueError):
        normalize_time_range("2024-01-05", "2024-01-01")


def test_normalize_time_increment():
    assert normalize_time_increment(None) == 1
    assert normalize_time_increment("7") == 7
    assert normalize_time_increment("ALL_DAYS") == "all_days"
    with pytest.raises(ValueError):
        normalize_time_increment(120)
