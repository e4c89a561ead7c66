from datetime import date

from health_viz.core.records import HealthRecord, Metric, normalize_record
from health_viz.core.summary import round_for, summarize


def test_steps_summary():
    records = [
        normalize_record({"date": "2025-01-01", "steps": "5000"}),
        normalize_record({"date": "2025-01-02", "steps": "7000"}),
    ]
    summary = summarize(records, Metric.STEPS)
    assert summary.to_dict() == {"average": 6000, "min": 5000, "max": 7000}
    assert summary.has_data


def test_weight_summary_ignores_absent():
    records = [
        normalize_record({"date": "2025-01-01", "weight": "70.0"}),
        normalize_record({"date": "2025-01-02"}),
    ]
    summary = summarize(records, Metric.WEIGHT)
    assert summary.to_dict() == {"average": 70.0, "min": 70.0, "max": 70.0}


def test_empty_collection_is_no_data():
    summary = summarize([], Metric.STEPS)
    assert not summary.has_data
    assert summary.to_dict() == {"average": None, "min": None, "max": None}


def test_only_absent_values_is_no_data():
    records = [HealthRecord(date=date(2025, 1, 1), steps=100)]
    assert not summarize(records, Metric.WEIGHT).has_data


def test_zero_and_negative_values_are_not_eligible():
    records = [
        HealthRecord(date=date(2025, 1, 1), steps=0),
        HealthRecord(date=date(2025, 1, 2), steps=-5),
        HealthRecord(date=date(2025, 1, 3), steps=900),
    ]
    summary = summarize(records, Metric.STEPS)
    assert summary.to_dict() == {"average": 900, "min": 900, "max": 900}


def test_rounding_per_metric():
    records = [
        HealthRecord(date=date(2025, 1, 1), steps=1001, weight=70.04, heart_rate=60),
        HealthRecord(date=date(2025, 1, 2), steps=1002, weight=70.11, heart_rate=61),
    ]
    steps = summarize(records, Metric.STEPS)
    weight = summarize(records, Metric.WEIGHT)
    hr = summarize(records, Metric.HEART_RATE)
    assert steps.average == 1002 and isinstance(steps.average, int)
    assert hr.average == 61 and isinstance(hr.average, int)
    assert weight.average == 70.1
    assert weight.min == 70.0
    assert weight.max == 70.1


def test_round_half_away_from_zero():
    assert round_for(Metric.STEPS, 2.5) == 3
    assert round_for(Metric.WEIGHT, 70.25) == 70.3
    assert round_for(Metric.HEART_RATE, 72.49) == 72


def test_metric_given_as_string():
    records = [HealthRecord(date=date(2025, 1, 1), weight=70.04)]
    assert summarize(records, "weight").to_dict() == {"average": 70.0, "min": 70.0, "max": 70.0}
