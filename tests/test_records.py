from datetime import date

import pytest

from health_viz.core.records import (
    HealthRecord,
    InvalidRecord,
    Metric,
    clean_num,
    normalize_record,
    parse_date,
)


def test_normalize_full_record():
    rec = normalize_record({"date": "2025-01-01", "steps": "5000", "weight": "70.25", "heartRate": "61"})
    assert rec == HealthRecord(date=date(2025, 1, 1), steps=5000, weight=70.25, heart_rate=61)


def test_missing_fields_are_absent_not_zero():
    rec = normalize_record({"date": "2025-01-02"})
    assert rec.steps is None
    assert rec.weight is None
    assert rec.heart_rate is None


def test_malformed_numbers_become_absent():
    rec = normalize_record({"date": "2025-01-02", "steps": "lots", "weight": "", "heartRate": "NaN"})
    assert rec.steps is None
    assert rec.weight is None
    assert rec.heart_rate is None


def test_out_of_range_values_are_kept():
    rec = normalize_record({"date": "2025-01-02", "steps": "-20"})
    assert rec.steps == -20


def test_legacy_timestamp_and_field_names():
    rec = normalize_record({"timestamp": "2025-03-05T08:30:00Z", "步数": "1200", "心率": "72"})
    assert rec.date == date(2025, 3, 5)
    assert rec.steps == 1200
    assert rec.heart_rate == 72


def test_weight_keeps_raw_precision():
    rec = normalize_record({"date": "2025-01-01", "weight": "70.26"})
    assert rec.weight == 70.26


def test_integer_metrics_truncate_decimals():
    rec = normalize_record({"date": "2025-01-01", "steps": "1,234.9", "heartRate": 60.7})
    assert rec.steps == 1234
    assert rec.heart_rate == 60


@pytest.mark.parametrize("bad", ["not-a-date", "2025-02-30", "", None, 20250101])
def test_unparseable_date_raises(bad):
    with pytest.raises(InvalidRecord):
        normalize_record({"date": bad, "steps": "100"})


def test_non_mapping_raises():
    with pytest.raises(InvalidRecord):
        normalize_record(["2025-01-01"])


def test_parse_date_accepts_offsets():
    assert parse_date("2025-03-05T23:59:00+09:00") == date(2025, 3, 5)


def test_clean_num_rejects_booleans_and_infinity():
    assert clean_num(True) is None
    assert clean_num("inf") is None
    assert clean_num(" 42 ") == 42
    assert clean_num("70.5", as_int=False) == 70.5


def test_to_raw_omits_absent_fields():
    rec = HealthRecord(date=date(2025, 1, 1), weight=70.0)
    assert rec.to_raw() == {"date": "2025-01-01", "weight": "70.0"}
    assert normalize_record(rec.to_raw()) == rec


def test_value_by_metric():
    rec = HealthRecord(date=date(2025, 1, 1), steps=10, heart_rate=55)
    assert rec.value(Metric.STEPS) == 10
    assert rec.value(Metric.HEART_RATE) == 55
    assert rec.value(Metric.WEIGHT) is None


def test_decimal_comma_weight_is_dropped():
    rec = normalize_record({"date": "2025-01-01", "weight": "70,5", "steps": "12,000"})
    assert rec.weight is None
    assert rec.steps == 12000
    assert clean_num("1,070.5", as_int=False) is None


@pytest.mark.parametrize("bad", ["2025-W10-3", "20250305", "2025-3-5", "2025-03-05X08:00"])
def test_only_dashed_calendar_dates_are_accepted(bad):
    with pytest.raises(InvalidRecord):
        parse_date(bad)


def test_timestamp_with_bad_time_is_rejected():
    with pytest.raises(InvalidRecord):
        parse_date("2025-03-05T99:00:00")


def test_value_accepts_metric_name():
    rec = HealthRecord(date=date(2025, 1, 1), heart_rate=58)
    assert rec.value("heartRate") == 58
