"""
Health records for health-viz.

Turns loosely-typed raw payloads (string numbers, date or timestamp strings)
into immutable `HealthRecord` values. Dates are strict, numbers are lenient.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


class InvalidRecord(ValueError):
    """Raised when a raw record has no parseable calendar date."""


class Metric(str, Enum):
    """The tracked health measurements, valued by their wire field name."""

    STEPS = "steps"
    WEIGHT = "weight"
    HEART_RATE = "heartRate"

    @property
    def attr(self) -> str:
        return _METRIC_ATTRS[self]

    @property
    def is_integral(self) -> bool:
        return self is not Metric.WEIGHT


_METRIC_ATTRS = {
    Metric.STEPS: "steps",
    Metric.WEIGHT: "weight",
    Metric.HEART_RATE: "heart_rate",
}

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Older clients posted a `timestamp` and Chinese field names.
DATE_KEYS = ("date", "timestamp")
FIELD_ALIASES = {
    Metric.STEPS: ("steps", "步数"),
    Metric.WEIGHT: ("weight", "体重"),
    Metric.HEART_RATE: ("heartRate", "心率"),
}


@dataclass(frozen=True)
class HealthRecord:
    """One day's observations; any metric may be absent."""

    date: date
    steps: Optional[int] = None
    weight: Optional[float] = None
    heart_rate: Optional[int] = None

    def value(self, metric: Metric) -> Optional[float]:
        return getattr(self, Metric(metric).attr)

    def to_raw(self) -> Dict[str, str]:
        """Canonical stored form: ISO date, string numbers, absent fields omitted."""
        raw = {"date": self.date.isoformat()}
        for metric in Metric:
            v = self.value(metric)
            if v is not None:
                raw[metric.value] = str(v)
        return raw


def clean_num(v: Any, as_int: bool = True) -> Optional[float]:
    """
    Parse a number leniently; anything unusable becomes None.

    Commas are thousands separators for integer counts only. In a decimal
    value a comma is ambiguous ("70,5"), so the value is dropped.
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        f = float(v)
    else:
        s = str(v).strip()
        if "," in s:
            if not as_int:
                return None
            s = s.replace(",", "")
        try:
            f = float(s)
        except ValueError:
            return None
    if not math.isfinite(f):
        return None
    return int(f) if as_int else f


def parse_date(value: Any) -> date:
    """
    Parse a `YYYY-MM-DD` date or an ISO-8601 timestamp into a calendar date.

    Timestamps keep the calendar date as written; no timezone conversion is
    applied.

    Raises:
        InvalidRecord: if the value is missing or not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidRecord(f"missing or non-string date: {value!r}")

    s = value.strip()
    if not _ISO_DATE.match(s) or (len(s) > 10 and s[10] not in "T "):
        raise InvalidRecord(f"unparseable date: {value!r}")
    try:
        day = date.fromisoformat(s[:10])
        if len(s) > 10:
            datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidRecord(f"unparseable date: {value!r}") from None
    return day


def _first_present(raw: Dict[str, Any], keys) -> Any:
    for key in keys:
        if raw.get(key) not in (None, ""):
            return raw[key]
    return None


def normalize_record(raw: Dict[str, Any]) -> HealthRecord:
    """
    Build a `HealthRecord` from a raw payload.

    Args:
        raw: Mapping with a `date` (or legacy `timestamp`) and optional
            `steps`, `weight` and `heartRate` values, usually strings.

    Returns:
        The normalized record. Malformed numbers are dropped, not rejected,
        and out-of-range values are kept as given.

    Raises:
        InvalidRecord: if `raw` is not a mapping or its date is unparseable.
    """
    if not isinstance(raw, dict):
        raise InvalidRecord(f"record must be an object, got {type(raw).__name__}")

    day = parse_date(_first_present(raw, DATE_KEYS))
    values = {
        metric.attr: clean_num(_first_present(raw, FIELD_ALIASES[metric]), as_int=metric.is_integral)
        for metric in Metric
    }
    return HealthRecord(date=day, **values)
