"""
Summary statistics (average, min, max) for one metric.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from statistics import mean
from typing import Iterable, List, Optional, Union

from health_viz.core.records import HealthRecord, Metric

Number = Union[int, float]

# Decimal places shown for each metric's summary values.
PRECISION = {
    Metric.STEPS: 0,
    Metric.WEIGHT: 1,
    Metric.HEART_RATE: 0,
}


@dataclass(frozen=True)
class MetricSummary:
    """Headline numbers; all three are None when there is no data."""

    metric: Metric
    average: Optional[Number] = None
    min: Optional[Number] = None
    max: Optional[Number] = None

    @property
    def has_data(self) -> bool:
        return self.average is not None

    def to_dict(self) -> dict:
        return {"average": self.average, "min": self.min, "max": self.max}


def round_for(metric: Metric, value: float) -> Number:
    """Round half away from zero to the metric's display precision."""
    places = PRECISION[metric]
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def eligible_values(records: Iterable[HealthRecord], metric: Metric) -> List[Number]:
    """Present readings strictly greater than zero."""
    out = []
    for record in records:
        v = record.value(metric)
        if v is not None and v > 0:
            out.append(v)
    return out


def summarize(records: Iterable[HealthRecord], metric: Metric) -> MetricSummary:
    metric = Metric(metric)
    vals = eligible_values(records, metric)
    if not vals:
        return MetricSummary(metric=metric)
    return MetricSummary(
        metric=metric,
        average=round_for(metric, mean(vals)),
        min=round_for(metric, min(vals)),
        max=round_for(metric, max(vals)),
    )
