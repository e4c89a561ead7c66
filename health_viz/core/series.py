"""
Chart series for one metric.

Absent readings are plotted as 0 so every record gets a point; the summary
statistics apply their own positive-value filter instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Tuple, Union

from health_viz.core.records import HealthRecord, Metric

Number = Union[int, float]


@dataclass(frozen=True)
class MetricSeries:
    metric: Metric
    labels: Tuple[str, ...] = ()
    values: Tuple[Number, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def points(self) -> List[Tuple[str, Number]]:
        return list(zip(self.labels, self.values))

    def to_dict(self) -> dict:
        return {"labels": list(self.labels), "values": list(self.values)}


def short_label(day: date) -> str:
    """Month abbreviation and unpadded day, e.g. 'Mar 5'."""
    return f"{day:%b} {day.day}"


def build_series(records: Iterable[HealthRecord], metric: Metric) -> MetricSeries:
    metric = Metric(metric)
    # sorted() is stable, so same-day records keep their input order
    ordered = sorted(records, key=lambda r: r.date)
    labels = []
    values = []
    for record in ordered:
        v = record.value(metric)
        labels.append(short_label(record.date))
        values.append(v if v is not None else 0)
    return MetricSeries(metric=metric, labels=tuple(labels), values=tuple(values))
