"""
Dashboard derivation for health-viz.

Runs the full pass over a stored collection: normalize, window, then series
and summary for the selected metric. Nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Union

from health_viz.core.records import HealthRecord, InvalidRecord, Metric, normalize_record
from health_viz.core.series import MetricSeries, build_series
from health_viz.core.summary import MetricSummary, summarize
from health_viz.core.windows import Window, filter_window
from health_viz.infra import log_utils


@dataclass(frozen=True)
class DashboardView:
    window: Window
    metric: Metric
    series: MetricSeries
    summary: MetricSummary

    @property
    def has_data(self) -> bool:
        return self.summary.has_data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window": self.window.value,
            "metric": self.metric.value,
            "series": self.series.to_dict(),
            "summary": self.summary.to_dict(),
            "has_data": self.has_data,
        }


def normalize_collection(raws: Iterable[Dict[str, Any]]) -> List[HealthRecord]:
    """Normalize stored records, skipping any that cannot be parsed."""
    records = []
    skipped = 0
    for i, raw in enumerate(raws):
        try:
            records.append(normalize_record(raw))
        except InvalidRecord as e:
            skipped += 1
            log_utils.log_message(f"[dashboard] Skipping stored record #{i}: {e}", "WARN")
    if skipped:
        log_utils.log_message(f"[dashboard] {skipped} malformed record(s) ignored", "WARN")
    return records


def build_dashboard(
    raws: Iterable[Dict[str, Any]],
    window: Window,
    metric: Metric,
    now: Union[date, datetime],
) -> DashboardView:
    records = filter_window(normalize_collection(raws), window, now)
    return DashboardView(
        window=window,
        metric=metric,
        series=build_series(records, metric),
        summary=summarize(records, metric),
    )
