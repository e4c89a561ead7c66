"""
Chart.js-shaped payloads for the dashboard.

`configure_chart` is called once when the web app is created; the resulting
`ChartConfig` is then passed to whatever renders a series.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from health_viz.core.records import Metric
from health_viz.core.series import MetricSeries

DEFAULT_STYLES: Dict[Metric, Dict[str, Any]] = {
    Metric.STEPS: {"label": "Steps", "borderColor": "rgb(75, 192, 192)"},
    Metric.WEIGHT: {"label": "Weight (kg)", "borderColor": "rgb(153, 102, 255)"},
    Metric.HEART_RATE: {"label": "Heart rate (bpm)", "borderColor": "rgb(255, 99, 132)"},
}


@dataclass(frozen=True)
class ChartConfig:
    title: str
    styles: Dict[Metric, Dict[str, Any]] = field(default_factory=dict)
    tension: float = 0.1

    def options(self) -> Dict[str, Any]:
        return {
            "responsive": True,
            "plugins": {
                "legend": {"position": "top"},
                "title": {"display": True, "text": self.title},
            },
        }

    def dataset(self, series: MetricSeries) -> Dict[str, Any]:
        style = self.styles[series.metric]
        return {
            "label": style["label"],
            "data": list(series.values),
            "fill": False,
            "borderColor": style["borderColor"],
            "tension": self.tension,
        }

    def payload(self, series: MetricSeries) -> Dict[str, Any]:
        return {
            "data": {"labels": list(series.labels), "datasets": [self.dataset(series)]},
            "options": self.options(),
        }


def configure_chart(title: str, styles: Dict[Metric, Dict[str, Any]] | None = None) -> ChartConfig:
    """Build the chart configuration, filling in any metric without a style."""
    merged = {metric: dict(style) for metric, style in DEFAULT_STYLES.items()}
    for metric, style in (styles or {}).items():
        merged[metric].update(style)
    return ChartConfig(title=title, styles=merged)
