"""
Relative time windows for filtering health records.

Month and year windows use calendar subtraction: the day of month is kept
and clamped to the length of the target month (Mar 31 - 1 month = Feb 28).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Union

from health_viz.core.records import HealthRecord


class Window(str, Enum):
    LAST_7_DAYS = "7d"
    LAST_MONTH = "1m"
    LAST_3_MONTHS = "3m"
    LAST_6_MONTHS = "6m"
    LAST_YEAR = "1y"
    ALL = "all"


_MONTHS_BACK = {
    Window.LAST_MONTH: 1,
    Window.LAST_3_MONTHS: 3,
    Window.LAST_6_MONTHS: 6,
    Window.LAST_YEAR: 12,
}


def subtract_months(day: date, months: int) -> date:
    """Step back whole calendar months, clamping to the month's last day."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def window_cutoff(window: Window, now: Union[date, datetime]) -> Optional[date]:
    """Earliest date included by `window`, or None for the unbounded window."""
    window = Window(window)
    today = now.date() if isinstance(now, datetime) else now
    if window is Window.ALL:
        return None
    if window is Window.LAST_7_DAYS:
        return today - timedelta(days=7)
    return subtract_months(today, _MONTHS_BACK[window])


def filter_window(
    records: Iterable[HealthRecord], window: Window, now: Union[date, datetime]
) -> List[HealthRecord]:
    """Keep records dated on or after the window's cutoff; future dates stay in."""
    cutoff = window_cutoff(window, now)
    if cutoff is None:
        return list(records)
    return [r for r in records if r.date >= cutoff]
