from __future__ import annotations

from datetime import date, timedelta

from ...common.datetime_utils import add_months
from .base import Period, PeriodStrategy


class CustomCycleStrategy(PeriodStrategy):
    """Cycle running from ``start_day`` of one month to ``start_day - 1`` of the next.

    ``start_day`` must be within 1..28 so it exists in every month.
    """

    def __init__(self, start_day: int):
        if not 1 <= start_day <= 28:
            raise ValueError(f"cycle start day must be within 1..28, got {start_day}")
        self._start_day = start_day

    def period_for(self, reference_date: date) -> Period:
        year, month = reference_date.year, reference_date.month
        if reference_date.day < self._start_day:
            year, month = add_months(year, month, -1)

        start = date(year, month, self._start_day)
        next_year, next_month = add_months(year, month, 1)
        end = date(next_year, next_month, self._start_day) - timedelta(days=1)

        label = f"{start.strftime('%d %b %Y')} - {end.strftime('%d %b %Y')}"
        return Period(start=start, end=end, label=label)
