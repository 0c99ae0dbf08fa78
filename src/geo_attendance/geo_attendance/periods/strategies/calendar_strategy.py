from __future__ import annotations

from datetime import date

from ...common.datetime_utils import last_day_of_month
from .base import Period, PeriodStrategy


class CalendarMonthStrategy(PeriodStrategy):
    """First through last day of the reference month."""

    def period_for(self, reference_date: date) -> Period:
        start = reference_date.replace(day=1)
        end = last_day_of_month(reference_date.year, reference_date.month)
        return Period(start=start, end=end, label=start.strftime("%B %Y"))
