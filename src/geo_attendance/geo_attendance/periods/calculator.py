from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import MAX_CYCLE_START_DAY, MIN_CYCLE_START_DAY
from ..core.enums import CycleType
from ..offices.model import Office
from .strategies.base import Period, PeriodStrategy
from .strategies.calendar_strategy import CalendarMonthStrategy
from .strategies.custom_strategy import CustomCycleStrategy

logger = logging.getLogger(__name__)


@dataclass
class PeriodStrategyFactory:
    """Factory Pattern: pick the cycle strategy configured on an office."""

    def for_office(self, office: Optional[Office]) -> PeriodStrategy:
        if office is None:
            logger.warning("No office configured; falling back to calendar month period")
            return CalendarMonthStrategy()

        if office.cycle_type != CycleType.CUSTOM:
            return CalendarMonthStrategy()

        start_day = int(office.cycle_start_day)
        if not MIN_CYCLE_START_DAY <= start_day <= MAX_CYCLE_START_DAY:
            clamped = min(max(start_day, MIN_CYCLE_START_DAY), MAX_CYCLE_START_DAY)
            logger.warning(
                "Office %s has cycle_start_day=%s; clamping to %s",
                office.office_id,
                start_day,
                clamped,
            )
            start_day = clamped

        if start_day == 1:
            return CalendarMonthStrategy()
        return CustomCycleStrategy(start_day)


class PeriodCalculator:
    def __init__(self, factory: Optional[PeriodStrategyFactory] = None):
        self._factory = factory or PeriodStrategyFactory()

    def get_period(self, office: Optional[Office], reference_date: date) -> Period:
        return self._factory.for_office(office).period_for(reference_date)


def get_period(office: Optional[Office], reference_date: date) -> Period:
    return PeriodCalculator().get_period(office, reference_date)
