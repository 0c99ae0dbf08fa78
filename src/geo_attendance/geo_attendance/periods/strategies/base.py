from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Period:
    """Inclusive accounting window [start, end]."""

    start: date
    end: date
    label: str

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }


class PeriodStrategy(ABC):
    """Strategy Pattern: how an office cycle maps a date onto a period."""

    @abstractmethod
    def period_for(self, reference_date: date) -> Period:
        raise NotImplementedError
