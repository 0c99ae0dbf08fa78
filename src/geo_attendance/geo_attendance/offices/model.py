from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_CYCLE_START_DAY
from ..core.enums import CycleType


@dataclass(frozen=True)
class Office:
    """Domain entity: an office (branch) with its geofence and work calendar.

    Read-only reference data maintained by administrators.
    """

    office_id: int
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    is_active: bool = True
    work_start_time: time = time(9, 0)
    work_end_time: time = time(18, 0)
    cycle_type: CycleType = CycleType.CALENDAR
    cycle_start_day: int = DEFAULT_CYCLE_START_DAY
    address: Optional[str] = None
    timezone: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.office_id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius_meters": self.radius_meters,
            "is_active": self.is_active,
            "work_start_time": self.work_start_time.strftime("%H:%M"),
            "work_end_time": self.work_end_time.strftime("%H:%M"),
            "cycle_type": self.cycle_type.value,
            "cycle_start_day": self.cycle_start_day,
            "address": self.address,
            "timezone": self.timezone,
        }
