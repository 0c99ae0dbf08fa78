from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import Location
from ..core.enums import LiveStatus


@dataclass(frozen=True)
class LiveEntry:
    user_id: int
    user_name: str
    user_email: str
    department: Optional[str]
    branch_id: Optional[int]
    branch_name: str
    status: LiveStatus
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    hours_worked: float = 0.0
    is_within_office: bool = False
    is_on_time: Optional[bool] = None
    last_location: Optional[Location] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "user_email": self.user_email,
            "department": self.department or "",
            "branch_id": self.branch_id,
            "branch_name": self.branch_name,
            "status": self.status.value,
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "hours_worked": self.hours_worked,
            "is_within_office": self.is_within_office,
            "is_on_time": self.is_on_time,
            "last_location": self.last_location.to_dict() if self.last_location else None,
        }


@dataclass(frozen=True)
class MonitoringStats:
    total_employees: int = 0
    currently_working: int = 0
    on_time_today: int = 0
    late_today: int = 0
    absent_today: int = 0
    remote_working: int = 0
    office_working: int = 0
    average_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "currentlyWorking": self.currently_working,
            "onTimeToday": self.on_time_today,
            "lateToday": self.late_today,
            "absentToday": self.absent_today,
            "remoteWorking": self.remote_working,
            "officeWorking": self.office_working,
            "averageHours": self.average_hours,
        }


@dataclass(frozen=True)
class LiveSnapshot:
    reference_date: date
    stats: MonitoringStats
    attendances: list[LiveEntry]

    def to_dict(self) -> dict:
        return {
            "date": self.reference_date.isoformat(),
            "stats": self.stats.to_dict(),
            "attendances": [a.to_dict() for a in self.attendances],
        }
