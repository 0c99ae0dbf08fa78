from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import CycleType, RecordStatus, ReportRange


@dataclass(frozen=True)
class ReportFilter:
    range: ReportRange = ReportRange.TODAY
    date: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None
    branch_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass(frozen=True)
class EnrichedRecord:
    """Read-model for reports: a record joined with directory and office data."""

    record: AttendanceRecord
    user_name: str
    user_email: str
    department: Optional[str]
    branch_id: Optional[int]
    branch_name: str
    branch_cycle_type: Optional[CycleType]
    is_within_working_hours: bool
    record_status: RecordStatus

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data.update(
            {
                "user_name": self.user_name,
                "user_email": self.user_email,
                "user_department": self.department or "",
                "branch_id": self.branch_id,
                "branch_name": self.branch_name,
                "branch_cycle_type": self.branch_cycle_type.value if self.branch_cycle_type else None,
                "is_within_working_hours": self.is_within_working_hours,
                "status": self.record_status.value,
            }
        )
        return data


@dataclass
class BranchSummary:
    branch_id: Optional[int]
    branch_name: str
    total_employees: int = 0
    present: int = 0
    on_time: int = 0
    total_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "branch_id": self.branch_id,
            "branch_name": self.branch_name,
            "totalEmployees": self.total_employees,
            "present": self.present,
            "onTime": self.on_time,
            "totalHours": round(self.total_hours, 2),
        }


@dataclass(frozen=True)
class ReportSummary:
    total_employees: int = 0
    present_today: int = 0
    on_time: int = 0
    total_hours: float = 0.0
    average_hours: float = 0.0
    branches: list[BranchSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "onTime": self.on_time,
            "totalHours": self.total_hours,
            "averageHours": self.average_hours,
            "branches": [b.to_dict() for b in self.branches],
        }


@dataclass(frozen=True)
class AttendanceReport:
    start: date
    end: date
    label: str
    records: list[EnrichedRecord]
    summary: ReportSummary

    def to_dict(self) -> dict:
        return {
            "range": {"start": self.start.isoformat(), "end": self.end.isoformat(), "label": self.label},
            "records": [r.to_dict() for r in self.records],
            "summary": self.summary.to_dict(),
        }
