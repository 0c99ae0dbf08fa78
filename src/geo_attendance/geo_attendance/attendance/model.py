from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceState
from ..geofence.validator import GeofenceResult


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float
    accuracy: Optional[float] = None

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "accuracy": self.accuracy}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user_id, work_date)."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in_time: Optional[datetime] = None
    clock_in_location: Optional[Location] = None
    clock_out_time: Optional[datetime] = None
    clock_out_location: Optional[Location] = None
    is_within_office: bool = False
    total_hours: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def state(self) -> AttendanceState:
        if self.clock_in_time is None:
            return AttendanceState.NOT_STARTED
        if self.clock_out_time is None:
            return AttendanceState.CLOCKED_IN
        return AttendanceState.CLOCKED_OUT

    @property
    def is_open(self) -> bool:
        return self.state == AttendanceState.CLOCKED_IN

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_in_location": self.clock_in_location.to_dict() if self.clock_in_location else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "clock_out_location": self.clock_out_location.to_dict() if self.clock_out_location else None,
            "is_within_office": self.is_within_office,
            "total_hours": float(self.total_hours) if self.total_hours is not None else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class AttendanceStatusView:
    record: Optional[AttendanceRecord]
    can_check_in: bool
    can_check_out: bool

    @property
    def state(self) -> AttendanceState:
        return self.record.state if self.record else AttendanceState.NOT_STARTED

    def to_dict(self) -> dict:
        return {
            "attendance": self.record.to_dict() if self.record else None,
            "state": self.state.value,
            "canCheckIn": self.can_check_in,
            "canCheckOut": self.can_check_out,
        }


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    geofence: GeofenceResult

    def to_dict(self) -> dict:
        return {
            "attendance": self.record.to_dict(),
            "isValidLocation": self.geofence.is_within_office,
            "status": "present" if self.record.is_within_office else "remote",
            "geofence": self.geofence.to_dict(),
        }


@dataclass(frozen=True)
class CheckOutResult:
    record: AttendanceRecord
    total_hours: Decimal
    is_valid_location: bool
    clock_skew_detected: bool = False

    def to_dict(self) -> dict:
        return {
            "attendance": self.record.to_dict(),
            "totalHours": float(self.total_hours),
            "isValidLocation": self.is_valid_location,
            "clockSkewDetected": self.clock_skew_detected,
        }


@dataclass(frozen=True)
class HistorySummary:
    total_days: int
    valid_check_ins: int
    total_hours: float
    average_hours: float

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "validCheckIns": self.valid_check_ins,
            "totalHours": self.total_hours,
            "averageHours": self.average_hours,
        }


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0

    def to_dict(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


@dataclass(frozen=True)
class AttendanceHistory:
    records: list[AttendanceRecord]
    summary: HistorySummary
    pagination: Pagination

    def to_dict(self) -> dict:
        return {
            "attendance": [r.to_dict() for r in self.records],
            "summary": self.summary.to_dict(),
            "pagination": self.pagination.to_dict(),
        }
