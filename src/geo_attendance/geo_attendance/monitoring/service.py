from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.punctuality import is_on_time
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import hours_between, to_reference_time
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, UNKNOWN_LABEL
from ..core.enums import LiveStatus
from ..offices.repository import OfficeRepository
from ..users.model import Employee
from ..users.repository import RosterRepository
from .model import LiveEntry, LiveSnapshot, MonitoringStats

logger = logging.getLogger(__name__)


def _pick_today_record(current: Optional[AttendanceRecord], candidate: AttendanceRecord) -> AttendanceRecord:
    # One row per (user, date) is expected; if the store ever returns more, the open one wins.
    if current is None:
        return candidate
    if candidate.is_open and not current.is_open:
        return candidate
    return current


class LiveMonitoringService:
    """Point-in-time view of who is working today, absentees included.

    Read only: nothing here mutates attendance state.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        roster: RosterRepository,
        offices: OfficeRepository,
        *,
        timezone: str = "UTC",
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._roster = roster
        self._offices = offices
        self._timezone = timezone
        self._grace_minutes = int(grace_minutes)

    def snapshot(self, *, now: datetime, branch_id: Optional[int] = None) -> LiveSnapshot:
        local_now = to_reference_time(now, self._timezone)
        today = local_now.date()

        roster = list(self._roster.list_active_roster(branch_id=branch_id))
        records = self._attendance.list_between(start_date=today, end_date=today, branch_id=branch_id)
        offices = {o.office_id: o for o in self._offices.list_all()}

        by_user: dict[int, AttendanceRecord] = {}
        for r in records:
            by_user[r.user_id] = _pick_today_record(by_user.get(r.user_id), r)

        roster_ids = {e.user_id for e in roster}
        strays = sorted(set(by_user) - roster_ids)
        if strays:
            logger.warning("Ignoring %d attendance record(s) for users outside the roster: %s", len(strays), strays)

        missing_branches: set[Optional[int]] = set()
        entries: list[LiveEntry] = []
        for employee in roster:
            office = offices.get(employee.branch_id) if employee.branch_id is not None else None
            if office is None:
                missing_branches.add(employee.branch_id)
            entries.append(self._entry(employee, by_user.get(employee.user_id), office, local_now))

        if missing_branches:
            logger.warning(
                "No office configured for branch(es) %s; punctuality unknown for their employees",
                sorted(missing_branches, key=lambda b: (b is None, b or 0)),
            )

        checked_in = [
            by_user[e.user_id]
            for e in roster
            if e.user_id in by_user and by_user[e.user_id].clock_in_time is not None
        ]
        completed_hours = [float(r.total_hours) for r in checked_in if r.total_hours is not None]

        stats = MonitoringStats(
            total_employees=len(roster),
            currently_working=sum(1 for e in entries if e.status == LiveStatus.CLOCKED_IN),
            on_time_today=sum(1 for e in entries if e.is_on_time is True),
            late_today=sum(1 for e in entries if e.is_on_time is False),
            absent_today=max(0, len(roster) - len(checked_in)),
            remote_working=sum(1 for r in checked_in if not r.is_within_office),
            office_working=sum(1 for r in checked_in if r.is_within_office),
            average_hours=round(sum(completed_hours) / len(completed_hours), 2) if completed_hours else 0.0,
        )
        return LiveSnapshot(reference_date=today, stats=stats, attendances=entries)

    def _entry(self, employee: Employee, record: Optional[AttendanceRecord], office, local_now: datetime) -> LiveEntry:
        common = dict(
            user_id=employee.user_id,
            user_name=employee.full_name,
            user_email=employee.email,
            department=employee.department,
            branch_id=employee.branch_id,
            branch_name=office.name if office else UNKNOWN_LABEL,
        )
        if record is None or record.clock_in_time is None:
            return LiveEntry(status=LiveStatus.NOT_STARTED, **common)

        if record.clock_out_time is not None:
            status = LiveStatus.CLOCKED_OUT
            hours = float(record.total_hours or 0)
            last_location = record.clock_out_location or record.clock_in_location
        else:
            status = LiveStatus.CLOCKED_IN
            hours = round(max(0.0, hours_between(record.clock_in_time, local_now)), 2)
            last_location = record.clock_in_location

        return LiveEntry(
            status=status,
            clock_in_time=record.clock_in_time,
            clock_out_time=record.clock_out_time,
            hours_worked=hours,
            is_within_office=record.is_within_office,
            is_on_time=is_on_time(record.clock_in_time, office, grace_minutes=self._grace_minutes),
            last_location=last_location,
            **common,
        )
