from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.punctuality import is_on_time
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import to_reference_time
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, MONTH_RANGE_DAYS, UNKNOWN_LABEL, WEEK_RANGE_DAYS
from ..core.enums import RecordStatus, ReportRange
from ..core.exceptions import ValidationError
from ..offices.model import Office
from ..offices.repository import OfficeRepository
from ..periods.calculator import PeriodCalculator
from ..periods.strategies.base import Period
from ..users.model import Employee
from ..users.repository import RosterRepository
from .model import AttendanceReport, BranchSummary, EnrichedRecord, ReportFilter, ReportSummary

logger = logging.getLogger(__name__)


def _record_status(record: AttendanceRecord, today: date) -> RecordStatus:
    if record.clock_out_time is not None:
        return RecordStatus.COMPLETED
    if record.clock_in_time is not None and record.work_date == today:
        return RecordStatus.ACTIVE
    return RecordStatus.INCOMPLETE


class AttendanceReportService:
    """Historical and per-period attendance reports."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        roster: RosterRepository,
        offices: OfficeRepository,
        *,
        timezone: str = "UTC",
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        periods: Optional[PeriodCalculator] = None,
    ):
        self._attendance = attendance
        self._roster = roster
        self._offices = offices
        self._timezone = timezone
        self._grace_minutes = int(grace_minutes)
        self._periods = periods or PeriodCalculator()

    def _office(self, branch_id: Optional[int]) -> Optional[Office]:
        if branch_id is None:
            return None
        office = self._offices.get_by_id(int(branch_id))
        if office is None:
            logger.warning("Branch %s has no office configured", branch_id)
        return office

    def current_period(self, *, now: datetime, branch_id: Optional[int] = None, reference: Optional[date] = None) -> Period:
        reference = reference or to_reference_time(now, self._timezone).date()
        return self._periods.get_period(self._office(branch_id), reference)

    def resolve_range(self, flt: ReportFilter, *, today: date) -> tuple[date, date, str]:
        """Resolve the filter to an inclusive (start, end, label).

        For named ranges, ``start``/``end`` on the filter narrow the window further.
        """
        rng = ReportRange(flt.range)
        if rng == ReportRange.CUSTOM:
            return self._custom_range(flt)

        start, end, label = self._named_range(rng, flt, flt.date or today)
        if flt.start is None and flt.end is None:
            return start, end, label

        start = max(start, flt.start) if flt.start else start
        end = min(end, flt.end) if flt.end else end
        if start > end:
            raise ValidationError("start_date/end_date fall outside the requested range")
        return start, end, f"{start.isoformat()} - {end.isoformat()}"

    def _named_range(self, rng: ReportRange, flt: ReportFilter, reference: date) -> tuple[date, date, str]:
        if rng == ReportRange.TODAY:
            return reference, reference, reference.isoformat()
        if rng == ReportRange.WEEK:
            start = reference - timedelta(days=WEEK_RANGE_DAYS - 1)
            return start, reference, f"Last {WEEK_RANGE_DAYS} days"
        if rng == ReportRange.MONTH:
            start = reference - timedelta(days=MONTH_RANGE_DAYS - 1)
            return start, reference, f"Last {MONTH_RANGE_DAYS} days"
        if rng == ReportRange.CURRENT_PERIOD:
            period = self._periods.get_period(self._office(flt.branch_id), reference)
            return period.start, period.end, period.label
        raise ValidationError(f"Unknown range: {rng.value}")

    @staticmethod
    def _custom_range(flt: ReportFilter) -> tuple[date, date, str]:
        if flt.start is None or flt.end is None:
            raise ValidationError("start_date and end_date are required for a custom range")
        if flt.start > flt.end:
            raise ValidationError("start_date must not be after end_date")
        return flt.start, flt.end, f"{flt.start.isoformat()} - {flt.end.isoformat()}"

    def build_report(self, flt: ReportFilter, *, now: datetime) -> AttendanceReport:
        today = to_reference_time(now, self._timezone).date()
        start, end, label = self.resolve_range(flt, today=today)

        records = list(
            self._attendance.list_between(
                start_date=start,
                end_date=end,
                user_id=flt.user_id,
                branch_id=flt.branch_id,
            )
        )
        users = {e.user_id: e for e in self._roster.list_by_ids([r.user_id for r in records])}
        offices = {o.office_id: o for o in self._offices.list_all()}

        missing_users = sorted({r.user_id for r in records} - set(users))
        if missing_users:
            logger.warning("Report has records for unknown users: %s", missing_users)

        enriched = [self._enrich(r, users.get(r.user_id), offices, today) for r in records]
        summary = self._summarize(
            enriched,
            single_day=ReportRange(flt.range) == ReportRange.TODAY,
            by_branch=flt.branch_id is None,
        )

        logger.info("Report %s..%s: %d record(s), %d employee(s)", start, end, len(enriched), summary.total_employees)
        return AttendanceReport(start=start, end=end, label=label, records=enriched, summary=summary)

    def _enrich(
        self,
        record: AttendanceRecord,
        employee: Optional[Employee],
        offices: dict[int, Office],
        today: date,
    ) -> EnrichedRecord:
        branch_id = employee.branch_id if employee else None
        office = offices.get(branch_id) if branch_id is not None else None
        on_time = is_on_time(record.clock_in_time, office, grace_minutes=self._grace_minutes)

        return EnrichedRecord(
            record=record,
            user_name=(employee.full_name or employee.email) if employee else UNKNOWN_LABEL,
            user_email=employee.email if employee else "",
            department=employee.department if employee else None,
            branch_id=branch_id,
            branch_name=office.name if office else UNKNOWN_LABEL,
            branch_cycle_type=office.cycle_type if office else None,
            is_within_working_hours=bool(on_time),
            record_status=_record_status(record, today),
        )

    def _summarize(self, rows: list[EnrichedRecord], *, single_day: bool, by_branch: bool) -> ReportSummary:
        if not rows:
            return ReportSummary()

        total_hours = sum(float(r.record.total_hours or 0) for r in rows)

        branches: list[BranchSummary] = []
        if by_branch:
            groups: dict[Optional[int], BranchSummary] = {}
            employees: dict[Optional[int], set[int]] = {}
            for row in rows:
                group = groups.get(row.branch_id)
                if group is None:
                    group = groups[row.branch_id] = BranchSummary(branch_id=row.branch_id, branch_name=row.branch_name)
                    employees[row.branch_id] = set()
                employees[row.branch_id].add(row.record.user_id)
                if row.record.clock_in_time is not None:
                    group.present += 1
                if row.is_within_working_hours:
                    group.on_time += 1
                group.total_hours += float(row.record.total_hours or 0)
            for branch_id, group in groups.items():
                group.total_employees = len(employees[branch_id])
            branches = sorted(groups.values(), key=lambda g: g.branch_name)

        return ReportSummary(
            total_employees=len({r.record.user_id for r in rows}),
            present_today=(
                sum(1 for r in rows if r.record.clock_in_time is not None and r.record.is_within_office)
                if single_day
                else 0
            ),
            on_time=sum(1 for r in rows if r.is_within_working_hours),
            total_hours=round(total_hours, 2),
            average_hours=round(total_hours / len(rows), 2),
            branches=branches,
        )
