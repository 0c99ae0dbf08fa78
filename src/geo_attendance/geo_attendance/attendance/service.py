from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_reference_time
from ..common.validators import optional_accuracy, require_coordinates
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import CheckInPolicy
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    DuplicateRecordError,
    LocationOutsideOffice,
    NotCheckedIn,
    ValidationError,
)
from ..geofence.validator import GeofenceValidator
from ..offices.model import Office
from ..offices.repository import OfficeRepository
from .model import (
    AttendanceHistory,
    AttendanceStatusView,
    CheckInResult,
    CheckOutResult,
    HistorySummary,
    Location,
    Pagination,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def compute_total_hours(clock_in: datetime, clock_out: datetime) -> tuple[Decimal, bool]:
    """Worked hours rounded to 2 dp, clamped at zero.

    Returns (hours, clamped) where ``clamped`` flags a negative raw duration.
    """
    seconds = Decimal(str((clock_out - clock_in).total_seconds()))
    # Compare before rounding: short skews round to -0.00.
    if seconds < 0:
        return Decimal("0.00"), True
    return (seconds / Decimal(3600)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP), False


class AttendanceService:
    """Check-in / check-out lifecycle per user per day.

    NOT_STARTED -> CLOCKED_IN -> CLOCKED_OUT. Every call receives ``now``
    explicitly; the work date is always derived from it server side.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        offices: OfficeRepository,
        *,
        policy: CheckInPolicy = CheckInPolicy.REJECT,
        timezone: str = "UTC",
    ):
        self._attendance = attendance
        self._offices = offices
        self._policy = CheckInPolicy(policy)
        self._timezone = timezone

    @property
    def policy(self) -> CheckInPolicy:
        return self._policy

    def work_date(self, now: datetime) -> date:
        return to_reference_time(now, self._timezone).date()

    def list_offices(self) -> Sequence[Office]:
        return self._offices.list_active()

    def _validator(self) -> GeofenceValidator:
        return GeofenceValidator(self._offices.list_active())

    def check_in(
        self,
        user_id: int,
        latitude: Any,
        longitude: Any,
        accuracy: Any = None,
        *,
        now: datetime,
    ) -> CheckInResult:
        lat, lng = require_coordinates(latitude, longitude)
        local_now = to_reference_time(now, self._timezone)
        today = local_now.date()

        existing = self._attendance.get_open_or_latest(user_id, today)
        if existing and existing.clock_in_time is not None:
            raise AlreadyCheckedIn()

        geofence = self._validator().check(lat, lng)
        if not geofence.is_within_office and self._policy == CheckInPolicy.REJECT:
            logger.warning(
                "Check-in rejected for user %s: nearest office %s at %s m",
                user_id,
                geofence.nearest_office.office_id if geofence.nearest_office else None,
                geofence.distance_meters,
            )
            raise LocationOutsideOffice()

        location = Location(lat=lat, lng=lng, accuracy=optional_accuracy(accuracy))

        if existing:
            record = self._attendance.start_existing(
                attendance_id=existing.attendance_id,
                clock_in_time=local_now,
                location=location,
                is_within_office=geofence.is_within_office,
            )
            if record is None:
                raise AlreadyCheckedIn()
        else:
            try:
                record = self._attendance.create_checkin(
                    user_id=user_id,
                    work_date=today,
                    clock_in_time=local_now,
                    location=location,
                    is_within_office=geofence.is_within_office,
                )
            except DuplicateRecordError:
                # A concurrent request for the same (user, date) inserted first.
                raise AlreadyCheckedIn() from None

        logger.info(
            "User %s checked in on %s (%s)",
            user_id,
            today.isoformat(),
            "office" if record.is_within_office else "remote",
        )
        return CheckInResult(record=record, geofence=geofence)

    def check_out(
        self,
        user_id: int,
        latitude: Any,
        longitude: Any,
        accuracy: Any = None,
        *,
        now: datetime,
    ) -> CheckOutResult:
        lat, lng = require_coordinates(latitude, longitude)
        local_now = to_reference_time(now, self._timezone)
        today = local_now.date()

        record = self._attendance.get_open_or_latest(user_id, today)
        if not record or record.clock_in_time is None:
            raise NotCheckedIn()
        if record.clock_out_time is not None:
            raise AlreadyCheckedOut()

        total_hours, skewed = compute_total_hours(record.clock_in_time, local_now)
        clock_out_time = local_now
        if skewed:
            logger.warning(
                "Clock skew for user %s: check-out %s precedes check-in %s",
                user_id,
                local_now.isoformat(),
                record.clock_in_time.isoformat(),
            )
            clock_out_time = record.clock_in_time

        geofence = self._validator().check(lat, lng)

        updated = self._attendance.complete_checkout(
            attendance_id=record.attendance_id,
            clock_out_time=clock_out_time,
            location=Location(lat=lat, lng=lng, accuracy=optional_accuracy(accuracy)),
            total_hours=total_hours,
        )
        if updated is None:
            raise AlreadyCheckedOut()

        logger.info("User %s checked out on %s after %s h", user_id, today.isoformat(), total_hours)
        return CheckOutResult(
            record=updated,
            total_hours=total_hours,
            is_valid_location=geofence.is_within_office,
            clock_skew_detected=skewed,
        )

    def get_status(self, user_id: int, *, now: datetime) -> AttendanceStatusView:
        record = self._attendance.get_open_or_latest(user_id, self.work_date(now))
        can_check_in = record is None or record.clock_in_time is None
        can_check_out = bool(record and record.clock_in_time is not None and record.clock_out_time is None)
        return AttendanceStatusView(record=record, can_check_in=can_check_in, can_check_out=can_check_out)

    def get_history(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> AttendanceHistory:
        if start and end and start > end:
            raise ValidationError("start_date must not be after end_date")
        page = max(int(page), 1)
        limit = min(max(int(limit), 1), MAX_HISTORY_LIMIT)

        records = list(
            self._attendance.list_for_user(
                user_id,
                start_date=start,
                end_date=end,
                limit=limit,
                offset=(page - 1) * limit,
            )
        )
        total = self._attendance.count_for_user(user_id, start_date=start, end_date=end)

        total_hours = sum(float(r.total_hours or 0) for r in records)
        summary = HistorySummary(
            total_days=len(records),
            valid_check_ins=sum(1 for r in records if r.is_within_office),
            total_hours=round(total_hours, 2),
            average_hours=round(total_hours / len(records), 2) if records else 0.0,
        )
        return AttendanceHistory(
            records=records,
            summary=summary,
            pagination=Pagination(page=page, limit=limit, total=total),
        )
