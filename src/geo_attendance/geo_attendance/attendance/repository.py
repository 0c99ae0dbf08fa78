from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, Location


class AttendanceRepository(Protocol):
    """Persistence contract for attendance rows.

    Implementations must keep (user_id, work_date) unique: a second insert for the
    same key raises DuplicateRecordError instead of creating another row.
    """

    def get_open_or_latest(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """The open record for the key if any, otherwise the most recent one."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in_time: datetime,
        location: Location,
        is_within_office: bool,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def start_existing(
        self,
        *,
        attendance_id: int,
        clock_in_time: datetime,
        location: Location,
        is_within_office: bool,
    ) -> Optional[AttendanceRecord]:
        """Fill clock-in on a record that has none yet.

        Returns None when the record already has a clock-in (lost race).
        """

        raise NotImplementedError

    def complete_checkout(
        self,
        *,
        attendance_id: int,
        clock_out_time: datetime,
        location: Location,
        total_hours: Decimal,
    ) -> Optional[AttendanceRecord]:
        """Set clock-out on an open record.

        Returns None when the record was already closed (lost race).
        """

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records in [start_date, end_date], newest first.

        ``branch_id`` filters on the owning user's branch.
        """

        raise NotImplementedError
