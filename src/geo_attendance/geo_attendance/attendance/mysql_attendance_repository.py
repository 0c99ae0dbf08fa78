from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, as_float, db_cursor, fetchall, fetchone
from .model import AttendanceRecord, Location
from .repository import AttendanceRepository

_COLUMNS = """
    ar.attendance_id, ar.user_id, ar.work_date,
    ar.clock_in_time, ar.clock_in_lat, ar.clock_in_lng, ar.clock_in_accuracy,
    ar.clock_out_time, ar.clock_out_lat, ar.clock_out_lng, ar.clock_out_accuracy,
    ar.is_within_office, ar.total_hours, ar.created_at, ar.updated_at
"""


def _location(r: Dict[str, Any], prefix: str) -> Optional[Location]:
    lat = r.get(f"{prefix}_lat")
    lng = r.get(f"{prefix}_lng")
    if lat is None or lng is None:
        return None
    return Location(lat=float(lat), lng=float(lng), accuracy=as_float(r.get(f"{prefix}_accuracy")))


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in_time=r.get("clock_in_time"),
        clock_in_location=_location(r, "clock_in"),
        clock_out_time=r.get("clock_out_time"),
        clock_out_location=_location(r, "clock_out"),
        is_within_office=bool(r.get("is_within_office")),
        total_hours=as_decimal(r.get("total_hours")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _date_clauses(start_date: Optional[date], end_date: Optional[date]) -> tuple[list[str], list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if start_date is not None:
        clauses.append("ar.work_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("ar.work_date <= %s")
        params.append(end_date)
    return clauses, params


class MySQLAttendanceRepository(AttendanceRepository):
    """attendance_records has UNIQUE(user_id, work_date); inserts rely on it."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s", (attendance_id,))
        r = fetchone(cur)
        return _to_record(r) if r else None

    def get_open_or_latest(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                ORDER BY (ar.clock_in_time IS NOT NULL AND ar.clock_out_time IS NULL) DESC,
                         ar.updated_at DESC, ar.attendance_id DESC
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in_time: datetime,
        location: Location,
        is_within_office: bool,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, work_date, clock_in_time,
                    clock_in_lat, clock_in_lng, clock_in_accuracy, is_within_office,
                    created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    work_date,
                    clock_in_time,
                    location.lat,
                    location.lng,
                    location.accuracy,
                    int(is_within_office),
                    clock_in_time,
                    clock_in_time,
                ),
            )
            return self._get_by_id(cur, int(cur.lastrowid))

    def start_existing(
        self,
        *,
        attendance_id: int,
        clock_in_time: datetime,
        location: Location,
        is_within_office: bool,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in_time=%s, clock_in_lat=%s, clock_in_lng=%s, clock_in_accuracy=%s,
                    is_within_office=%s, updated_at=%s
                WHERE attendance_id=%s AND clock_in_time IS NULL
                """,
                (
                    clock_in_time,
                    location.lat,
                    location.lng,
                    location.accuracy,
                    int(is_within_office),
                    clock_in_time,
                    int(attendance_id),
                ),
            )
            if cur.rowcount == 0:
                return None
            return self._get_by_id(cur, int(attendance_id))

    def complete_checkout(
        self,
        *,
        attendance_id: int,
        clock_out_time: datetime,
        location: Location,
        total_hours: Decimal,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out_time=%s, clock_out_lat=%s, clock_out_lng=%s, clock_out_accuracy=%s,
                    total_hours=%s, updated_at=%s
                WHERE attendance_id=%s AND clock_in_time IS NOT NULL AND clock_out_time IS NULL
                """,
                (
                    clock_out_time,
                    location.lat,
                    location.lng,
                    location.accuracy,
                    total_hours,
                    clock_out_time,
                    int(attendance_id),
                ),
            )
            if cur.rowcount == 0:
                return None
            return self._get_by_id(cur, int(attendance_id))

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = _date_clauses(start_date, end_date)
        clauses.insert(0, "ar.user_id=%s")
        params.insert(0, int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE {" AND ".join(clauses)}
                ORDER BY ar.work_date DESC, ar.attendance_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        clauses, params = _date_clauses(start_date, end_date)
        clauses.insert(0, "ar.user_id=%s")
        params.insert(0, int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM attendance_records ar WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = _date_clauses(start_date, end_date)
        join = ""
        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))
        if branch_id is not None:
            join = "JOIN users u ON u.user_id = ar.user_id"
            clauses.append("u.branch_id=%s")
            params.append(int(branch_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                {join}
                WHERE {" AND ".join(clauses)}
                ORDER BY ar.work_date DESC, ar.created_at DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
