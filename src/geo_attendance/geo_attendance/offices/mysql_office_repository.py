from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import DEFAULT_CYCLE_START_DAY
from ..core.enums import CycleType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Office
from .repository import OfficeRepository

_COLUMNS = """
    office_id, name, latitude, longitude, radius_meters, is_active,
    work_start_time, work_end_time, cycle_type, cycle_start_day, address, timezone
"""


def _to_office(r: Dict[str, Any]) -> Office:
    return Office(
        office_id=int(r["office_id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius_meters=float(r["radius_meters"] or 0),
        is_active=bool(r.get("is_active", True)),
        work_start_time=normalize_mysql_time(r["work_start_time"]),
        work_end_time=normalize_mysql_time(r["work_end_time"]),
        cycle_type=CycleType(r.get("cycle_type") or CycleType.CALENDAR.value),
        cycle_start_day=int(r.get("cycle_start_day") or DEFAULT_CYCLE_START_DAY),
        address=r.get("address"),
        timezone=r.get("timezone"),
    )


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices WHERE is_active=1 ORDER BY office_id")
            return [_to_office(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices ORDER BY office_id")
            return [_to_office(r) for r in fetchall(cur)]

    def get_by_id(self, office_id: int) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices WHERE office_id=%s", (int(office_id),))
            r = fetchone(cur)
            return _to_office(r) if r else None
