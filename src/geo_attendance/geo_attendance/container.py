from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_GRACE_MINUTES
from .core.enums import CheckInPolicy
from .database.connection import DBConfig, DatabaseConnection
from .monitoring.service import LiveMonitoringService
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.repository import OfficeRepository
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import RosterRepository


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    offices_repo: OfficeRepository
    users_repo: RosterRepository

    attendance_service: AttendanceService
    monitoring_service: LiveMonitoringService
    report_service: AttendanceReportService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    attendance_repo: AttendanceRepository,
    offices_repo: OfficeRepository,
    users_repo: RosterRepository,
    policy: CheckInPolicy = CheckInPolicy.REJECT,
    timezone: str = "UTC",
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of whatever repositories are given."""

    attendance_service = AttendanceService(attendance_repo, offices_repo, policy=policy, timezone=timezone)
    monitoring_service = LiveMonitoringService(
        attendance_repo,
        users_repo,
        offices_repo,
        timezone=timezone,
        grace_minutes=grace_minutes,
    )
    report_service = AttendanceReportService(
        attendance_repo,
        users_repo,
        offices_repo,
        timezone=timezone,
        grace_minutes=grace_minutes,
    )

    return Container(
        attendance_repo=attendance_repo,
        offices_repo=offices_repo,
        users_repo=users_repo,
        attendance_service=attendance_service,
        monitoring_service=monitoring_service,
        report_service=report_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    policy: CheckInPolicy = CheckInPolicy.REJECT,
    timezone: str = "UTC",
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=int(db_config.get("connect_timeout", 5)),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        attendance_repo=MySQLAttendanceRepository(conn),
        offices_repo=MySQLOfficeRepository(conn),
        users_repo=MySQLUserRepository(conn),
        policy=policy,
        timezone=timezone,
        grace_minutes=grace_minutes,
        conn=conn,
    )
