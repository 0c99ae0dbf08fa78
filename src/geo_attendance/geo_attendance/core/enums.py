from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles issued by the auth collaborator."""

    ADMIN = "admin"
    TEAM_LEAD = "team_lead"
    EMPLOYEE = "employee"


ELEVATED_ROLES = frozenset({Role.ADMIN, Role.TEAM_LEAD})


class AttendanceState(str, Enum):
    """Lifecycle of one (user, date) attendance record."""

    NOT_STARTED = "NOT_STARTED"
    CLOCKED_IN = "CLOCKED_IN"
    CLOCKED_OUT = "CLOCKED_OUT"


class LiveStatus(str, Enum):
    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"
    NOT_STARTED = "not_started"


class RecordStatus(str, Enum):
    """Status of a historical record as shown in reports."""

    ACTIVE = "active"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class CycleType(str, Enum):
    CALENDAR = "calendar"
    CUSTOM = "custom"


class CheckInPolicy(str, Enum):
    """What to do with a check-in reported outside every office radius."""

    REJECT = "reject"
    ALLOW_REMOTE = "allow_remote"


class ReportRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CURRENT_PERIOD = "current_period"
    CUSTOM = "custom"
