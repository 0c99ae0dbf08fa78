from __future__ import annotations

from datetime import date, datetime

import pytest

from src.geo_attendance.geo_attendance.core.enums import LiveStatus, Role
from src.geo_attendance.geo_attendance.monitoring.service import LiveMonitoringService
from tests.fakes import employee, record

TODAY = date(2025, 1, 10)
NOW = datetime(2025, 1, 10, 15, 0)


@pytest.fixture
def populated(attendance, roster, offices):
    for uid in range(1, 11):
        roster.employees[uid] = employee(uid, branch_id=1)
    roster.employees[100] = employee(100, branch_id=1, role=Role.ADMIN)

    # 4 still working (2 remote), 2 done for the day, 4 absent
    attendance.add(record(1, 1, TODAY, clock_in=datetime(2025, 1, 10, 9, 0)))
    attendance.add(record(2, 2, TODAY, clock_in=datetime(2025, 1, 10, 9, 30)))
    attendance.add(record(3, 3, TODAY, clock_in=datetime(2025, 1, 10, 10, 0), is_within_office=False))
    attendance.add(record(4, 4, TODAY, clock_in=datetime(2025, 1, 10, 11, 0), is_within_office=False))
    attendance.add(
        record(5, 5, TODAY, clock_in=datetime(2025, 1, 10, 8, 0), clock_out=datetime(2025, 1, 10, 14, 0), total_hours="6.00")
    )
    attendance.add(
        record(6, 6, TODAY, clock_in=datetime(2025, 1, 10, 9, 45), clock_out=datetime(2025, 1, 10, 13, 45), total_hours="4.00")
    )
    # yesterday's record must not leak into today
    attendance.add(record(7, 7, date(2025, 1, 9), clock_in=datetime(2025, 1, 9, 9, 0)))
    return LiveMonitoringService(attendance, roster, offices, timezone="UTC")


def test_stats_partition_the_roster(populated):
    stats = populated.snapshot(now=NOW).stats

    assert stats.total_employees == 10
    assert stats.currently_working == 4
    assert stats.absent_today == 4
    assert stats.remote_working == 2
    assert stats.office_working == 4
    assert stats.remote_working + stats.office_working + stats.absent_today == stats.total_employees


def test_punctuality_uses_office_start_time(populated):
    stats = populated.snapshot(now=NOW).stats

    # HQ starts at 09:30: users 1, 2, 5 on time; 3, 4, 6 late
    assert stats.on_time_today == 3
    assert stats.late_today == 3


def test_average_hours_over_completed_records(populated):
    assert populated.snapshot(now=NOW).stats.average_hours == 5.0


def test_entries_cover_everyone_on_the_roster(populated):
    snapshot = populated.snapshot(now=NOW)
    by_user = {e.user_id: e for e in snapshot.attendances}

    assert snapshot.reference_date == TODAY
    assert set(by_user) == set(range(1, 11))
    assert by_user[1].status == LiveStatus.CLOCKED_IN
    assert by_user[1].hours_worked == 6.0
    assert by_user[5].status == LiveStatus.CLOCKED_OUT
    assert by_user[5].hours_worked == 6.0
    assert by_user[7].status == LiveStatus.NOT_STARTED
    assert by_user[7].is_on_time is None
    assert by_user[1].branch_name == "Hyderabad HQ"


def test_branch_filter(attendance, roster, offices):
    roster.employees[1] = employee(1, branch_id=1)
    roster.employees[2] = employee(2, branch_id=2)
    roster.employees[3] = employee(3, branch_id=2)
    attendance.add(record(1, 1, TODAY, clock_in=datetime(2025, 1, 10, 9, 0)))
    attendance.add(record(2, 2, TODAY, clock_in=datetime(2025, 1, 10, 9, 0)))

    snapshot = LiveMonitoringService(attendance, roster, offices).snapshot(now=NOW, branch_id=2)

    assert [e.user_id for e in snapshot.attendances] == [2, 3]
    assert snapshot.stats.total_employees == 2
    assert snapshot.stats.currently_working == 1
    assert snapshot.stats.absent_today == 1


def test_unknown_branch_has_unknown_punctuality(attendance, roster, offices):
    roster.employees[1] = employee(1, branch_id=42)
    attendance.add(record(1, 1, TODAY, clock_in=datetime(2025, 1, 10, 8, 0)))

    snapshot = LiveMonitoringService(attendance, roster, offices).snapshot(now=NOW)

    entry = snapshot.attendances[0]
    assert entry.is_on_time is None
    assert entry.branch_name == "Unknown"
    assert snapshot.stats.on_time_today == 0
    assert snapshot.stats.late_today == 0


def test_empty_roster(attendance, roster, offices):
    snapshot = LiveMonitoringService(attendance, roster, offices).snapshot(now=NOW)

    assert snapshot.attendances == []
    assert snapshot.stats.to_dict()["absentToday"] == 0
    assert snapshot.stats.average_hours == 0.0
