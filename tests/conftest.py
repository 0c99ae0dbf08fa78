from __future__ import annotations

from datetime import datetime, time

import pytest

from src.geo_attendance.geo_attendance.core.enums import CycleType
from src.geo_attendance.geo_attendance.offices.model import Office
from tests.fakes import InMemoryAttendance, InMemoryOffices, InMemoryRoster


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 10, 9, 0, 0)


@pytest.fixture
def hq_office() -> Office:
    return Office(
        office_id=1,
        name="Hyderabad HQ",
        latitude=17.4,
        longitude=78.5,
        radius_meters=100,
        work_start_time=time(9, 30),
        cycle_type=CycleType.CUSTOM,
        cycle_start_day=26,
    )


@pytest.fixture
def branch_office() -> Office:
    return Office(
        office_id=2,
        name="Bengaluru Branch",
        latitude=12.9352,
        longitude=77.6245,
        radius_meters=150,
        work_start_time=time(9, 0),
    )


@pytest.fixture
def offices(hq_office, branch_office) -> InMemoryOffices:
    return InMemoryOffices({hq_office.office_id: hq_office, branch_office.office_id: branch_office})


@pytest.fixture
def roster() -> InMemoryRoster:
    return InMemoryRoster()


@pytest.fixture
def attendance(roster) -> InMemoryAttendance:
    return InMemoryAttendance(roster)
