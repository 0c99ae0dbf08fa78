from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from src.geo_attendance.geo_attendance.attendance.mysql_attendance_repository import _to_record
from src.geo_attendance.geo_attendance.core.enums import AttendanceState, CycleType
from src.geo_attendance.geo_attendance.database.mysql_base import normalize_mysql_time
from src.geo_attendance.geo_attendance.offices.mysql_office_repository import _to_office


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        (time(9, 30), time(9, 30)),
        (timedelta(hours=9, minutes=30), time(9, 30)),
        ("18:00", time(18, 0)),
        ("08:15:20", time(8, 15, 20)),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected


def test_normalize_mysql_time_rejects_other_types():
    with pytest.raises(TypeError):
        normalize_mysql_time(930)


def test_office_row_mapping():
    office = _to_office(
        {
            "office_id": 1,
            "name": "Hyderabad HQ",
            "latitude": Decimal("17.4000000"),
            "longitude": Decimal("78.5000000"),
            "radius_meters": 100,
            "is_active": 1,
            "work_start_time": timedelta(hours=9, minutes=30),
            "work_end_time": timedelta(hours=18, minutes=30),
            "cycle_type": "custom",
            "cycle_start_day": 26,
            "address": None,
            "timezone": "Asia/Kolkata",
        }
    )

    assert office.latitude == 17.4
    assert office.work_start_time == time(9, 30)
    assert office.cycle_type == CycleType.CUSTOM
    assert office.to_dict()["work_end_time"] == "18:30"


def test_attendance_row_mapping():
    rec = _to_record(
        {
            "attendance_id": 5,
            "user_id": 7,
            "work_date": date(2025, 1, 10),
            "clock_in_time": datetime(2025, 1, 10, 9, 0),
            "clock_in_lat": Decimal("17.4000000"),
            "clock_in_lng": Decimal("78.5000000"),
            "clock_in_accuracy": None,
            "clock_out_time": None,
            "clock_out_lat": None,
            "clock_out_lng": None,
            "clock_out_accuracy": None,
            "is_within_office": 1,
            "total_hours": None,
            "created_at": None,
            "updated_at": None,
        }
    )

    assert rec.state == AttendanceState.CLOCKED_IN
    assert rec.clock_in_location.lat == 17.4
    assert rec.clock_out_location is None
    assert rec.is_within_office is True
