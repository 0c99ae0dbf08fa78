from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pytest

from src.geo_attendance.geo_attendance.core.enums import RecordStatus, ReportRange
from src.geo_attendance.geo_attendance.core.exceptions import ValidationError
from src.geo_attendance.geo_attendance.reports.export import CSV_FIELDS, report_to_csv
from src.geo_attendance.geo_attendance.reports.model import ReportFilter
from src.geo_attendance.geo_attendance.reports.service import AttendanceReportService
from tests.fakes import employee, record

NOW = datetime(2025, 1, 10, 18, 0)


@pytest.fixture
def service(attendance, roster, offices):
    roster.employees[1] = employee(1, branch_id=1)
    roster.employees[2] = employee(2, branch_id=1, department="Sales")
    roster.employees[3] = employee(3, branch_id=2)

    attendance.add(
        record(1, 1, date(2025, 1, 10), clock_in=datetime(2025, 1, 10, 9, 15), clock_out=datetime(2025, 1, 10, 17, 15), total_hours="8.00")
    )
    attendance.add(record(2, 2, date(2025, 1, 10), clock_in=datetime(2025, 1, 10, 10, 0), is_within_office=False))
    attendance.add(
        record(3, 3, date(2025, 1, 10), clock_in=datetime(2025, 1, 10, 8, 55), clock_out=datetime(2025, 1, 10, 13, 55), total_hours="5.00")
    )
    attendance.add(record(4, 1, date(2025, 1, 6), clock_in=datetime(2025, 1, 6, 9, 0)))
    attendance.add(
        record(5, 1, date(2024, 12, 20), clock_in=datetime(2024, 12, 20, 9, 0), clock_out=datetime(2024, 12, 20, 18, 0), total_hours="9.00")
    )
    return AttendanceReportService(attendance, roster, offices, timezone="UTC")


def test_resolve_ranges(service, hq_office):
    today = date(2025, 1, 10)

    assert service.resolve_range(ReportFilter(range=ReportRange.TODAY), today=today)[:2] == (today, today)
    assert service.resolve_range(ReportFilter(range=ReportRange.WEEK), today=today)[:2] == (date(2025, 1, 4), today)
    assert service.resolve_range(ReportFilter(range=ReportRange.MONTH), today=today)[:2] == (date(2024, 12, 12), today)
    assert service.resolve_range(
        ReportFilter(range=ReportRange.CURRENT_PERIOD, branch_id=hq_office.office_id), today=today
    )[:2] == (date(2024, 12, 26), date(2025, 1, 25))
    assert service.resolve_range(ReportFilter(range=ReportRange.CURRENT_PERIOD), today=today)[:2] == (
        date(2025, 1, 1),
        date(2025, 1, 31),
    )


def test_custom_range_requires_both_dates(service):
    with pytest.raises(ValidationError):
        service.resolve_range(ReportFilter(range=ReportRange.CUSTOM, start=date(2025, 1, 1)), today=date(2025, 1, 10))
    with pytest.raises(ValidationError):
        service.resolve_range(
            ReportFilter(range=ReportRange.CUSTOM, start=date(2025, 1, 9), end=date(2025, 1, 1)),
            today=date(2025, 1, 10),
        )


def test_today_report_summary(service):
    report = service.build_report(ReportFilter(range=ReportRange.TODAY), now=NOW)
    summary = report.summary

    assert len(report.records) == 3
    assert summary.total_employees == 3
    assert summary.present_today == 2
    # HQ starts 09:30, branch 09:00
    assert summary.on_time == 2
    assert summary.total_hours == 13.0
    assert summary.average_hours == pytest.approx(4.33)


def test_records_are_enriched(service):
    report = service.build_report(ReportFilter(range=ReportRange.TODAY), now=NOW)
    rows = {r.record.user_id: r for r in report.records}

    assert rows[1].branch_name == "Hyderabad HQ"
    assert rows[1].record_status == RecordStatus.COMPLETED
    assert rows[2].record_status == RecordStatus.ACTIVE
    assert rows[2].is_within_working_hours is False
    assert rows[3].branch_name == "Bengaluru Branch"
    assert rows[2].to_dict()["user_department"] == "Sales"


def test_past_open_record_is_incomplete(service):
    report = service.build_report(ReportFilter(range=ReportRange.WEEK), now=NOW)
    rows = {r.record.attendance_id: r for r in report.records}

    assert rows[4].record_status == RecordStatus.INCOMPLETE
    assert 5 not in rows
    assert report.summary.present_today == 0


def test_branch_breakdown_only_without_branch_filter(service):
    overall = service.build_report(ReportFilter(range=ReportRange.TODAY), now=NOW)
    branches = {b.branch_id: b for b in overall.summary.branches}

    assert branches[1].total_employees == 2
    assert branches[1].present == 2
    assert branches[1].on_time == 1
    assert branches[1].total_hours == 8.0
    assert branches[2].total_hours == 5.0

    filtered = service.build_report(ReportFilter(range=ReportRange.TODAY, branch_id=2), now=NOW)
    assert [r.record.user_id for r in filtered.records] == [3]
    assert filtered.summary.branches == []


def test_employee_filter(service):
    report = service.build_report(
        ReportFilter(range=ReportRange.CUSTOM, start=date(2024, 12, 1), end=date(2025, 1, 31), user_id=1),
        now=NOW,
    )
    assert sorted(r.record.attendance_id for r in report.records) == [1, 4, 5]


def test_empty_report_has_zero_summary(service):
    report = service.build_report(ReportFilter(range=ReportRange.TODAY, date=date(2025, 2, 1)), now=NOW)

    assert report.records == []
    assert report.summary.to_dict() == {
        "totalEmployees": 0,
        "presentToday": 0,
        "onTime": 0,
        "totalHours": 0.0,
        "averageHours": 0.0,
        "branches": [],
    }


def test_csv_export(service):
    report = service.build_report(ReportFilter(range=ReportRange.TODAY, branch_id=1), now=NOW)
    rows = list(csv.DictReader(io.StringIO(report_to_csv(report))))

    assert list(rows[0].keys()) == CSV_FIELDS
    by_user = {r["user_id"]: r for r in rows}
    assert by_user["1"]["total_hours"] == "8.00"
    assert by_user["1"]["on_time"] == "yes"
    assert by_user["2"]["clock_out"] == "-"
    assert by_user["2"]["location"] == "Remote"


def test_named_range_is_narrowed_by_dates(service):
    today = date(2025, 1, 10)

    start, end, _ = service.resolve_range(
        ReportFilter(range=ReportRange.WEEK, start=date(2025, 1, 6), end=date(2025, 1, 8)), today=today
    )
    assert (start, end) == (date(2025, 1, 6), date(2025, 1, 8))

    start, end, _ = service.resolve_range(ReportFilter(range=ReportRange.WEEK, start=date(2024, 12, 1)), today=today)
    assert (start, end) == (date(2025, 1, 4), today)


def test_narrowing_outside_the_range_is_rejected(service):
    with pytest.raises(ValidationError):
        service.resolve_range(
            ReportFilter(range=ReportRange.TODAY, start=date(2025, 1, 11)), today=date(2025, 1, 10)
        )


def test_week_report_narrowed_to_one_day(service):
    report = service.build_report(
        ReportFilter(range=ReportRange.WEEK, start=date(2025, 1, 6), end=date(2025, 1, 6)), now=NOW
    )
    assert [r.record.attendance_id for r in report.records] == [4]
