from __future__ import annotations

import csv
import io

from .model import AttendanceReport

CSV_FIELDS = [
    "date",
    "user_id",
    "user_name",
    "user_email",
    "department",
    "branch_name",
    "clock_in",
    "clock_out",
    "total_hours",
    "location",
    "on_time",
    "status",
]


def report_to_csv(report: AttendanceReport) -> str:
    """Render report rows as CSV text (header included)."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for row in report.records:
        r = row.record
        writer.writerow(
            {
                "date": r.work_date.strftime("%Y-%m-%d"),
                "user_id": r.user_id,
                "user_name": row.user_name,
                "user_email": row.user_email,
                "department": row.department or "-",
                "branch_name": row.branch_name,
                "clock_in": r.clock_in_time.strftime("%H:%M") if r.clock_in_time else "-",
                "clock_out": r.clock_out_time.strftime("%H:%M") if r.clock_out_time else "-",
                "total_hours": f"{r.total_hours:.2f}" if r.total_hours is not None else "-",
                "location": "Office" if r.is_within_office else "Remote",
                "on_time": "yes" if row.is_within_working_hours else "no",
                "status": row.record_status.value,
            }
        )
    return out.getvalue()
