"""Example: drive the service layer directly (no Flask).

Controllers stay thin; everything below is what the HTTP endpoints call.
"""

import importlib

from config import get_settings_module

from src.geo_attendance.geo_attendance.common.datetime_utils import now_local
from src.geo_attendance.geo_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.ATTENDANCE_TIMEZONE)
    now = now_local(settings.ATTENDANCE_TIMEZONE)

    print(container.report_service.current_period(now=now, branch_id=1).to_dict())
    print(container.monitoring_service.snapshot(now=now).stats.to_dict())
    print(container.attendance_service.get_history(3, limit=5).to_dict())


if __name__ == "__main__":
    main()
