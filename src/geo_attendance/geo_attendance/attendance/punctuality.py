from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..offices.model import Office


def is_on_time(clock_in: Optional[datetime], office: Optional[Office], *, grace_minutes: int = 0) -> Optional[bool]:
    """Whether a clock-in landed no later than the office work start (+ grace).

    Returns None when it cannot be decided (no clock-in or no office configured).
    """
    if clock_in is None or office is None or office.work_start_time is None:
        return None
    start = datetime.combine(clock_in.date(), office.work_start_time)
    return clock_in <= start + timedelta(minutes=int(grace_minutes))
