"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_CYCLE_START_DAY = 26
MIN_CYCLE_START_DAY = 1
MAX_CYCLE_START_DAY = 28

DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 200
DEFAULT_LATE_GRACE_MINUTES = 0

WEEK_RANGE_DAYS = 7
MONTH_RANGE_DAYS = 30

UNKNOWN_LABEL = "Unknown"
