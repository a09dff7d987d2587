"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Used by overtime when the day has no schedule row.
DEFAULT_MIN_WORK_HOURS = 8.0
DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_SESSION_DAYS = 7
DEFAULT_TIMEZONE = "Asia/Jakarta"

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
