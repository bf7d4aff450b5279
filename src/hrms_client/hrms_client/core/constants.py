"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REFRESH_SECONDS = 10
DASHBOARD_IDLE_CYCLES = 6
REPORT_VIEW_CACHE_SIZE = 64
DEFAULT_HTTP_TIMEOUT = 15
SALARY_BASELINE_DAYS = 30
HALF_DAY_WEIGHT = "0.5"
TARGET_HOURS_PER_WORKDAY = 8
ON_LEAVE_TODAY_LIMIT = 6
PLACEHOLDER = "-"
