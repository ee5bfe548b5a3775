"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Kathmandu"
MIN_PASSWORD_LENGTH = 6
DASHBOARD_SALARY_LIMIT = 3
DASHBOARD_TREND_DAYS = 7
