"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Windows are closed at the last millisecond of the day, not at midnight.
END_OF_DAY = time(23, 59, 59, 999000)

# Fixed tie-break for exceptions sharing a date.
EXCEPTION_PRIORITY = {"REPLACE": 0, "REMOVE": 1, "ADD": 2}

DEFAULT_RESOLVE_DAYS = 14
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 30
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 60
DEFAULT_RATE_LIMIT_CAPACITY = 10_000
