"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_POOL_SIZE = 10
DEFAULT_WORKDAY_START = time(9, 0)
DEFAULT_LATE_GRACE_MINUTES = 60
INITIAL_LEAVE_VERSION = 0
MIN_PASSWORD_LENGTH = 6

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
