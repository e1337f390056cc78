"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

FIRST_HALF_LAST_DAY = 15
DEFAULT_HOURLY_RATE = Decimal("4.50")
DEFAULT_TIMEZONE = "UTC"
DEFAULT_FIX_CLOCK_OUT = "17:00"
UNKNOWN_EMPLOYEE_NAME = "Unknown"
