"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus, Weekday

SELF_SERVICE_STATUSES = frozenset(
    {
        AttendanceStatus.OFFICE,
        AttendanceStatus.REMOTE,
        AttendanceStatus.ABSENT,
        AttendanceStatus.VACATION,
    }
)

ALLOCATION_STATUSES = frozenset(
    {
        AttendanceStatus.OFFICE,
        AttendanceStatus.REMOTE,
        AttendanceStatus.OFF,
    }
)

DEFAULT_CAPACITY = {
    Weekday.MONDAY: 20,
    Weekday.TUESDAY: 10,
    Weekday.WEDNESDAY: 50,
    Weekday.THURSDAY: 20,
    Weekday.FRIDAY: 50,
}

DEFAULT_OCCUPANCY_DAYS = 30
DEFAULT_PATTERN_DAYS = 90
DEFAULT_WEEK_OFFSET_LIMIT = 52
MAX_ANALYTICS_RANGE_DAYS = 366
