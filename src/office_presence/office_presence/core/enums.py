from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Organisational role, lowest to highest."""

    REPORTER = "REPORTER"
    CHAPTER_LEAD = "CHAPTER_LEAD"
    TRIBE_LEAD = "TRIBE_LEAD"


class AttendanceStatus(str, Enum):
    """Status values stored on an attendance record.

    OFF only arrives through allocation; the self-service path never writes it.
    """

    OFFICE = "OFFICE"
    REMOTE = "REMOTE"
    ABSENT = "ABSENT"
    VACATION = "VACATION"
    OFF = "OFF"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class Operation(str, Enum):
    """Actions checked by the access policy table."""

    READ_ATTENDANCE = "read_attendance"
    WRITE_ATTENDANCE = "write_attendance"
    ALLOCATE_ATTENDANCE = "allocate_attendance"
    DELETE_ATTENDANCE = "delete_attendance"
    VIEW_CAPACITY = "view_capacity"
    EDIT_CAPACITY = "edit_capacity"
    VIEW_HIERARCHY = "view_hierarchy"
    MANAGE_DELEGATIONS = "manage_delegations"
    MANAGE_USERS = "manage_users"
    CHANGE_ROLES = "change_roles"
    UPDATE_PROFILE = "update_profile"
    RESET_STATISTICS = "reset_statistics"


class Relation(str, Enum):
    """How the target of an operation relates to the acting principal."""

    SELF = "self"
    DIRECT_REPORT = "direct_report"
    OTHER = "other"
    NONE = "none"
