from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    STAFF = "STAFF"
    ADMIN = "ADMIN"


class RecordState(str, Enum):
    """Lifecycle of an attendance record. CLOSED is terminal."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Operation(str, Enum):
    """Gateway entry points that require an authenticated caller."""

    GET_SELF = "get_self"
    GET_ACTIVE_RECORD = "get_active_record"
    GET_HISTORY = "get_history"
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    LIST_ATTENDANCE = "list_attendance"
    LIST_PROJECTS = "list_projects"
