from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance statuses that take part in payroll (stored verbatim in the DB)."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"


class InsertOutcome(str, Enum):
    """Result of writing a payroll row into the ledger."""

    CREATED = "CREATED"
    CONFLICT = "CONFLICT"
