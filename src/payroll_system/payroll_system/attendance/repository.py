from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from ..payroll.model import Period


class AttendanceRepository(Protocol):
    def count_by_status(self, employee_id: int, period: Period) -> Mapping[str, int]:
        """Number of attendance days per raw status for one employee in one period."""

        raise NotImplementedError

    def list_distinct_periods(self) -> Sequence[Period]:
        """Every (month, year) with attendance, newest first."""

        raise NotImplementedError
