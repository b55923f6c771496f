from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from ...employees.model import Employee
from ..model import AttendanceSummary, PayrollRecord, Period


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Every entry point (HTTP, backfill, scheduled script) goes through one instance of
    this, so the deduction formula has a single home.
    """

    @abstractmethod
    def summarize(self, status_counts: Mapping[str, int]) -> AttendanceSummary:
        raise NotImplementedError

    @abstractmethod
    def calculate(self, employee: Employee, period: Period, summary: AttendanceSummary) -> PayrollRecord:
        raise NotImplementedError
