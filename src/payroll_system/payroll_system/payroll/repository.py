from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import InsertOutcome
from .model import DepartmentSummary, PayrollRecord, PayrollReportRow, PeriodSummary


class PayrollRepository(Protocol):
    """The payroll ledger.

    The store must enforce uniqueness of (employee_id, month, year). `insert` reports a
    rejected duplicate as InsertOutcome.CONFLICT (or raises RecordConflict); it never
    overwrites an existing row.
    """

    def exists(self, employee_id: int, month: int, year: int) -> bool:
        raise NotImplementedError

    def insert(self, record: PayrollRecord) -> InsertOutcome:
        raise NotImplementedError

    def list_records(self, *, month: Optional[int] = None, year: Optional[int] = None) -> Sequence[PayrollReportRow]:
        raise NotImplementedError

    def period_summaries(self, *, month: Optional[int] = None, year: Optional[int] = None) -> Sequence[PeriodSummary]:
        raise NotImplementedError

    def department_summaries(
        self, *, month: Optional[int] = None, year: Optional[int] = None
    ) -> Sequence[DepartmentSummary]:
        raise NotImplementedError
