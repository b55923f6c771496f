from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Optional, Sequence, Union

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_month, optional_year, require_month, require_year
from ..core.enums import InsertOutcome
from ..core.exceptions import InvalidPeriod, PerEmployeeFailure, RecordConflict, UpstreamUnavailable
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import BackfillResult, DepartmentSummary, GenerationResult, PayrollReportRow, Period, PeriodSummary
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class _Step(Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"


_StepResult = Union[_Step, PerEmployeeFailure]


class PayrollGenerator:
    """Use case: generate payroll rows, at most one per (employee, month, year).

    The ledger's unique key is what actually prevents duplicates; the `exists` check
    only saves work. A conflicting insert from an overlapping run counts as skipped.

    Failures are split in two:
    - UpstreamUnavailable (DB unreachable) aborts the whole call.
    - Anything else is contained to the employee and reported in the result.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        ledger: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        max_workers: int = 1,
    ):
        self._employees = employees
        self._attendance = attendance
        self._ledger = ledger
        self._calculator = calculator or StandardPayrollCalculator()
        self._max_workers = max(int(max_workers), 1)

    def generate_for_period(self, month: Any, year: Any) -> GenerationResult:
        period = Period(month=require_month(month), year=require_year(year))

        employees = [e for e in self._employees.list_active() if e.is_active]
        logger.info(
            "Generating payroll for %s (%d active employees)",
            period.label,
            len(employees),
            extra={"month": period.month, "year": period.year, "action": "payroll_generate_start"},
        )

        steps = self._run(employees, period)

        result = GenerationResult(
            period=period,
            generated_count=sum(1 for s in steps if s is _Step.GENERATED),
            skipped_count=sum(1 for s in steps if s is _Step.SKIPPED),
            failures=tuple(s for s in steps if isinstance(s, PerEmployeeFailure)),
        )
        logger.info(
            "Payroll %s: generated=%d skipped=%d failed=%d",
            period.label,
            result.generated_count,
            result.skipped_count,
            result.failed_count,
            extra={"month": period.month, "year": period.year, "action": "payroll_generate_done"},
        )
        return result

    def generate_for_all_historical_periods(self) -> BackfillResult:
        periods = sorted(
            {(p.year, p.month) for p in self._attendance.list_distinct_periods()},
            reverse=True,
        )
        logger.info("Backfilling payroll for %d periods", len(periods), extra={"action": "payroll_backfill_start"})

        results: list[GenerationResult] = []
        invalid: list[tuple[int, int]] = []
        for year, month in periods:
            try:
                require_month(month)
                require_year(year)
            except InvalidPeriod as exc:
                # e.g. a zero date in attendance; the rest of the history is still processed.
                logger.warning(
                    "Skipping attendance period %s/%s: %s",
                    month,
                    year,
                    exc,
                    extra={"month": month, "year": year, "action": "payroll_backfill_invalid_period"},
                )
                invalid.append((month, year))
                continue
            results.append(self.generate_for_period(month, year))

        backfill = BackfillResult(results=tuple(results), invalid_periods=tuple(invalid))
        logger.info(
            "Backfill complete: generated=%d failed=%d",
            backfill.generated_count,
            backfill.failed_count,
            extra={"action": "payroll_backfill_done"},
        )
        return backfill

    def _run(self, employees: Sequence[Employee], period: Period) -> list[_StepResult]:
        if self._max_workers == 1 or len(employees) <= 1:
            return [self._process_employee(e, period) for e in employees]

        workers = min(self._max_workers, len(employees))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="payroll") as pool:
            futures = [pool.submit(self._process_employee, e, period) for e in employees]
            try:
                return [f.result() for f in futures]
            except UpstreamUnavailable:
                for f in futures:
                    f.cancel()
                raise

    def _process_employee(self, employee: Employee, period: Period) -> _StepResult:
        employee_id = getattr(employee, "employee_id", None)
        try:
            return self._generate_one(employee, period)
        except UpstreamUnavailable:
            raise
        except Exception as exc:
            logger.error(
                "Payroll generation failed for employee %s in %s: %s",
                employee_id,
                period.label,
                exc,
                extra={
                    "employee_id": employee_id,
                    "month": period.month,
                    "year": period.year,
                    "error_type": type(exc).__name__,
                    "action": "payroll_employee_failed",
                },
                exc_info=True,
            )
            return PerEmployeeFailure(employee_id, exc)

    def _generate_one(self, employee: Employee, period: Period) -> _Step:
        if self._ledger.exists(employee.employee_id, period.month, period.year):
            logger.debug("Skipping employee %s: payroll for %s exists", employee.employee_id, period.label)
            return _Step.SKIPPED

        summary = self._calculator.summarize(self._attendance.count_by_status(employee.employee_id, period))
        if summary.ignored_days:
            logger.warning(
                "Employee %s has %d attendance day(s) in %s with an unrecognized status; not counted",
                employee.employee_id,
                summary.ignored_days,
                period.label,
                extra={"employee_id": employee.employee_id, "action": "payroll_unknown_status"},
            )

        record = self._calculator.calculate(employee, period, summary)

        try:
            outcome = self._ledger.insert(record)
        except RecordConflict:
            outcome = InsertOutcome.CONFLICT

        if outcome is InsertOutcome.CONFLICT:
            logger.info(
                "Payroll for employee %s in %s was generated concurrently; skipping",
                employee.employee_id,
                period.label,
                extra={"employee_id": employee.employee_id, "action": "payroll_insert_conflict"},
            )
            return _Step.SKIPPED

        logger.info(
            "Generated payroll for employee %s (%s) in %s: net=%s",
            employee.employee_id,
            employee.full_name,
            period.label,
            record.net_salary,
            extra={"employee_id": employee.employee_id, "action": "payroll_generated"},
        )
        return _Step.GENERATED


class PayrollQueryService:
    """Read side of the ledger (listing, per-period and per-department totals)."""

    def __init__(self, ledger: PayrollRepository):
        self._ledger = ledger

    def list_records(self, *, month: Any = None, year: Any = None) -> Sequence[PayrollReportRow]:
        return self._ledger.list_records(month=optional_month(month), year=optional_year(year))

    def period_summaries(self, *, month: Any = None, year: Any = None) -> Sequence[PeriodSummary]:
        return self._ledger.period_summaries(month=optional_month(month), year=optional_year(year))

    def department_summaries(self, *, month: Any = None, year: Any = None) -> Sequence[DepartmentSummary]:
        return self._ledger.department_summaries(month=optional_month(month), year=optional_year(year))
