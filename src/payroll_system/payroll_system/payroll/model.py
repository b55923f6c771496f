from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.exceptions import PerEmployeeFailure


@dataclass(frozen=True)
class Period:
    """A payroll cycle: one calendar month."""

    month: int
    year: int

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def label(self) -> str:
        return f"{self.month:02d}/{self.year}"


@dataclass(frozen=True)
class AttendanceSummary:
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    # Rows whose status is not Present/Late/Absent; excluded from total_days.
    ignored_days: int = 0

    @property
    def total_days(self) -> int:
        return self.present_days + self.late_days + self.absent_days


@dataclass(frozen=True)
class PayrollRecord:
    """Ledger entry for one employee in one period. Never updated once stored."""

    employee_id: int
    month: int
    year: int
    base_salary: Decimal
    total_days: int
    present_days: int
    late_days: int
    absent_days: int
    late_deduction: Decimal
    absent_deduction: Decimal
    total_deduction: Decimal
    net_salary: Decimal
    payroll_id: Optional[int] = None
    generated_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[int, int, int]:
        return self.employee_id, self.month, self.year

    def to_dict(self) -> dict[str, Any]:
        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "base_salary": str(self.base_salary),
            "total_days": self.total_days,
            "present_days": self.present_days,
            "late_days": self.late_days,
            "absent_days": self.absent_days,
            "late_deduction": str(self.late_deduction),
            "absent_deduction": str(self.absent_deduction),
            "total_deduction": str(self.total_deduction),
            "net_salary": str(self.net_salary),
            "generated_at": self.generated_at.isoformat(sep=" ") if self.generated_at else None,
        }


@dataclass(frozen=True)
class PayrollReportRow:
    """Read-model for listings (record plus employee details)."""

    record: PayrollRecord
    full_name: str
    designation: Optional[str] = None
    department_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = self.record.to_dict()
        data["full_name"] = self.full_name
        data["designation"] = self.designation
        data["department_name"] = self.department_name
        return data


@dataclass(frozen=True)
class PeriodSummary:
    month: int
    year: int
    employee_count: int
    total_base_salary: Decimal
    total_deduction: Decimal
    total_net_salary: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "year": self.year,
            "employee_count": self.employee_count,
            "total_base_salary": str(self.total_base_salary),
            "total_deduction": str(self.total_deduction),
            "total_net_salary": str(self.total_net_salary),
        }


@dataclass(frozen=True)
class DepartmentSummary:
    """Payroll totals for one department in one period."""

    department_id: Optional[int]
    department_name: Optional[str]
    month: int
    year: int
    employee_count: int
    total_base_salary: Decimal
    total_deduction: Decimal
    total_net_salary: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "department_id": self.department_id,
            "department_name": self.department_name,
            "month": self.month,
            "year": self.year,
            "employee_count": self.employee_count,
            "total_base_salary": str(self.total_base_salary),
            "total_deduction": str(self.total_deduction),
            "total_net_salary": str(self.total_net_salary),
        }


@dataclass(frozen=True)
class GenerationResult:
    period: Period
    generated_count: int = 0
    skipped_count: int = 0
    failures: tuple[PerEmployeeFailure, ...] = field(default_factory=tuple)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.period.month,
            "year": self.period.year,
            "generated_count": self.generated_count,
            "skipped_count": self.skipped_count,
            "failed_count": self.failed_count,
            "failures": [{"employee_id": f.employee_id, "error": str(f.cause)} for f in self.failures],
        }


@dataclass(frozen=True)
class BackfillResult:
    results: tuple[GenerationResult, ...] = field(default_factory=tuple)
    # (month, year) pairs found in attendance that are not valid periods.
    invalid_periods: tuple[tuple[int, int], ...] = field(default_factory=tuple)

    @property
    def generated_count(self) -> int:
        return sum(r.generated_count for r in self.results)

    @property
    def failed_count(self) -> int:
        return sum(r.failed_count for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "periods": len(self.results),
            "generated_count": self.generated_count,
            "failed_count": self.failed_count,
            "invalid_periods": [{"month": m, "year": y} for m, y in self.invalid_periods],
            "results": [r.to_dict() for r in self.results],
        }
