from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from ...common.validators import require_money
from ...core.constants import DEFAULT_ABSENT_DEDUCTION_RATE, DEFAULT_LATE_DEDUCTION_RATE
from ...core.enums import AttendanceStatus
from ...employees.model import Employee
from ..model import AttendanceSummary, PayrollRecord, Period
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: fixed penalty per Late/Absent day, net = base - deductions.

    Net salary is not clamped at zero.
    """

    def __init__(
        self,
        *,
        late_rate: Decimal | int | str = DEFAULT_LATE_DEDUCTION_RATE,
        absent_rate: Decimal | int | str = DEFAULT_ABSENT_DEDUCTION_RATE,
    ):
        self.late_rate = require_money(late_rate, "late_rate")
        self.absent_rate = require_money(absent_rate, "absent_rate")

    def summarize(self, status_counts: Mapping[str, int]) -> AttendanceSummary:
        counts = {s: 0 for s in AttendanceStatus}
        ignored = 0
        for raw_status, count in status_counts.items():
            try:
                counts[AttendanceStatus(raw_status)] += int(count)
            except ValueError:
                ignored += int(count)

        return AttendanceSummary(
            present_days=counts[AttendanceStatus.PRESENT],
            late_days=counts[AttendanceStatus.LATE],
            absent_days=counts[AttendanceStatus.ABSENT],
            ignored_days=ignored,
        )

    def calculate(self, employee: Employee, period: Period, summary: AttendanceSummary) -> PayrollRecord:
        base_salary = require_money(employee.base_salary, "base_salary")

        late_deduction = summary.late_days * self.late_rate
        absent_deduction = summary.absent_days * self.absent_rate
        total_deduction = late_deduction + absent_deduction

        return PayrollRecord(
            employee_id=employee.employee_id,
            month=period.month,
            year=period.year,
            base_salary=base_salary,
            total_days=summary.total_days,
            present_days=summary.present_days,
            late_days=summary.late_days,
            absent_days=summary.absent_days,
            late_deduction=late_deduction,
            absent_deduction=absent_deduction,
            total_deduction=total_deduction,
            net_salary=base_salary - total_deduction,
        )
