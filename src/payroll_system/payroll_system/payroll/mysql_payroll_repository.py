from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import InsertOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, to_decimal
from .model import DepartmentSummary, PayrollRecord, PayrollReportRow, PeriodSummary
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_PAYROLL_COLUMNS = """
    p.payroll_id, p.employee_id, p.month, p.year, p.base_salary,
    p.total_days, p.present_days, p.late_days, p.absent_days,
    p.late_deduction, p.absent_deduction, p.total_deduction, p.net_salary,
    p.generated_at
"""


def _row_to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=to_decimal(r["base_salary"]),
        total_days=int(r["total_days"]),
        present_days=int(r["present_days"]),
        late_days=int(r["late_days"]),
        absent_days=int(r["absent_days"]),
        late_deduction=to_decimal(r["late_deduction"]),
        absent_deduction=to_decimal(r["absent_deduction"]),
        total_deduction=to_decimal(r["total_deduction"]),
        net_salary=to_decimal(r["net_salary"]),
        generated_at=r.get("generated_at"),
    )


def _period_filter(alias: str, month: Optional[int], year: Optional[int]) -> tuple[str, tuple[object, ...]]:
    clauses = ["1=1"]
    params: list[object] = []

    if month is not None:
        clauses.append(f"{alias}.month=%s")
        params.append(int(month))
    if year is not None:
        clauses.append(f"{alias}.year=%s")
        params.append(int(year))

    return " AND ".join(clauses), tuple(params)


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, employee_id: int, month: int, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM payroll WHERE employee_id=%s AND month=%s AND year=%s LIMIT 1",
                (int(employee_id), int(month), int(year)),
            )
            return fetchone(cur) is not None

    def insert(self, record: PayrollRecord) -> InsertOutcome:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll
                        (employee_id, month, year, base_salary, total_days, present_days, late_days, absent_days,
                         late_deduction, absent_deduction, total_deduction, net_salary)
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.employee_id,
                        record.month,
                        record.year,
                        record.base_salary,
                        record.total_days,
                        record.present_days,
                        record.late_days,
                        record.absent_days,
                        record.late_deduction,
                        record.absent_deduction,
                        record.total_deduction,
                        record.net_salary,
                    ),
                )
        except mysql.connector.errors.IntegrityError as exc:
            if not is_duplicate_key(exc):
                raise
            logger.info(
                "Payroll row for employee %s in %02d/%s already exists (unique key)",
                record.employee_id,
                record.month,
                record.year,
                extra={"employee_id": record.employee_id, "action": "payroll_insert_conflict"},
            )
            return InsertOutcome.CONFLICT
        return InsertOutcome.CREATED

    def list_records(self, *, month: Optional[int] = None, year: Optional[int] = None) -> Sequence[PayrollReportRow]:
        where, params = _period_filter("p", month, year)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PAYROLL_COLUMNS}, e.first_name, e.last_name, e.designation, d.department_name
                FROM payroll p
                JOIN employees e ON e.employee_id = p.employee_id
                LEFT JOIN departments d ON d.department_id = e.department_id
                WHERE {where}
                ORDER BY p.year DESC, p.month DESC, p.employee_id ASC
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                PayrollReportRow(
                    record=_row_to_record(r),
                    full_name=" ".join(p for p in (r.get("first_name"), r.get("last_name")) if p),
                    designation=r.get("designation"),
                    department_name=r.get("department_name"),
                )
                for r in rows
            ]

    def period_summaries(self, *, month: Optional[int] = None, year: Optional[int] = None) -> Sequence[PeriodSummary]:
        where, params = _period_filter("p", month, year)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.month, p.year,
                       COUNT(*) AS employee_count,
                       SUM(p.base_salary) AS total_base_salary,
                       SUM(p.total_deduction) AS total_deduction,
                       SUM(p.net_salary) AS total_net_salary
                FROM payroll p
                WHERE {where}
                GROUP BY p.year, p.month
                ORDER BY p.year DESC, p.month DESC
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                PeriodSummary(
                    month=int(r["month"]),
                    year=int(r["year"]),
                    employee_count=int(r["employee_count"]),
                    total_base_salary=to_decimal(r["total_base_salary"]) or Decimal("0"),
                    total_deduction=to_decimal(r["total_deduction"]) or Decimal("0"),
                    total_net_salary=to_decimal(r["total_net_salary"]) or Decimal("0"),
                )
                for r in rows
            ]

    def department_summaries(
        self, *, month: Optional[int] = None, year: Optional[int] = None
    ) -> Sequence[DepartmentSummary]:
        where, params = _period_filter("p", month, year)

        # Employees without a department are grouped under a NULL department.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT d.department_id, d.department_name, p.month, p.year,
                       COUNT(*) AS employee_count,
                       SUM(p.base_salary) AS total_base_salary,
                       SUM(p.total_deduction) AS total_deduction,
                       SUM(p.net_salary) AS total_net_salary
                FROM payroll p
                JOIN employees e ON e.employee_id = p.employee_id
                LEFT JOIN departments d ON d.department_id = e.department_id
                WHERE {where}
                GROUP BY p.year, p.month, d.department_id, d.department_name
                ORDER BY p.year DESC, p.month DESC, d.department_name ASC
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                DepartmentSummary(
                    department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
                    department_name=r.get("department_name"),
                    month=int(r["month"]),
                    year=int(r["year"]),
                    employee_count=int(r["employee_count"]),
                    total_base_salary=to_decimal(r["total_base_salary"]) or Decimal("0"),
                    total_deduction=to_decimal(r["total_deduction"]) or Decimal("0"),
                    total_net_salary=to_decimal(r["total_net_salary"]) or Decimal("0"),
                )
                for r in rows
            ]
