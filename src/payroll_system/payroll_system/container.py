from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.config import PayrollConfig
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollGenerator, PayrollQueryService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    payroll_repo: MySQLPayrollRepository

    payroll_generator: PayrollGenerator
    payroll_query_service: PayrollQueryService


def build_container(*, db_config: dict, payroll_config: Optional[PayrollConfig] = None) -> Container:
    payroll_config = payroll_config or PayrollConfig()
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    payroll_generator = PayrollGenerator(
        employees_repo,
        attendance_repo,
        payroll_repo,
        calculator=StandardPayrollCalculator(
            late_rate=payroll_config.late_rate,
            absent_rate=payroll_config.absent_rate,
        ),
        max_workers=payroll_config.max_workers,
    )
    payroll_query_service = PayrollQueryService(payroll_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        payroll_generator=payroll_generator,
        payroll_query_service=payroll_query_service,
    )
