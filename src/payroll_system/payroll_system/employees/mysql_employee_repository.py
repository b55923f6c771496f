from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, first_name, last_name, base_salary, is_active
                FROM employees
                WHERE is_active = 1
                ORDER BY employee_id ASC
                """
            )
            rows = fetchall(cur)
            return [
                Employee(
                    employee_id=int(r["employee_id"]),
                    full_name=" ".join(p for p in (r.get("first_name"), r.get("last_name")) if p),
                    base_salary=to_decimal(r.get("base_salary")),
                    is_active=bool(r.get("is_active", True)),
                )
                for r in rows
            ]
