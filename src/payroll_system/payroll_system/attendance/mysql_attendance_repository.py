from __future__ import annotations

from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..payroll.model import Period
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_by_status(self, employee_id: int, period: Period) -> Mapping[str, int]:
        # Plain date bounds keep the (employee_id, attendance_date) index usable.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS day_count
                FROM attendance
                WHERE employee_id=%s AND attendance_date BETWEEN %s AND %s
                GROUP BY status
                """,
                (int(employee_id), period.first_day, period.last_day),
            )
            rows = fetchall(cur)
            return {str(r["status"]): int(r["day_count"]) for r in rows}

    def list_distinct_periods(self) -> Sequence[Period]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT YEAR(attendance_date) AS year, MONTH(attendance_date) AS month
                FROM attendance
                ORDER BY year DESC, month DESC
                """
            )
            rows = fetchall(cur)
            return [
                Period(month=int(r["month"]), year=int(r["year"]))
                for r in rows
                if r.get("month") is not None and r.get("year") is not None
            ]
