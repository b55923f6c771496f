from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by payroll.

    Note: Plain data object (no DB access). `base_salary` is whatever the directory
    stored; the calculator validates it.
    """

    employee_id: int
    full_name: str
    base_salary: Decimal
    is_active: bool = True
