from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): the payroll service depends on this interface, not on a concrete DB.
    """

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError
