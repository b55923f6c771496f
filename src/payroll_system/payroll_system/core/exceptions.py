class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidPeriod(ValidationError):
    """Raised when a payroll month/year is not a valid period."""


class UpstreamUnavailable(DomainError):
    """Raised when the database behind a repository cannot be reached."""


class RecordConflict(DomainError):
    """A payroll row for the same (employee, month, year) already exists."""

    def __init__(self, employee_id: int, month: int, year: int):
        super().__init__(f"Payroll for employee {employee_id} in {month:02d}/{year} already exists")
        self.employee_id = employee_id
        self.month = month
        self.year = year


class PerEmployeeFailure(DomainError):
    """Processing failed for a single employee; the batch keeps going."""

    def __init__(self, employee_id: int, cause: BaseException):
        super().__init__(f"Employee {employee_id}: {cause}")
        self.employee_id = employee_id
        self.cause = cause
