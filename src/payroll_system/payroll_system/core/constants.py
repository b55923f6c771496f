"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_LATE_DEDUCTION_RATE = Decimal("200")
DEFAULT_ABSENT_DEDUCTION_RATE = Decimal("500")
DEFAULT_PAYROLL_MAX_WORKERS = 1
DEFAULT_CONNECTION_TIMEOUT = 10

MIN_YEAR = 1
# Range of a MySQL DATE year.
MAX_YEAR = 9999

MONEY_QUANTUM = Decimal("0.01")
