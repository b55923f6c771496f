from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_YEAR, MIN_YEAR, MONEY_QUANTUM
from ..core.exceptions import InvalidPeriod, ValidationError

# ASCII digits only: str.isdigit() also accepts superscripts that int() rejects.
_INT_RE = re.compile(r"-?[0-9]+", re.ASCII)


def _as_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; a JSON `true` is not a month.
    if isinstance(value, bool):
        raise InvalidPeriod(f"{field_name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise InvalidPeriod(f"{field_name} must be an integer")


def require_month(value: Any) -> int:
    month = _as_int(value, "month")
    if not 1 <= month <= 12:
        raise InvalidPeriod(f"month must be between 1 and 12, got {month}")
    return month


def require_year(value: Any) -> int:
    year = _as_int(value, "year")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidPeriod(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


def optional_month(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_month(value)


def optional_year(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_year(value)


def require_money(value: Any, field_name: str, *, allow_negative: bool = False) -> Decimal:
    """Coerce a DB/config value into a 2-place Decimal."""
    if value is None or isinstance(value, (bool, float)):
        raise ValidationError(f"{field_name} is not a valid amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount: {value!r}")
    if amount < 0 and not allow_negative:
        raise ValidationError(f"{field_name} must not be negative")
    return amount.quantize(MONEY_QUANTUM)
