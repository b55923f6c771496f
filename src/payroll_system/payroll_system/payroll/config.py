from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..common.validators import require_money
from ..core.constants import (
    DEFAULT_ABSENT_DEDUCTION_RATE,
    DEFAULT_LATE_DEDUCTION_RATE,
    DEFAULT_PAYROLL_MAX_WORKERS,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollConfig:
    late_rate: Decimal = DEFAULT_LATE_DEDUCTION_RATE
    absent_rate: Decimal = DEFAULT_ABSENT_DEDUCTION_RATE
    max_workers: int = DEFAULT_PAYROLL_MAX_WORKERS

    @classmethod
    def from_settings(cls, settings: Any) -> "PayrollConfig":
        """Read payroll knobs from a settings module (config.development, ...)."""
        max_workers = int(getattr(settings, "PAYROLL_MAX_WORKERS", DEFAULT_PAYROLL_MAX_WORKERS))
        if max_workers < 1:
            raise ValidationError("PAYROLL_MAX_WORKERS must be at least 1")
        return cls(
            late_rate=require_money(getattr(settings, "LATE_DEDUCTION_RATE", DEFAULT_LATE_DEDUCTION_RATE), "LATE_DEDUCTION_RATE"),
            absent_rate=require_money(
                getattr(settings, "ABSENT_DEDUCTION_RATE", DEFAULT_ABSENT_DEDUCTION_RATE), "ABSENT_DEDUCTION_RATE"
            ),
            max_workers=max_workers,
        )
