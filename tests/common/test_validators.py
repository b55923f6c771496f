from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from src.payroll_system.payroll_system.common.datetime_utils import previous_month
from src.payroll_system.payroll_system.common.validators import (
    optional_month,
    optional_year,
    require_money,
    require_month,
    require_year,
)
from src.payroll_system.payroll_system.core.exceptions import InvalidPeriod, ValidationError
from src.payroll_system.payroll_system.payroll.config import PayrollConfig
from src.payroll_system.payroll_system.payroll.model import Period


@pytest.mark.parametrize("value, expected", [(1, 1), (12, 12), ("7", 7), (" 03 ", 3)])
def test_require_month_accepts_integers(value, expected):
    assert require_month(value) == expected


@pytest.mark.parametrize("value", [0, 13, -1, "13", "", "1.0", 1.0, True, None, [1]])
def test_require_month_rejects(value):
    with pytest.raises(InvalidPeriod):
        require_month(value)


@pytest.mark.parametrize("value", [0, -2026, 10000, "abc", False])
def test_require_year_rejects(value):
    with pytest.raises(InvalidPeriod):
        require_year(value)


@pytest.mark.parametrize("value", ["--5", "-", "²", "٣", "１", "1_0", "+3", "0x1"])
def test_non_ascii_or_malformed_digits_are_invalid_period(value):
    with pytest.raises(InvalidPeriod):
        require_month(value)


def test_year_range_covers_mysql_dates():
    assert require_year(1) == 1
    assert require_year("9999") == 9999


@pytest.mark.parametrize(
    "month, year, last",
    [(1, 2026, date(2026, 1, 31)), (2, 2024, date(2024, 2, 29)), (2, 2026, date(2026, 2, 28)), (12, 9999, date(9999, 12, 31))],
)
def test_period_last_day(month, year, last):
    period = Period(month=month, year=year)

    assert period.first_day == date(year, month, 1)
    assert period.last_day == last


def test_optional_filters():
    assert optional_month(None) is None
    assert optional_month("") is None
    assert optional_year("2026") == 2026
    with pytest.raises(InvalidPeriod):
        optional_month("13")


def test_invalid_period_is_a_validation_error():
    assert issubclass(InvalidPeriod, ValidationError)


def test_require_money_quantizes():
    assert require_money("200", "rate") == Decimal("200.00")
    assert require_money(Decimal("1.005"), "rate") == Decimal("1.00")
    assert require_money(-5, "net", allow_negative=True) == Decimal("-5.00")


@pytest.mark.parametrize("value", [None, 1.5, "NaN", "Infinity", "x", -1])
def test_require_money_rejects(value):
    with pytest.raises(ValidationError):
        require_money(value, "amount")


@pytest.mark.parametrize(
    "today, expected",
    [(date(2026, 1, 15), (12, 2025)), (date(2026, 3, 1), (2, 2026)), (date(2026, 12, 31), (11, 2026))],
)
def test_previous_month(today, expected):
    assert previous_month(today) == expected


def test_payroll_config_from_settings():
    settings = SimpleNamespace(LATE_DEDUCTION_RATE="150", ABSENT_DEDUCTION_RATE="450.5", PAYROLL_MAX_WORKERS="3")

    config = PayrollConfig.from_settings(settings)

    assert config.late_rate == Decimal("150")
    assert config.absent_rate == Decimal("450.50")
    assert config.max_workers == 3


def test_payroll_config_defaults_and_bad_values():
    assert PayrollConfig.from_settings(SimpleNamespace()) == PayrollConfig()

    with pytest.raises(ValidationError):
        PayrollConfig.from_settings(SimpleNamespace(PAYROLL_MAX_WORKERS=0))
    with pytest.raises(ValidationError):
        PayrollConfig.from_settings(SimpleNamespace(LATE_DEDUCTION_RATE="-200"))
