from decimal import Decimal

import pytest

from src.timekeeper.timekeeper.core.exceptions import ValidationError
from src.timekeeper.timekeeper.payroll.calculator.hourly_calculator import HourlyRateCalculator
from src.timekeeper.timekeeper.timesheets.model import EmployeePeriodSummary


def _summary(total_minutes: int) -> EmployeePeriodSummary:
    return EmployeePeriodSummary(
        employee_id="E1",
        employee_name="A",
        total_minutes=total_minutes,
        total_hours=round(total_minutes / 60, 2),
        shifts=(),
        missing_punches=0,
    )


def test_default_rate_multiplies_total_hours():
    calc = HourlyRateCalculator()

    assert calc.rate == Decimal("4.50")
    assert calc.estimate_cost(_summary(510)) == Decimal("38.25")


def test_cost_rounds_half_up_to_cents():
    # 10 minutes -> 0.17 h; 0.17 * 12.25 = 2.0825
    assert HourlyRateCalculator("12.25").estimate_cost(_summary(10)) == Decimal("2.08")
    # 0.5 h * 0.05 = 0.025
    assert HourlyRateCalculator("0.05").estimate_cost(_summary(30)) == Decimal("0.03")


def test_negative_rate_rejected():
    with pytest.raises(ValidationError):
        HourlyRateCalculator(-1)


@pytest.mark.parametrize("raw", ["abc", "", "4,50", "NaN", "Infinity", None])
def test_non_numeric_rate_rejected(raw):
    with pytest.raises(ValidationError):
        HourlyRateCalculator(raw)


def test_rate_setting_with_whitespace_is_accepted():
    assert HourlyRateCalculator(" 7.25 ").rate == Decimal("7.25")
