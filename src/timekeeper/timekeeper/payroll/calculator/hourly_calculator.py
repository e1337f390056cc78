from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .base import PayrollCalculator
from ...core.constants import DEFAULT_HOURLY_RATE
from ...core.exceptions import ValidationError
from ...timesheets.model import EmployeePeriodSummary

CENTS = Decimal("0.01")


class HourlyRateCalculator(PayrollCalculator):
    """Flat rule: total_hours * rate, rounded half-up to cents."""

    def __init__(self, rate: Decimal | str | float = DEFAULT_HOURLY_RATE):
        try:
            rate = Decimal(str(rate).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Hourly rate must be a number: {rate!r}") from exc
        if not rate.is_finite():
            raise ValidationError(f"Hourly rate must be a number: {rate!r}")
        if rate < 0:
            raise ValidationError("Hourly rate cannot be negative")
        self._rate = rate

    @property
    def rate(self) -> Decimal:
        return self._rate

    def estimate_cost(self, summary: EmployeePeriodSummary) -> Decimal:
        hours = Decimal(str(summary.total_hours))
        return (hours * self._rate).quantize(CENTS, rounding=ROUND_HALF_UP)
