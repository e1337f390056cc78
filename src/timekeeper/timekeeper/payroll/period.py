from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..common.datetime_utils import ordinal
from ..core.constants import FIRST_HALF_LAST_DAY


@dataclass(frozen=True)
class PayPeriod:
    """Semi-monthly pay cycle. Closed interval: start <= t <= end."""

    start: datetime
    end: datetime
    label: str

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def _last_day(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def get_pay_period(reference: datetime) -> PayPeriod:
    """Pay cycle containing ``reference``: 1st-15th or 16th-end of month.

    Boundaries are built in the reference's own timezone.
    """

    tz = reference.tzinfo
    year, month = reference.year, reference.month

    if reference.day <= FIRST_HALF_LAST_DAY:
        first, last = 1, FIRST_HALF_LAST_DAY
    else:
        first, last = FIRST_HALF_LAST_DAY + 1, _last_day(year, month)

    return PayPeriod(
        start=datetime.combine(date(year, month, first), time.min, tzinfo=tz),
        end=datetime.combine(date(year, month, last), time.max, tzinfo=tz),
        label=f"{ordinal(first)} - {ordinal(last)}",
    )


def previous_pay_period(period: PayPeriod) -> PayPeriod:
    return get_pay_period(period.start - timedelta(days=1))


def next_pay_period(period: PayPeriod) -> PayPeriod:
    return get_pay_period(period.end + timedelta(days=1))
