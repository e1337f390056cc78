from __future__ import annotations

from datetime import datetime, time, timedelta, timezone

import pytest

from src.timekeeper.timekeeper.payroll.period import get_pay_period, next_pay_period, previous_pay_period

TZ = timezone(timedelta(hours=-5))


def test_first_half_of_month():
    p = get_pay_period(datetime(2025, 1, 15, 20, 0, tzinfo=TZ))

    assert p.start == datetime(2025, 1, 1, 0, 0, tzinfo=TZ)
    assert p.end == datetime.combine(datetime(2025, 1, 15).date(), time.max, tzinfo=TZ)
    assert p.label == "1st - 15th"


@pytest.mark.parametrize(
    "reference, last_day, label",
    [
        (datetime(2025, 1, 16, tzinfo=TZ), 31, "16th - 31st"),
        (datetime(2025, 2, 20, tzinfo=TZ), 28, "16th - 28th"),
        (datetime(2024, 2, 29, tzinfo=TZ), 29, "16th - 29th"),
        (datetime(2025, 4, 30, tzinfo=TZ), 30, "16th - 30th"),
    ],
)
def test_second_half_runs_to_end_of_month(reference, last_day, label):
    p = get_pay_period(reference)

    assert p.start == datetime(reference.year, reference.month, 16, tzinfo=TZ)
    assert p.end.day == last_day
    assert p.end.time() == time.max
    assert p.label == label


def test_period_is_closed_interval():
    p = get_pay_period(datetime(2025, 1, 5, tzinfo=TZ))

    assert p.contains(p.start)
    assert p.contains(p.end)
    assert not p.contains(p.end + timedelta(microseconds=1))
    assert not p.contains(p.start - timedelta(microseconds=1))


def test_period_keeps_reference_timezone():
    p = get_pay_period(datetime(2025, 6, 3, tzinfo=timezone.utc))

    assert p.start.tzinfo is timezone.utc
    assert p.end.tzinfo is timezone.utc


def test_navigation_crosses_month_and_year():
    first_half_jan = get_pay_period(datetime(2025, 1, 3, tzinfo=TZ))

    prev = previous_pay_period(first_half_jan)
    assert prev.start == datetime(2024, 12, 16, tzinfo=TZ)
    assert prev.end.date().isoformat() == "2024-12-31"

    nxt = next_pay_period(prev)
    assert nxt == first_half_jan

    assert next_pay_period(first_half_jan).start == datetime(2025, 1, 16, tzinfo=TZ)
