from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from src.timekeeper.timekeeper.core.enums import PunchType, ShiftStatus
from src.timekeeper.timekeeper.timesheets.reconciliation import (
    active_employee_ids,
    count_active_employees,
    reconcile,
    total_hours,
)
from tests.fakes import make_entry

IN = PunchType.CLOCK_IN
OUT = PunchType.CLOCK_OUT

TZ = timezone(timedelta(hours=7))
START = datetime(2025, 3, 1, 0, 0, tzinfo=TZ)
END = datetime(2025, 3, 15, 23, 59, 59, 999999, tzinfo=TZ)


def at(day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 3, day, hour, minute, second, tzinfo=TZ)


def test_single_pair_is_one_completed_shift():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 17, 30)),
    ]

    result = reconcile(entries, START, END)

    s = result["E1"]
    assert len(s.shifts) == 1
    shift = s.shifts[0]
    assert shift.status == ShiftStatus.COMPLETED
    assert shift.clock_in_id == "a"
    assert shift.clock_out_id == "b"
    assert shift.clock_out == at(3, 17, 30)
    assert shift.date == date(2025, 3, 3)
    assert shift.duration_minutes == 510
    assert s.total_minutes == 510
    assert s.total_hours == 8.5
    assert s.missing_punches == 0


def test_double_clock_in_marks_missing_out_and_keeps_active():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", IN, at(4, 9)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert [(x.clock_in_id, x.status) for x in s.shifts] == [
        ("b", ShiftStatus.ACTIVE),
        ("a", ShiftStatus.MISSING_OUT),
    ]
    assert all(x.duration_minutes == 0 and x.clock_out is None for x in s.shifts)
    assert s.missing_punches == 1
    assert s.total_minutes == 0


def test_orphan_clock_out_alone_omits_employee():
    result = reconcile([make_entry("a", "E1", OUT, at(3, 17))], START, END)

    assert result == {}


def test_orphan_clock_out_is_not_counted():
    entries = [
        make_entry("x", "E1", OUT, at(3, 7)),
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 10)),
        make_entry("y", "E1", OUT, at(3, 11)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert len(s.shifts) == 1
    assert s.total_minutes == 60
    assert s.missing_punches == 0


def test_two_pairs_sum_and_sort_newest_first():
    entries = [
        make_entry("d", "E1", OUT, at(4, 12)),
        make_entry("a", "E1", IN, at(3, 8)),
        make_entry("c", "E1", IN, at(4, 8)),
        make_entry("b", "E1", OUT, at(3, 16)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert [x.clock_in_id for x in s.shifts] == ["c", "a"]
    assert [x.duration_minutes for x in s.shifts] == [240, 480]
    assert s.total_minutes == 720
    assert s.total_hours == 12.0


def test_duration_truncates_partial_minutes():
    entries = [
        make_entry("a", "E1", IN, at(3, 9, 0, 30)),
        make_entry("b", "E1", OUT, at(3, 9, 45, 10)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.shifts[0].duration_minutes == 44


def test_total_hours_rounded_to_two_places():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 9, 10)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.total_minutes == 10
    assert s.total_hours == 0.17


def test_open_clock_in_is_active_and_employee_still_listed():
    s = reconcile([make_entry("a", "E2", IN, at(3, 8))], START, END)["E2"]

    assert len(s.shifts) == 1
    assert s.shifts[0].status == ShiftStatus.ACTIVE
    assert s.total_minutes == 0
    assert s.missing_punches == 0
    assert s.is_active


def test_clock_in_before_window_is_not_paired_across_boundary():
    entries = [
        make_entry("a", "E1", IN, START - timedelta(hours=2)),
        make_entry("b", "E1", OUT, START + timedelta(hours=6)),
    ]

    assert reconcile(entries, START, END) == {}


def test_clock_out_after_window_leaves_shift_active():
    entries = [
        make_entry("a", "E1", IN, END - timedelta(hours=1)),
        make_entry("b", "E1", OUT, END + timedelta(hours=1)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert [x.status for x in s.shifts] == [ShiftStatus.ACTIVE]
    assert s.total_minutes == 0


def test_window_bounds_are_inclusive():
    entries = [
        make_entry("a", "E1", IN, START),
        make_entry("b", "E1", OUT, END),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.shifts[0].status == ShiftStatus.COMPLETED


def test_employees_are_grouped_independently():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E2", IN, at(3, 9, 5)),
        make_entry("c", "E1", OUT, at(3, 17)),
        make_entry("d", "E2", OUT, at(3, 13, 5)),
    ]

    result = reconcile(entries, START, END)

    assert result["E1"].total_minutes == 480
    assert result["E2"].total_minutes == 240


def test_same_timestamp_keeps_input_order():
    # Stable sort: the CLOCK_IN listed first opens the shift, then pairs with the CLOCK_OUT.
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 9)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.shifts[0].status == ShiftStatus.COMPLETED
    assert s.shifts[0].duration_minutes == 0


def test_same_timestamp_out_listed_first_is_orphan():
    entries = [
        make_entry("b", "E1", OUT, at(3, 9)),
        make_entry("a", "E1", IN, at(3, 9)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert [x.status for x in s.shifts] == [ShiftStatus.ACTIVE]


def test_employee_name_comes_from_earliest_entry():
    entries = [
        make_entry("b", "E1", OUT, at(3, 17), name="Renamed"),
        make_entry("a", "E1", IN, at(3, 9), name="Original"),
    ]

    assert reconcile(entries, START, END)["E1"].employee_name == "Original"


def test_shift_date_uses_clock_in_local_day():
    late = datetime(2025, 3, 3, 23, 30, tzinfo=TZ)
    entries = [
        make_entry("a", "E1", IN, late),
        make_entry("b", "E1", OUT, late + timedelta(hours=3)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.shifts[0].date == date(2025, 3, 3)
    assert s.shifts[0].duration_minutes == 180


def test_mixed_offsets_order_by_instant():
    utc = timezone.utc
    entries = [
        make_entry("b", "E1", OUT, datetime(2025, 3, 3, 10, 0, tzinfo=utc)),  # 17:00 at +07
        make_entry("a", "E1", IN, at(3, 9)),
    ]

    s = reconcile(entries, START, END)["E1"]

    assert s.shifts[0].duration_minutes == 480


def test_reconcile_is_idempotent_and_does_not_mutate_input():
    entries = [
        make_entry("c", "E1", IN, at(5, 9)),
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 12)),
        make_entry("z", "E9", OUT, at(4, 12)),
    ]
    snapshot = list(entries)

    first = reconcile(entries, START, END)
    second = reconcile(entries, START, END)

    assert first == second
    assert repr(first) == repr(second)
    assert entries == snapshot


def test_empty_input_returns_empty_map():
    assert reconcile([], START, END) == {}


def test_inverted_window_returns_empty_map():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 17)),
    ]

    assert reconcile(entries, END, START) == {}


def test_active_helpers_and_total_hours():
    entries = [
        make_entry("a", "E1", IN, at(3, 9)),
        make_entry("b", "E1", OUT, at(3, 13, 30)),
        make_entry("c", "E2", IN, at(3, 8)),
        make_entry("d", "E3", IN, at(3, 8)),
        make_entry("e", "E3", OUT, at(3, 10)),
        make_entry("f", "E3", IN, at(3, 11)),
    ]

    result = reconcile(entries, START, END)

    assert active_employee_ids(result) == ["E2", "E3"]
    assert count_active_employees(result) == 2
    assert total_hours(result) == 6.5
