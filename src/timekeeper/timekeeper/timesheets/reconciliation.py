"""Pair raw clock punches into shifts and per-employee period totals.

Pure functions; nothing here touches the store. Callers normalize
timestamps to aware datetimes before calling in (see
``common.datetime_utils.to_instant``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import PunchType, ShiftStatus
from ..time_entries.model import TimeEntry
from .model import DailyShift, EmployeePeriodSummary


def _open_shift(entry: TimeEntry, status: ShiftStatus) -> DailyShift:
    return DailyShift(
        clock_in_id=entry.id,
        date=entry.timestamp.date(),
        clock_in=entry.timestamp,
        duration_minutes=0,
        status=status,
    )


def _completed_shift(clock_in: TimeEntry, clock_out: TimeEntry) -> DailyShift:
    # Whole minutes, truncated; clock_out never sorts before clock_in.
    minutes = int((clock_out.timestamp - clock_in.timestamp).total_seconds() // 60)
    return DailyShift(
        clock_in_id=clock_in.id,
        clock_out_id=clock_out.id,
        date=clock_in.timestamp.date(),
        clock_in=clock_in.timestamp,
        clock_out=clock_out.timestamp,
        duration_minutes=max(minutes, 0),
        status=ShiftStatus.COMPLETED,
    )


def _pair_shifts(entries: Sequence[TimeEntry], period_start: datetime, period_end: datetime) -> list[DailyShift]:
    shifts: list[DailyShift] = []
    current_in: Optional[TimeEntry] = None

    for entry in entries:
        if entry.timestamp < period_start or entry.timestamp > period_end:
            continue

        if entry.punch_type == PunchType.CLOCK_IN:
            if current_in is not None:
                # Forgot to clock out, then clocked in again.
                shifts.append(_open_shift(current_in, ShiftStatus.MISSING_OUT))
            current_in = entry
        elif entry.punch_type == PunchType.CLOCK_OUT:
            if current_in is not None:
                shifts.append(_completed_shift(current_in, entry))
                current_in = None
            # Orphan clock-outs are dropped.

    if current_in is not None:
        shifts.append(_open_shift(current_in, ShiftStatus.ACTIVE))

    return shifts


def reconcile(
    entries: Iterable[TimeEntry],
    period_start: datetime,
    period_end: datetime,
) -> dict[str, EmployeePeriodSummary]:
    """Rebuild every employee's shifts for the closed window [period_start, period_end].

    Entries may be unsorted, contain punches outside the window, or be
    missing either side of a pair; none of that raises. Employees left with
    no shifts are omitted. Only COMPLETED shifts count toward totals.
    """

    ordered = sorted(entries, key=lambda e: e.timestamp)

    grouped: dict[str, list[TimeEntry]] = {}
    for entry in ordered:
        grouped.setdefault(entry.employee_id, []).append(entry)

    summary: dict[str, EmployeePeriodSummary] = {}
    for employee_id, employee_entries in grouped.items():
        shifts = _pair_shifts(employee_entries, period_start, period_end)
        if not shifts:
            continue

        total_minutes = sum(s.duration_minutes for s in shifts if s.status == ShiftStatus.COMPLETED)
        missing = sum(1 for s in shifts if s.status == ShiftStatus.MISSING_OUT)
        shifts.sort(key=lambda s: s.clock_in, reverse=True)

        summary[employee_id] = EmployeePeriodSummary(
            employee_id=employee_id,
            employee_name=employee_entries[0].employee_name,
            total_minutes=total_minutes,
            total_hours=round(total_minutes / 60, 2),
            shifts=tuple(shifts),
            missing_punches=missing,
        )

    return summary


def active_employee_ids(summaries: Mapping[str, EmployeePeriodSummary]) -> list[str]:
    return [employee_id for employee_id, s in summaries.items() if s.is_active]


def count_active_employees(summaries: Mapping[str, EmployeePeriodSummary]) -> int:
    return len(active_employee_ids(summaries))


def total_hours(summaries: Mapping[str, EmployeePeriodSummary]) -> float:
    return round(sum(s.total_hours for s in summaries.values()), 2)
