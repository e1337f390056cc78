from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import combine_local, now_local, parse_clock_time, to_instant
from ..common.validators import require_non_empty
from ..core.constants import UNKNOWN_EMPLOYEE_NAME
from ..core.enums import PunchMethod, PunchType
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.period import PayPeriod, get_pay_period
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from .model import EmployeePeriodSummary
from .reconciliation import count_active_employees, reconcile, total_hours

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimesheetView:
    period: PayPeriod
    summaries: list[EmployeePeriodSummary]
    todays_entries: list[TimeEntry]
    total_hours: float
    active_employees: int


class TimesheetService:
    """Payroll timesheet screen: reconciled view plus admin corrections.

    Corrections only ever write to the store; the next ``period_view`` call
    re-reconciles from scratch.
    """

    def __init__(self, entries: TimeEntryRepository, *, tz: tzinfo):
        self._entries = entries
        self._tz = tz

    def _now(self, now: datetime | None) -> datetime:
        return to_instant(now, self._tz) if now is not None else now_local(self._tz)

    def _load(self, start: datetime, end: datetime) -> list[TimeEntry]:
        # Every timestamp leaves here aware and in self._tz.
        return [
            replace(e, timestamp=to_instant(e.timestamp, self._tz))
            for e in self._entries.list_between(start, end)
            if not e.is_deleted
        ]

    def period_view(self, reference: datetime | None = None, *, now: datetime | None = None) -> TimesheetView:
        now = self._now(now)
        reference = to_instant(reference, self._tz) if reference is not None else now
        period = get_pay_period(reference)

        entries = self._load(period.start, period.end)
        summaries = reconcile(entries, period.start, period.end)
        missing = sum(s.missing_punches for s in summaries.values())
        if missing:
            logger.debug("Period %s has %d missing clock-out(s)", period.label, missing)

        todays = [e for e in entries if e.timestamp.date() == now.date()]
        todays.sort(key=lambda e: e.timestamp, reverse=True)

        return TimesheetView(
            period=period,
            summaries=sorted(summaries.values(), key=lambda s: (s.employee_name.lower(), s.employee_id)),
            todays_entries=todays,
            total_hours=total_hours(summaries),
            active_employees=count_active_employees(summaries),
        )

    def fix_missing_punch(
        self,
        *,
        employee_id: str,
        employee_name: str,
        shift_date: date,
        clock_out: str,
        clock_in_id: Optional[str] = None,
    ) -> TimeEntry:
        """Append an ADMIN clock-out on ``shift_date`` at ``clock_out`` (HH:MM).

        With ``clock_in_id``, the clock-out must belong to the same employee and
        must not precede that clock-in.
        """

        at = combine_local(shift_date, parse_clock_time(clock_out), self._tz)
        if clock_in_id:
            clock_in = self._require_entry(
                clock_in_id, PunchType.CLOCK_IN, employee_id=require_non_empty(employee_id, "employee_id")
            )
            if at < to_instant(clock_in.timestamp, self._tz):
                raise ValidationError("Clock-out cannot be earlier than clock-in")

        entry = self._append(employee_id, employee_name, PunchType.CLOCK_OUT, at)
        logger.info("Fixed missing clock-out for %s at %s", entry.employee_id, at.isoformat())
        return entry

    def stop_clock(self, *, employee_id: str, employee_name: str, now: datetime | None = None) -> TimeEntry:
        entry = self._append(employee_id, employee_name, PunchType.CLOCK_OUT, self._now(now))
        logger.info("Stopped clock for %s", entry.employee_id)
        return entry

    def add_shift(
        self,
        *,
        employee_id: str,
        employee_name: Optional[str],
        shift_date: date,
        start: str,
        end: Optional[str] = None,
    ) -> tuple[TimeEntry, Optional[TimeEntry]]:
        start_at = combine_local(shift_date, parse_clock_time(start), self._tz)
        end_at = combine_local(shift_date, parse_clock_time(end), self._tz) if (end or "").strip() else None
        if end_at is not None and end_at < start_at:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        employee_id = require_non_empty(employee_id, "employee_id")
        name = (employee_name or "").strip() or self._known_name(employee_id)

        punches = [(PunchType.CLOCK_IN, start_at)]
        if end_at is not None:
            punches.append((PunchType.CLOCK_OUT, end_at))

        created = self._entries.create_many(
            employee_id=employee_id,
            employee_name=require_non_empty(name, "employee_name"),
            method=PunchMethod.ADMIN,
            punches=punches,
        )
        clock_in = created[0]
        clock_out = created[1] if len(created) > 1 else None
        logger.info("Added shift for %s on %s", employee_id, shift_date.isoformat())
        return clock_in, clock_out

    def edit_shift(
        self,
        *,
        clock_in_id: str,
        clock_out_id: Optional[str],
        shift_date: date,
        start: str,
        end: Optional[str] = None,
    ) -> None:
        """Move a shift's source punches to new wall-clock times on ``shift_date``."""

        start_at = combine_local(shift_date, parse_clock_time(start), self._tz)
        end_at = None
        if clock_out_id and (end or "").strip():
            end_at = combine_local(shift_date, parse_clock_time(end), self._tz)
            if end_at < start_at:
                raise ValidationError("Clock-out cannot be earlier than clock-in")

        clock_in_id = require_non_empty(clock_in_id, "clock_in_id")
        clock_in = self._require_entry(clock_in_id, PunchType.CLOCK_IN)
        changes = {clock_in_id: start_at}
        if end_at is not None:
            self._require_entry(clock_out_id, PunchType.CLOCK_OUT, employee_id=clock_in.employee_id)
            changes[clock_out_id] = end_at

        self._entries.update_timestamps(changes)
        logger.info("Edited shift %s", clock_in_id)

    def delete_shift(self, *, clock_in_id: str, clock_out_id: Optional[str] = None) -> None:
        clock_in_id = require_non_empty(clock_in_id, "clock_in_id")
        clock_in = self._require_entry(clock_in_id, PunchType.CLOCK_IN)
        entry_ids = [clock_in_id]
        if clock_out_id:
            self._require_entry(clock_out_id, PunchType.CLOCK_OUT, employee_id=clock_in.employee_id)
            entry_ids.append(clock_out_id)

        if not self._entries.soft_delete_many(entry_ids):
            raise NotFoundError(f"Shift {clock_in_id} changed while deleting; nothing was removed")
        logger.info("Deleted shift %s", clock_in_id)

    def _append(self, employee_id: str, employee_name: str, kind: PunchType, at: datetime) -> TimeEntry:
        return self._entries.create(
            employee_id=require_non_empty(employee_id, "employee_id"),
            employee_name=require_non_empty(employee_name, "employee_name"),
            punch_type=kind,
            timestamp=at,
            method=PunchMethod.ADMIN,
        )

    def _known_name(self, employee_id: str) -> str:
        last = self._entries.get_latest_for_employee(employee_id)
        return last.employee_name if last else UNKNOWN_EMPLOYEE_NAME

    def _require_entry(self, entry_id: str, kind: PunchType, *, employee_id: Optional[str] = None) -> TimeEntry:
        entry = self._entries.get_by_id(entry_id)
        if not entry:
            raise NotFoundError(f"Time entry {entry_id} not found")
        if entry.punch_type != kind:
            raise ValidationError(f"Time entry {entry_id} is not a {kind.value}")
        if employee_id is not None and entry.employee_id != employee_id:
            raise ValidationError(f"Time entry {entry_id} belongs to another employee")
        return entry
