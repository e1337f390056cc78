from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import now_local, to_instant
from ..common.validators import optional_url, require_enum, require_non_empty
from ..core.enums import KIOSK_METHODS, PunchMethod, PunchType
from ..core.exceptions import ValidationError
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class ClockService:
    """Kiosk clock actions (face / PIN punches)."""

    def __init__(self, entries: TimeEntryRepository, *, tz: tzinfo):
        self._entries = entries
        self._tz = tz

    def current_status(self, employee_id: str) -> Optional[PunchType]:
        """Type of the employee's latest punch, or None if they never punched."""
        last = self._entries.get_latest_for_employee(require_non_empty(employee_id, "employee_id"))
        return last.punch_type if last else None

    def next_punch_type(self, employee_id: str) -> PunchType:
        if self.current_status(employee_id) == PunchType.CLOCK_IN:
            return PunchType.CLOCK_OUT
        return PunchType.CLOCK_IN

    def punch(
        self,
        employee_id: str,
        employee_name: str,
        method: PunchMethod | str,
        *,
        snapshot_url: Optional[str] = None,
        punch_type: PunchType | str | None = None,
        now: datetime | None = None,
    ) -> TimeEntry:
        employee_id = require_non_empty(employee_id, "employee_id")
        employee_name = require_non_empty(employee_name, "employee_name")
        method = require_enum(method, PunchMethod, "method")
        if method not in KIOSK_METHODS:
            logger.warning("Rejected kiosk punch for %s with method %s", employee_id, method.value)
            raise ValidationError("Kiosk punches must use FACE or PIN")
        snapshot_url = optional_url(snapshot_url, "snapshot_url")

        if punch_type is None:
            kind = self.next_punch_type(employee_id)
        else:
            kind = require_enum(punch_type, PunchType, "type")

        at = to_instant(now, self._tz) if now is not None else now_local(self._tz)
        entry = self._entries.create(
            employee_id=employee_id,
            employee_name=employee_name,
            punch_type=kind,
            timestamp=at,
            method=method,
            snapshot_url=snapshot_url,
        )
        logger.info("Recorded %s for %s via %s at %s", kind.value, employee_id, method.value, at.isoformat())
        return entry
