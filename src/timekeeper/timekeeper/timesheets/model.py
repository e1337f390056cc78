from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ShiftStatus


@dataclass(frozen=True)
class DailyShift:
    """A reconstructed work interval. Recomputed on every reconciliation, never stored."""

    clock_in_id: str
    date: date
    clock_in: datetime
    duration_minutes: int
    status: ShiftStatus
    clock_out_id: Optional[str] = None
    clock_out: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeePeriodSummary:
    employee_id: str
    employee_name: str
    total_minutes: int
    total_hours: float
    shifts: tuple[DailyShift, ...]
    missing_punches: int

    @property
    def is_active(self) -> bool:
        return any(s.status == ShiftStatus.ACTIVE for s in self.shifts)
