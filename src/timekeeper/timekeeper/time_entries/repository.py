from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import PunchMethod, PunchType
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def list_between(self, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        """Non-deleted entries with start <= timestamp <= end."""

        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_latest_for_employee(self, employee_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        punch_type: PunchType,
        timestamp: datetime,
        method: PunchMethod,
        snapshot_url: Optional[str] = None,
    ) -> TimeEntry:
        raise NotImplementedError

    def create_many(
        self,
        *,
        employee_id: str,
        employee_name: str,
        method: PunchMethod,
        punches: Sequence[tuple[PunchType, datetime]],
    ) -> list[TimeEntry]:
        """Insert several punches for one employee in a single transaction."""

        raise NotImplementedError

    def update_timestamps(self, changes: Mapping[str, datetime]) -> None:
        """Move every listed entry (entry_id -> new timestamp) in a single transaction."""

        raise NotImplementedError

    def soft_delete_many(self, entry_ids: Sequence[str]) -> bool:
        """Soft-delete all ids together; False (nothing written) if any is missing."""

        raise NotImplementedError
