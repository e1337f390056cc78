from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional, Sequence

from src.timekeeper.timekeeper.core.enums import PunchMethod, PunchType
from src.timekeeper.timekeeper.time_entries.model import TimeEntry


class StoreUnavailable(RuntimeError):
    pass


class InMemoryTimeEntries:
    """Time-entry store fake; keeps insertion order like the real table's created_at.

    Batch writes are staged on a copy and only published when every row
    succeeds, like one MySQL transaction. ``fail_on_write=N`` makes the Nth row
    write (counted over the fake's lifetime, 1-based) raise ``StoreUnavailable``.
    """

    def __init__(self, entries: Optional[list[TimeEntry]] = None, *, fail_on_write: Optional[int] = None):
        self._entries: list[TimeEntry] = list(entries or [])
        self._id = 0
        self._writes = 0
        self._fail_on_write = fail_on_write

    @property
    def all(self) -> list[TimeEntry]:
        return list(self._entries)

    def list_between(self, start: datetime, end: datetime):
        return [e for e in self._entries if not e.is_deleted and start <= e.timestamp <= end]

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        for e in self._entries:
            if e.id == entry_id and not e.is_deleted:
                return e
        return None

    def get_latest_for_employee(self, employee_id: str) -> Optional[TimeEntry]:
        items = [e for e in self._entries if e.employee_id == employee_id and not e.is_deleted]
        if not items:
            return None
        return max(items, key=lambda e: e.timestamp)

    def create(self, *, employee_id, employee_name, punch_type, timestamp, method, snapshot_url=None) -> TimeEntry:
        staged = list(self._entries)
        entry = self._new(employee_id, employee_name, punch_type, timestamp, method, snapshot_url)
        self._write(staged, None, entry)
        self._entries = staged
        return entry

    def create_many(
        self,
        *,
        employee_id: str,
        employee_name: str,
        method: PunchMethod,
        punches: Sequence[tuple[PunchType, datetime]],
    ) -> list[TimeEntry]:
        staged = list(self._entries)
        created = []
        for kind, at in punches:
            entry = self._new(employee_id, employee_name, kind, at, method)
            self._write(staged, None, entry)
            created.append(entry)
        self._entries = staged
        return created

    def update_timestamps(self, changes: Mapping[str, datetime]) -> None:
        staged = list(self._entries)
        for entry_id, timestamp in changes.items():
            i = self._index(staged, entry_id)
            if i is not None:
                self._write(staged, i, replace(staged[i], timestamp=timestamp))
        self._entries = staged

    def soft_delete_many(self, entry_ids: Sequence[str]) -> bool:
        staged = list(self._entries)
        for entry_id in entry_ids:
            i = self._index(staged, entry_id)
            if i is None:
                return False
            self._write(staged, i, replace(staged[i], is_deleted=True))
        self._entries = staged
        return True

    def _new(self, employee_id, employee_name, punch_type, timestamp, method, snapshot_url=None) -> TimeEntry:
        self._id += 1
        return TimeEntry(
            id=f"new-{self._id}",
            employee_id=employee_id,
            employee_name=employee_name,
            punch_type=punch_type,
            timestamp=timestamp,
            method=method,
            snapshot_url=snapshot_url,
        )

    def _write(self, staged: list[TimeEntry], index: Optional[int], entry: TimeEntry) -> None:
        self._writes += 1
        if self._fail_on_write == self._writes:
            raise StoreUnavailable(f"write #{self._writes} failed")
        if index is None:
            staged.append(entry)
        else:
            staged[index] = entry

    @staticmethod
    def _index(staged: list[TimeEntry], entry_id: str) -> Optional[int]:
        for i, e in enumerate(staged):
            if e.id == entry_id and not e.is_deleted:
                return i
        return None


def make_entry(
    entry_id: str,
    employee_id: str,
    punch_type: PunchType,
    timestamp: datetime,
    *,
    name: Optional[str] = None,
    method: PunchMethod = PunchMethod.PIN,
) -> TimeEntry:
    return TimeEntry(
        id=entry_id,
        employee_id=employee_id,
        employee_name=name or f"Employee {employee_id}",
        punch_type=punch_type,
        timestamp=timestamp,
        method=method,
    )
