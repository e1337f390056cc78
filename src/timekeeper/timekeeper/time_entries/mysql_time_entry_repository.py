from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import PunchMethod, PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = "entry_id, employee_id, employee_name, punch_type, punched_at, method, snapshot_url, is_deleted"


def _to_entry(r: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        id=str(r["entry_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        punch_type=PunchType(r["punch_type"]),
        timestamp=from_db_datetime(r["punched_at"]),
        method=PunchMethod(r["method"]),
        snapshot_url=r.get("snapshot_url"),
        is_deleted=bool(r.get("is_deleted")),
    )


def _new_entry(
    employee_id: str,
    employee_name: str,
    punch_type: PunchType,
    timestamp: datetime,
    method: PunchMethod,
    snapshot_url: Optional[str] = None,
) -> TimeEntry:
    return TimeEntry(
        id=uuid.uuid4().hex,
        employee_id=employee_id,
        employee_name=employee_name,
        punch_type=punch_type,
        timestamp=timestamp,
        method=method,
        snapshot_url=snapshot_url,
    )


def _insert(cur, entry: TimeEntry) -> None:
    cur.execute(
        """
        INSERT INTO time_entries(entry_id, employee_id, employee_name, punch_type, punched_at, method, snapshot_url)
        VALUES(%s,%s,%s,%s,%s,%s,%s)
        """,
        (
            entry.id,
            entry.employee_id,
            entry.employee_name,
            entry.punch_type.value,
            to_db_datetime(entry.timestamp),
            entry.method.value,
            entry.snapshot_url,
        ),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE is_deleted=0 AND punched_at BETWEEN %s AND %s
                ORDER BY punched_at ASC, created_at ASC
                """,
                (to_db_datetime(start), to_db_datetime(end)),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE entry_id=%s AND is_deleted=0
                """,
                (entry_id,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_latest_for_employee(self, employee_id: str) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND is_deleted=0
                ORDER BY punched_at DESC, created_at DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

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
        entry = _new_entry(employee_id, employee_name, punch_type, timestamp, method, snapshot_url)
        with db_cursor(self._conn_factory) as (_, cur):
            _insert(cur, entry)
        return entry

    def create_many(
        self,
        *,
        employee_id: str,
        employee_name: str,
        method: PunchMethod,
        punches: Sequence[tuple[PunchType, datetime]],
    ) -> list[TimeEntry]:
        entries = [_new_entry(employee_id, employee_name, kind, at, method) for kind, at in punches]
        with db_cursor(self._conn_factory) as (_, cur):
            for entry in entries:
                _insert(cur, entry)
        return entries

    def update_timestamps(self, changes: Mapping[str, datetime]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for entry_id, timestamp in changes.items():
                cur.execute(
                    """
                    UPDATE time_entries
                    SET punched_at=%s
                    WHERE entry_id=%s AND is_deleted=0
                    """,
                    (to_db_datetime(timestamp), entry_id),
                )

    def soft_delete_many(self, entry_ids: Sequence[str]) -> bool:
        with db_cursor(self._conn_factory) as (conn, cur):
            for entry_id in entry_ids:
                cur.execute(
                    """
                    UPDATE time_entries
                    SET is_deleted=1
                    WHERE entry_id=%s AND is_deleted=0
                    """,
                    (entry_id,),
                )
                if cur.rowcount == 0:
                    conn.rollback()
                    return False
        return True
