from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchMethod, PunchType


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock-in or clock-out punch.

    Entries are never mutated by the application; corrections are new ADMIN
    entries, or store-side timestamp edits / soft deletes.
    """

    id: str
    employee_id: str
    employee_name: str
    punch_type: PunchType
    timestamp: datetime
    method: PunchMethod
    snapshot_url: Optional[str] = None
    is_deleted: bool = False
