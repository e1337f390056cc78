from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Direction of a single punch."""

    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"


class PunchMethod(str, Enum):
    """Where a punch came from. Provenance only, never used for pairing."""

    FACE = "FACE"
    PIN = "PIN"
    ADMIN = "ADMIN"
    RECOVERY = "RECOVERY"


class ShiftStatus(str, Enum):
    COMPLETED = "COMPLETED"
    ACTIVE = "ACTIVE"
    MISSING_OUT = "MISSING_OUT"


KIOSK_METHODS = frozenset({PunchMethod.FACE, PunchMethod.PIN})
