from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def get_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name (e.g. 'Asia/Ho_Chi_Minh')."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown timezone: {name!r}") from exc


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}") from exc


def parse_clock_time(value: str) -> time:
    """Parse a wall-clock 'HH:MM' string."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError as exc:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}") from exc


def combine_local(day: date, at: time, tz: tzinfo) -> datetime:
    return datetime.combine(day, at, tzinfo=tz)


def now_local(tz: tzinfo) -> datetime:
    """Current time in ``tz``.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def to_instant(value: object, tz: tzinfo) -> datetime:
    """Normalize a stored timestamp into an aware datetime in ``tz``.

    Accepted inputs:
    - aware datetime (converted to ``tz``)
    - naive datetime (read as wall-clock time in ``tz``)
    - ISO-8601 string, with or without offset ('Z' accepted)
    - epoch seconds (int/float, UTC)
    """

    if isinstance(value, bool):
        raise ValidationError(f"Unsupported timestamp value: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)

    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid timestamp: {value!r}") from exc
        return to_instant(parsed, tz)

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).astimezone(tz)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValidationError(f"Timestamp out of range: {value!r}") from exc

    raise ValidationError(f"Unsupported timestamp type: {type(value).__name__}")


def format_minutes(minutes: int) -> str:
    """Render a minute count as HH:MM (hours may exceed 24)."""
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
