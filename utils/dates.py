import datetime as dt
from typing import Optional

from domain.constants import OVERDUE, DUE_TODAY, UPCOMING


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return dt.datetime.now(dt.timezone.utc).date().isoformat()


def classify_due(followup_date: str, today: Optional[str] = None) -> str:
    """Classify a follow-up date against today.

    ISO dates sort lexically, so plain string comparison is enough.
    """
    today = today or today_iso()
    if followup_date < today:
        return OVERDUE
    if followup_date == today:
        return DUE_TODAY
    return UPCOMING


def _parse(value: str) -> Optional[dt.date]:
    if not value:
        return None
    # Timestamps carry a date prefix; only the calendar day is displayed
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_short(value: str) -> str:
    """'2026-10-19' -> 'Oct 19'."""
    d = _parse(value)
    if d is None:
        return value or ''
    return f"{d.strftime('%b')} {d.day}"


def format_long(value: str) -> str:
    """'2026-10-19' -> 'Oct 19, 2026'."""
    d = _parse(value)
    if d is None:
        return value or ''
    return f"{d.strftime('%b')} {d.day}, {d.year}"
