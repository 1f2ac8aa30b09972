"""Due date parsing shared by validation, sorting and display."""
from datetime import date, datetime
from typing import Any, Optional


def parse_due_date(value: Any) -> Optional[date]:
    """
    Parse a due date into a calendar date.

    Accepts date/datetime objects and ISO strings, either a plain date
    ("2026-10-20") or a timestamp ("2026-10-20T00:00:00Z"), in which case
    the date part is used.

    Returns:
        The calendar date, or None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return datetime.fromisoformat(value.strip().replace('Z', '+00:00')).date()
    except ValueError:
        return None
