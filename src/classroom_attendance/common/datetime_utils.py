from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Both the shape and the calendar value are checked, so ``2024-02-30`` is rejected too.
    """
    s = (value or "").strip() if isinstance(value, str) else ""
    if len(s) != 10 or s[4] != "-" or s[7] != "-":
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    try:
        return datetime.strptime(s, ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError("Invalid date value")


def format_iso_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(ISO_DATE_FORMAT)
    return str(value) if value is not None else ""


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
