from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import CLOCK_FORMAT, DATE_FORMAT, TIMESTAMP_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: Any, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def parse_clock(value: Any, field_name: str = "time") -> time:
    """Parse HH:MM into time. Seconds are rejected since the wire format cannot carry them."""
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value).strip(), CLOCK_FORMAT).time()
    except ValueError:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")


def format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value else None


def format_clock(value: Optional[time]) -> Optional[str]:
    return value.strftime(CLOCK_FORMAT) if value else None


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.strftime(TIMESTAMP_FORMAT) if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
