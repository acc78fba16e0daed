from datetime import date, datetime
from typing import Optional
import re

import pytz

from flight_emissions.types import DateParts

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def get_current_datetime(tz: str = "UTC") -> datetime:
    """Get current datetime with timezone"""
    return datetime.now(pytz.timezone(tz))


def current_date(tz: str = "UTC") -> date:
    """Today's calendar date as seen from ``tz``."""
    return get_current_datetime(tz).date()


def parse_iso_date(text: str) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string; None when it is not a real date."""
    if not text or not DATE_PATTERN.match(text.strip()):
        return None
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        # e.g. 2025-02-30
        return None


def to_date_parts(d: date) -> DateParts:
    return DateParts(year=d.year, month=d.month, day=d.day)


def format_date_parts(parts: DateParts) -> str:
    return f"{parts.year:04d}-{parts.month:02d}-{parts.day:02d}"
