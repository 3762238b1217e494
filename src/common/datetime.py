"""Datetime utilities."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from dateutil.parser import parse as parse_date

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
}


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a feed timestamp, keeping its offset. Naive values are taken as UTC.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = parse_date(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def start_of_day(day: date) -> datetime:
    """Midnight UTC of the given calendar date."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)
