"""
util/dates.py

Date helpers for the free-text dates kept in travel info.
- to_date: parse strings like "12th jan 2025" with dateutil
- to_iso: same, formatted as YYYY-MM-DD for provider queries
- shift_year_back: swap the 4-digit year token for last year
- iter_days: inclusive day range, capped
"""

import re
from datetime import date, datetime, timedelta, timezone

from dateutil import parser


ISO_DATE_FMT = "%Y-%m-%d"
MAX_RANGE_DAYS = 14

_YEAR_RE = re.compile(r"\d{4}")


def to_date(text, default=None):
    """Parse a loose date string. Returns None when it cannot be parsed."""
    if not text:
        return None
    if default is None:
        today = datetime.now(timezone.utc)
        default = datetime(today.year, today.month, today.day)
    try:
        return parser.parse(text, fuzzy=True, dayfirst=True, default=default).date()
    except (ValueError, OverflowError):
        return None


def to_iso(text):
    d = to_date(text)
    return d.strftime(ISO_DATE_FMT) if d else None


def shift_year_back(text, now=None):
    """Replace the first 4-digit year in `text` with the previous calendar year.

    A string without a 4-digit year is returned unchanged.
    """
    now = now or datetime.now(timezone.utc)
    return _YEAR_RE.sub(str(now.year - 1), text, count=1)


def iter_days(start: date, end: date, limit: int = MAX_RANGE_DAYS):
    """Yield each day from start to end inclusive, at most `limit` days."""
    if end < start:
        return
    day = start
    count = 0
    while day <= end and count < limit:
        yield day
        day += timedelta(days=1)
        count += 1


def from_unix(ts):
    """ISO-8601 UTC timestamp for a unix epoch value (None passes through)."""
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def noon_epoch(day: date) -> int:
    """Unix timestamp for 12:00 UTC on `day`."""
    return int(datetime(day.year, day.month, day.day, 12, tzinfo=timezone.utc).timestamp())
