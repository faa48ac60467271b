"""Calendar and duration arithmetic for subscription dates.

Three different ways of counting elapsed time live here and they are not
interchangeable:

- ``hours_between``: whole elapsed hours.
- ``days_between``: whole elapsed 24-hour buckets.
- ``calendar_days_between``: local midnights crossed, so 23:00 -> 01:00 the
  next morning already counts as one day.

Naive datetimes are read as local wall-clock time. When one side is aware and
the other naive, the naive side is taken to be in the aware side's timezone.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

# %d and %m accept one or two digits, so these also cover d/M/yyyy and d-M-yyyy.
DATE_PATTERNS: tuple[str, ...] = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%Y/%m/%d",
    "%Y-%m-%d",
)

InstantLike = Union[datetime, date, str, None]


def align(later: datetime, earlier: datetime) -> tuple[datetime, datetime]:
    if (later.tzinfo is None) == (earlier.tzinfo is None):
        return later, earlier
    if later.tzinfo is None:
        return later.replace(tzinfo=earlier.tzinfo), earlier
    return later, earlier.replace(tzinfo=later.tzinfo)


def add_days(instant: datetime, days: int) -> datetime:
    return instant + timedelta(days=days)


def add_months(instant: datetime, months: int) -> datetime:
    """Calendar-month shift; day-of-month is clipped to the target month's length."""
    shifted = pd.Timestamp(instant) + pd.DateOffset(months=months)
    return shifted.to_pydatetime()


def hours_between(later: datetime, earlier: datetime) -> int:
    later, earlier = align(later, earlier)
    return int((later - earlier) / timedelta(hours=1))


def days_between(later: datetime, earlier: datetime) -> int:
    later, earlier = align(later, earlier)
    return int((later - earlier) / timedelta(days=1))


def calendar_days_between(later: datetime, earlier: datetime) -> int:
    later, earlier = align(later, earlier)
    if later.tzinfo is not None:
        earlier = earlier.astimezone(later.tzinfo)
    return (later.date() - earlier.date()).days


def coerce_instant(value: InstantLike) -> Optional[datetime]:
    """Normalize a stored date value; empty values become ``None``.

    Strings must be ISO-8601. Use :func:`parse_date_lenient` for free-form text.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    text = value.strip()
    if not text:
        return None
    return datetime.fromisoformat(text)


def parse_date_lenient(text: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Parse free-form date text, falling back to ``now`` instead of raising.

    ISO-8601 is tried first, then each of ``DATE_PATTERNS`` in order.
    """
    fallback = now if now is not None else datetime.now()
    raw = (text or "").strip()
    if not raw:
        return fallback

    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        pass

    for pattern in DATE_PATTERNS:
        try:
            return datetime.strptime(raw, pattern)
        except ValueError:
            continue

    logger.warning("Could not parse date %r, defaulting to now", raw, extra={"ctx_raw_date": raw})
    return fallback
