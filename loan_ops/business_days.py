"""Business-day calendar arithmetic.

A business day is any calendar day that is not a Saturday or a Sunday.
There is no holiday calendar.

All helpers accept ``date`` or ``datetime`` values and degrade to ``None``
or ``0`` on invalid input instead of raising, so that a loan record with a
missing or malformed timestamp can still be rendered.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


def to_date_or_none(value: Any) -> datetime | None:
    """Parse a backend timestamp into a datetime.

    Parameters
    ----------
    value : Any
        ISO-8601 string, ``datetime``, ``date`` or epoch milliseconds.

    Returns
    -------
    datetime | None
        Parsed datetime, or None when the value is empty or malformed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float, Decimal)):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Unparseable epoch timestamp: %r", value)
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp: %r", value)
            return None
    return None


def is_weekend(value: Any) -> bool:
    """Return True iff ``value`` falls on a Saturday or Sunday."""
    if not isinstance(value, date):
        return False
    return value.weekday() in (SATURDAY, SUNDAY)


def add_days(value: Any, days: Any) -> date | None:
    """Shift ``value`` by ``days`` calendar days."""
    if not isinstance(value, date) or not _is_finite(days):
        return None
    try:
        return value + timedelta(days=float(days))
    except OverflowError:
        logger.debug("Shifting %r by %r days leaves the calendar", value, days)
        return None


def add_business_days(start: Any, business_days: Any) -> date | None:
    """Get the day ``business_days`` weekdays after ``start``.

    The start day itself is never counted. Zero (or a negative count)
    returns ``start`` unchanged. Time of day is preserved for datetimes.

    Parameters
    ----------
    start : date | datetime
        Day to count from.
    business_days : int
        Number of business days to add; a fraction counts as a whole day.

    Returns
    -------
    date | None
        The resulting day, or None if ``start`` is not a date,
        ``business_days`` is not a finite number or the result falls
        outside the calendar.
    """
    if not isinstance(start, date) or not _is_finite(business_days):
        return None

    count = math.ceil(business_days)
    if count <= 0:
        return start

    try:
        # Adding from a weekend gives the same day as adding from Friday
        weekday = start.weekday()
        if weekday >= SATURDAY:
            start -= timedelta(days=weekday - 4)
            weekday = 4

        weeks, remainder = divmod(count, 5)
        days = weeks * 7 + remainder
        if weekday + remainder >= SATURDAY:
            days += 2

        return start + timedelta(days=days)
    except OverflowError:
        logger.debug("Adding %r business days to %r leaves the calendar", business_days, start)
        return None


def count_business_days(start: Any, end: Any) -> int:
    """Count weekdays in the closed interval ``[start, end]``.

    Both endpoints are inclusive and compared by calendar day, so the time
    of day of a datetime never drops an endpoint.

    Returns
    -------
    int
        Number of business days; 0 if ``start`` is after ``end`` or either
        argument is not a date.
    """
    if not isinstance(start, date) or not isinstance(end, date):
        return 0

    first = _calendar_day(start)
    last = _calendar_day(end)
    if first > last:
        return 0

    total_days = (last - first).days + 1
    full_weeks, remainder = divmod(total_days, 7)

    days = full_weeks * 5
    first_weekday = first.weekday()
    for offset in range(remainder):
        if (first_weekday + offset) % 7 < SATURDAY:
            days += 1

    return days


def _calendar_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _is_finite(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return math.isfinite(value)
