"""Date helpers shared by filters, records and the aggregator."""

import logging
from datetime import date, datetime, time

logger = logging.getLogger(__name__)

DAY_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

END_OF_DAY = time(23, 59, 59)


def parse_timestamp(value: object) -> datetime | None:
    """Parse a precise appointment timestamp (YYYY-MM-DDTHH:MM:SS)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.strptime(str(value).strip(), TIMESTAMP_FORMAT)
    except ValueError:
        logger.debug(f"Ignoring unparseable timestamp: {value!r}")
        return None


def parse_day(value: object) -> datetime | None:
    """Parse a date-only value (YYYY-MM-DD) as midnight of that day."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return start_of_day(value)
    try:
        return datetime.strptime(str(value).strip(), DAY_FORMAT)
    except ValueError:
        logger.debug(f"Ignoring unparseable date: {value!r}")
        return None


def start_of_day(day: date) -> datetime:
    """First second of a calendar day."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last second of a calendar day (inclusive upper bound)."""
    return datetime.combine(day, END_OF_DAY)


def format_day(moment: date | datetime | None) -> str:
    """Format a moment as YYYY-MM-DD, or an empty string."""
    if moment is None:
        return ""
    return moment.strftime(DAY_FORMAT)


def within_bounds(
    moment: datetime | None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> bool:
    """Inclusive range check; a missing moment always passes."""
    if moment is None:
        return True
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True
