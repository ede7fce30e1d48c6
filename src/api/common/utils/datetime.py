import calendar
from datetime import date, datetime, timezone, timedelta
from typing import Optional


def get_current_datetime() -> datetime:
    """Return current UTC datetime with timezone info."""
    dt = datetime.now(timezone.utc)
    # Ensure microseconds are stripped for consistency in tests
    return dt.replace(microsecond=0)


def get_current_date() -> date:
    """Return today's calendar date, the single clock read for a request."""
    return date.today()


def get_date(date_str: str | None) -> Optional[date]:
    return None if date_str is None else date.fromisoformat(date_str[:10])


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def add_months(source: date, months: int) -> date:
    """
    Move a date by a number of calendar months, clamping the day.

    Args:
        source: The date to move
        months: Months to add (may be negative)

    Returns:
        The shifted date, e.g. 2024-01-31 + 1 month -> 2024-02-29
    """
    month_index = source.month - 1 + months
    year = source.year + month_index // 12
    month = month_index % 12 + 1
    day = min(source.day, last_day_of_month(year, month))
    return date(year, month, day)


def day_in_month(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the length of the month."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def get_month_start(target_month: date) -> date:
    """Get the first day of the given month."""
    return target_month.replace(day=1)


def get_month_end(target_month: date) -> date:
    """Get the last day of the given month."""
    return target_month.replace(
        day=last_day_of_month(target_month.year, target_month.month))


def days_between(start: date, end: date) -> int:
    """Signed whole days from start to end."""
    return (end - start).days


def next_day(target: date) -> date:
    return target + timedelta(days=1)
