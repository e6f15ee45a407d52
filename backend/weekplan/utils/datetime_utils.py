"""
Calendar and clock utilities for the business week.

All dates are local calendar dates; the scheduler does not deal with
timezones. Times are minute-precision ``datetime.time`` values and are
stored as ``HH:MM`` strings.
"""

from datetime import date, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from weekplan.core.exceptions import ValidationError

BUSINESS_DAYS = 5
MINUTES_PER_DAY = 24 * 60


def today() -> date:
    """Get today's local date."""
    return date.today()


def iso_week_start(reference: Optional[date] = None) -> date:
    """
    Get the Monday of the ISO week containing ``reference``.

    Sunday is treated as the last day of the previous week, not the first
    day of a new one.

    Example:
        >>> iso_week_start(date(2024, 1, 14))  # Sunday
        date(2024, 1, 8)
    """
    reference = reference or today()
    sunday_based = reference.isoweekday() % 7  # 0=Sunday .. 6=Saturday
    return reference - timedelta(days=(sunday_based + 6) % 7)


def week_dates(reference: Optional[date] = None) -> list[date]:
    """
    Get Monday through Friday of the ISO week containing ``reference``.

    Args:
        reference: Any date in the week (defaults to today)

    Returns:
        list[date]: Five consecutive dates in ascending order
    """
    monday = iso_week_start(reference)
    return [monday + timedelta(days=offset) for offset in range(BUSINESS_DAYS)]


def week_range(reference: Optional[date] = None) -> tuple[date, date]:
    """Get the (Monday, Friday) pair for the week containing ``reference``."""
    dates = week_dates(reference)
    return dates[0], dates[-1]


def business_day_index(target: date) -> Optional[int]:
    """Day-of-week index 1..5 for Monday..Friday, None for weekends."""
    sunday_based = target.isoweekday() % 7
    adjusted = 7 if sunday_based == 0 else sunday_based
    if 1 <= adjusted <= BUSINESS_DAYS:
        return adjusted
    return None


def is_business_day(target: date) -> bool:
    return business_day_index(target) is not None


def hours_to_minutes(hours: float) -> int:
    """Convert fractional hours to whole minutes, rounding half up."""
    minutes = Decimal(str(hours)) * 60
    return int(minutes.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def time_to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def minutes_to_time(minutes: int) -> time:
    """
    Convert minutes since midnight to a time.

    Raises:
        ValidationError: If the value falls outside a single day
    """
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise ValidationError(
            "Time slot would extend past midnight",
            details={"minutes": minutes},
        )
    return time(minutes // 60, minutes % 60)


def add_hours(start: time, hours: float) -> time:
    """Get ``start + hours`` on the same day (minute precision)."""
    return minutes_to_time(time_to_minutes(start) + hours_to_minutes(hours))


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse a stored ``HH:MM`` string (None passes through)."""
    if value is None:
        return None
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def format_hhmm(value: Optional[time]) -> Optional[str]:
    """Format a time for storage as ``HH:MM`` (None passes through)."""
    if value is None:
        return None
    return f"{value.hour:02d}:{value.minute:02d}"
