"""
Caller-side validation of schedule inputs coming off the wire.

These checks run before any storage access so that a rejected request
never mutates the schedule.
"""

import re
from datetime import date, time
from typing import Optional

from weekplan.core.exceptions import ValidationError
from weekplan.utils.datetime_utils import is_business_day

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")


def parse_date_string(value: str, field: str = "date") -> date:
    """Parse ``YYYY-MM-DD`` into a real calendar date."""
    if not DATE_PATTERN.fullmatch(value):
        raise ValidationError(f"Invalid {field} format (YYYY-MM-DD)", details={field: value})
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {e}", details={field: value}) from e


def parse_time_string(value: str, field: str = "time") -> time:
    """Parse ``HH:MM`` (00:00 - 23:59)."""
    match = TIME_PATTERN.fullmatch(value)
    if not match:
        raise ValidationError(f"Invalid {field} format (HH:MM)", details={field: value})
    return time(int(match.group(1)), int(match.group(2)))


def parse_optional_time(value: Optional[str], field: str = "time") -> Optional[time]:
    if value is None or value == "":
        return None
    return parse_time_string(value, field)


def ensure_business_day(target: date) -> None:
    if not is_business_day(target):
        raise ValidationError(
            "Only business days (Monday to Friday) can be scheduled",
            details={"date": target.isoformat()},
        )


def ensure_time_order(start: Optional[time], end: Optional[time]) -> None:
    """Start must be strictly before end when both are known."""
    if start is not None and end is not None and start >= end:
        raise ValidationError(
            "Start time must be before end time",
            details={"start_time": start.strftime("%H:%M"), "end_time": end.strftime("%H:%M")},
        )
