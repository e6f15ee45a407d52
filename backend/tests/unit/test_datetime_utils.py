"""
Unit tests for business-week calendar helpers.
"""

from datetime import date, time, timedelta

import pytest

from weekplan.core.exceptions import ValidationError
from weekplan.utils.datetime_utils import (
    add_hours,
    business_day_index,
    format_hhmm,
    hours_to_minutes,
    iso_week_start,
    parse_hhmm,
    week_dates,
    week_range,
)


@pytest.mark.parametrize("day", range(8, 15))
def test_week_dates_every_weekday_maps_to_same_week(day):
    """Monday 2024-01-08 through Sunday 2024-01-14 all belong to the same week."""
    dates = week_dates(date(2024, 1, day))

    assert dates == [date(2024, 1, d) for d in range(8, 13)]
    assert dates[0].weekday() == 0
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


def test_sunday_is_end_of_previous_week():
    assert iso_week_start(date(2024, 1, 14)) == date(2024, 1, 8)
    assert iso_week_start(date(2024, 1, 15)) == date(2024, 1, 15)


def test_week_dates_rederivation_is_stable():
    for offset in range(14):
        reference = date(2024, 1, 1) + timedelta(days=offset)
        dates = week_dates(reference)
        assert week_dates(dates[0]) == dates


def test_week_dates_across_month_boundary():
    assert week_dates(date(2024, 2, 1)) == [
        date(2024, 1, 29),
        date(2024, 1, 30),
        date(2024, 1, 31),
        date(2024, 2, 1),
        date(2024, 2, 2),
    ]


def test_week_dates_across_year_boundary():
    assert week_range(date(2023, 12, 31)) == (date(2023, 12, 25), date(2023, 12, 29))
    assert week_range(date(2025, 1, 1)) == (date(2024, 12, 30), date(2025, 1, 3))


def test_week_dates_leap_year():
    assert week_dates(date(2024, 2, 29))[-1] == date(2024, 3, 1)
    # 2020-02-29 was a Saturday
    assert week_dates(date(2020, 2, 29)) == [date(2020, 2, d) for d in range(24, 29)]


def test_week_dates_defaults_to_today():
    assert week_dates() == week_dates(date.today())


def test_business_day_index():
    assert business_day_index(date(2024, 1, 8)) == 1  # Monday
    assert business_day_index(date(2024, 1, 12)) == 5  # Friday
    assert business_day_index(date(2024, 1, 13)) is None  # Saturday
    assert business_day_index(date(2024, 1, 14)) is None  # Sunday


@pytest.mark.parametrize(
    "hours, minutes",
    [
        (2, 120),
        (1.5, 90),
        (0.25, 15),
        (0.075, 5),  # 4.5 minutes rounds half up
        (0, 0),
    ],
)
def test_hours_to_minutes_rounds_half_up(hours, minutes):
    assert hours_to_minutes(hours) == minutes


def test_add_hours_within_day():
    assert add_hours(time(10, 0), 2) == time(12, 0)
    assert add_hours(time(9, 50), 1.25) == time(11, 5)


def test_add_hours_past_midnight_is_rejected():
    with pytest.raises(ValidationError):
        add_hours(time(23, 30), 1.5)
    with pytest.raises(ValidationError):
        add_hours(time(22, 0), 2)


def test_hhmm_helpers():
    assert parse_hhmm("09:05") == time(9, 5)
    assert format_hhmm(time(9, 5)) == "09:05"
    assert parse_hhmm(None) is None
    assert format_hhmm(None) is None
