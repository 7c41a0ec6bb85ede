"""Tests for ISO week helpers."""

from datetime import UTC, date, datetime

import pytest

from health_history.services.weeks import (
    first_monday_of_year,
    iso_week_number,
    iso_week_year,
    start_of_week,
)


@pytest.mark.parametrize(
    ("day", "week", "year"),
    [
        (date(2024, 1, 1), 1, 2024),
        (date(2023, 1, 1), 52, 2022),
        (date(2024, 6, 12), 24, 2024),
        (date(2024, 12, 30), 1, 2025),
        (date(2021, 1, 3), 53, 2020),
        (date(2020, 12, 31), 53, 2020),
    ],
)
def test_iso_week_matches_calendar(day: date, week: int, year: int) -> None:
    assert iso_week_number(day) == week
    assert iso_week_year(day) == year
    assert (year, week) == day.isocalendar()[:2]


def test_start_of_week_for_dates() -> None:
    assert start_of_week(date(2024, 1, 1)) == date(2024, 1, 1)
    assert start_of_week(date(2024, 1, 3)) == date(2024, 1, 1)
    assert start_of_week(date(2024, 1, 7)) == date(2024, 1, 1)


def test_start_of_week_truncates_datetimes() -> None:
    value = datetime(2024, 6, 16, 21, 30, tzinfo=UTC)

    monday = start_of_week(value)

    assert monday == datetime(2024, 6, 10, tzinfo=UTC)


def test_first_monday_of_year_may_fall_in_previous_year() -> None:
    assert first_monday_of_year(2024) == date(2024, 1, 1)
    assert first_monday_of_year(2025) == date(2024, 12, 30)
    assert first_monday_of_year(2021) == date(2021, 1, 4)
