"""ISO calendar week helpers."""

from datetime import date, datetime, timedelta

THURSDAY = 4


def _thursday_of_week(day: date) -> date:
    return day + timedelta(days=THURSDAY - day.isoweekday())


def iso_week_number(day: date) -> int:
    """Return the ISO-8601 week number of a date.

    The week is identified by its Thursday: weeks start on Monday and week 1
    is the week holding the first Thursday of the year.
    """
    thursday = _thursday_of_week(day)
    first_of_year = date(thursday.year, 1, 1)
    return (thursday - first_of_year).days // 7 + 1


def iso_week_year(day: date) -> int:
    """Return the year that owns the ISO week of a date."""
    return _thursday_of_week(day).year


def start_of_week(value: datetime | date) -> datetime | date:
    """Return the Monday starting the week of the value.

    Datetimes are truncated to midnight and keep their timezone.
    """
    monday = value - timedelta(days=value.isoweekday() - 1)
    if isinstance(monday, datetime):
        return monday.replace(hour=0, minute=0, second=0, microsecond=0)
    return monday


def first_monday_of_year(year: int) -> date:
    """Return the Monday of ISO week 1 of a year."""
    return start_of_week(date(year, 1, 4))  # type: ignore[return-value]
