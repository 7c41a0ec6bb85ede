"""Meal history aggregation into calendar buckets."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from health_history.domain.history import (
    Bucket,
    BucketKey,
    DayKey,
    Granularity,
    HistorySummary,
    HistoryView,
    ImageRef,
    MacroTotals,
    MealEntry,
    WeekKey,
)
from health_history.services.weeks import (
    first_monday_of_year,
    iso_week_number,
    iso_week_year,
)

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
DAYS_PER_WEEK = 7

Frame = dict[BucketKey, Bucket]


class HistoryRepository(Protocol):
    """Persistence interface for meal history reads."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals logged within a time range."""

    def list_meal_images(self, meal_ids: list[str]) -> list[ImageRef]:
        """Return image references for the given meals."""


@dataclass
class HistoryService:
    """Service for building history views from stored meals."""

    repository: HistoryRepository

    def get_history(
        self, user_id: UUID, granularity: Granularity, now: datetime
    ) -> HistoryView:
        """Return the bucketed history for a granularity at an instant."""
        start = _fetch_start(granularity, now)
        end = _start_of_day(now) + timedelta(days=1)
        meals = self.repository.list_meals(user_id, start, end)
        image_refs = (
            self.repository.list_meal_images([meal.id for meal in meals])
            if meals
            else []
        )
        logger.info(
            "Loaded %d meals and %d images for %s history",
            len(meals),
            len(image_refs),
            granularity.value,
        )
        if granularity is Granularity.YEAR:
            buckets = build_yearly_buckets(meals, image_refs, now.year, now)
        else:
            buckets = build_daily_buckets(
                meals, image_refs, granularity.window_days, now
            )
        return HistoryView(
            granularity=granularity,
            buckets=buckets,
            summary=summarize(buckets),
        )


def build_daily_buckets(
    entries: Iterable[MealEntry],
    image_refs: Iterable[ImageRef],
    window_days: int,
    now: datetime,
) -> list[Bucket]:
    """Return daily buckets for the window ending today, newest first."""
    frame = build_daily_frame(window_days, now)
    filled = aggregate(frame, attach_images(entries, image_refs), _day_key_for(now))
    return sorted(filled.values(), key=lambda bucket: bucket.start, reverse=True)


def build_yearly_buckets(
    entries: Iterable[MealEntry],
    image_refs: Iterable[ImageRef],
    year: int,
    now: datetime,
) -> list[Bucket]:
    """Return per-day averaged weekly buckets of a year, newest first."""
    frame = build_weekly_frame(year, now)
    filled = aggregate(frame, attach_images(entries, image_refs), _week_key_for(now))
    normalized = normalize_weeks(filled.values(), now)
    return sorted(normalized, key=lambda bucket: bucket.start, reverse=True)


def build_daily_frame(window_days: int, now: datetime) -> Frame:
    """Return empty day buckets covering the window, oldest first."""
    if window_days < 1:
        raise ValueError("window_days must be positive")
    today = now.date()
    frame: Frame = {}
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = DayKey(day)
        frame[key] = Bucket(key=key, label=_day_label(day), start=day)
    return frame


def build_weekly_frame(year: int, now: datetime) -> Frame:
    """Return empty week buckets of a year that have started by now."""
    today = now.date()
    first_monday = first_monday_of_year(year)
    frame: Frame = {}
    for week in range(1, WEEKS_PER_YEAR + 1):
        monday = first_monday + timedelta(weeks=week - 1)
        if monday > today:
            break
        key = WeekKey(year=year, week=week)
        frame[key] = Bucket(key=key, label=_week_label(monday), start=monday)
    return frame


def attach_images(
    entries: Iterable[MealEntry], image_refs: Iterable[ImageRef]
) -> list[MealEntry]:
    """Return entries carrying the URLs of their images."""
    images_by_meal: dict[str, list[str]] = {}
    for ref in image_refs:
        images_by_meal.setdefault(ref.meal_id, []).append(ref.image_url)
    return [
        replace(entry, images=tuple(images_by_meal.get(entry.id, ())))
        for entry in entries
    ]


def aggregate(
    frame: Frame,
    entries: Iterable[MealEntry],
    key_for: Callable[[datetime], BucketKey],
) -> Frame:
    """Fold entries into the buckets of a frame.

    Entries without a timestamp or without a matching bucket are dropped.
    """
    result = dict(frame)
    dropped = 0
    for entry in entries:
        if entry.logged_at is None:
            dropped += 1
            continue
        key = key_for(entry.logged_at)
        bucket = result.get(key)
        if bucket is None:
            dropped += 1
            continue
        result[key] = replace(
            bucket,
            totals=bucket.totals.add(entry),
            entries=(*bucket.entries, entry),
        )
    if dropped:
        logger.debug("Dropped %d entries outside of %d buckets", dropped, len(frame))
    return result


def normalize_weeks(buckets: Iterable[Bucket], now: datetime) -> list[Bucket]:
    """Turn weekly sums into per-day averages over elapsed days."""
    today = now.date()
    normalized = []
    for bucket in buckets:
        divisor = week_divisor(bucket.start, today)
        normalized.append(
            replace(bucket, totals=bucket.totals.divide(divisor), divisor=divisor)
        )
    return normalized


def week_divisor(monday: date, today: date) -> int:
    """Return the number of days of a week that have elapsed by today."""
    if monday + timedelta(days=DAYS_PER_WEEK - 1) < today:
        return DAYS_PER_WEEK
    elapsed = (today - monday).days + 1
    return min(DAYS_PER_WEEK, max(1, elapsed))


def summarize(buckets: list[Bucket]) -> HistorySummary:
    """Return the average energy across buckets holding entries."""
    active = [bucket for bucket in buckets if bucket.entries]
    total_energy = sum(bucket.totals.energy for bucket in active)
    return HistorySummary(
        average_energy=total_energy / len(active) if active else 0.0,
        active_buckets=len(active),
        total_entries=sum(len(bucket.entries) for bucket in buckets),
    )


def local_date(moment: datetime, now: datetime) -> date:
    """Return the calendar date of a moment in the timezone of now."""
    if moment.tzinfo is not None and now.tzinfo is not None:
        return moment.astimezone(now.tzinfo).date()
    return moment.date()


def _day_key_for(now: datetime) -> Callable[[datetime], BucketKey]:
    def key_for(moment: datetime) -> BucketKey:
        return DayKey(local_date(moment, now))

    return key_for


def _week_key_for(now: datetime) -> Callable[[datetime], BucketKey]:
    def key_for(moment: datetime) -> BucketKey:
        day = local_date(moment, now)
        return WeekKey(year=iso_week_year(day), week=iso_week_number(day))

    return key_for


def _fetch_start(granularity: Granularity, now: datetime) -> datetime:
    if granularity is Granularity.YEAR:
        monday = first_monday_of_year(now.year)
        return datetime.combine(monday, time.min, tzinfo=now.tzinfo)
    return _start_of_day(now) - timedelta(days=granularity.window_days - 1)


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_label(day: date) -> str:
    return day.strftime("%d.%m")


def _week_label(monday: date) -> str:
    sunday = monday + timedelta(days=DAYS_PER_WEEK - 1)
    return f"{monday:%d.%m} - {sunday:%d.%m}"
