"""Domain models for meal history aggregation."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class Granularity(StrEnum):
    """Selectable history view resolution."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def window_days(self) -> int:
        """Return the number of days the view looks back."""
        return {"week": 7, "month": 30, "year": 365}[self.value]


@dataclass(frozen=True)
class ImageRef:
    """Image URL attached to a meal."""

    meal_id: str
    image_url: str


@dataclass(frozen=True)
class MealEntry:
    """Single timestamped nutrition record."""

    id: str
    logged_at: datetime | None
    energy: float
    protein: float
    carbs: float
    fats: float
    meal_type: str = ""
    text: str = ""
    images: tuple[str, ...] = ()


@dataclass(frozen=True)
class MacroTotals:
    """Accumulated macros of a bucket."""

    energy: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0

    def add(self, entry: MealEntry) -> "MacroTotals":
        """Return totals including the entry's macros."""
        return MacroTotals(
            energy=self.energy + entry.energy,
            protein=self.protein + entry.protein,
            carbs=self.carbs + entry.carbs,
            fats=self.fats + entry.fats,
        )

    def divide(self, divisor: int) -> "MacroTotals":
        """Return totals divided by a positive divisor."""
        divisor = max(divisor, 1)
        return MacroTotals(
            energy=self.energy / divisor,
            protein=self.protein / divisor,
            carbs=self.carbs / divisor,
            fats=self.fats / divisor,
        )


@dataclass(frozen=True)
class DayKey:
    """Bucket key for a calendar day."""

    day: date

    def __str__(self) -> str:
        return self.day.isoformat()


@dataclass(frozen=True)
class WeekKey:
    """Bucket key for an ISO calendar week."""

    year: int
    week: int

    def __str__(self) -> str:
        return f"{self.year}-W{self.week:02d}"


BucketKey = DayKey | WeekKey


@dataclass(frozen=True)
class Bucket:
    """Calendar period with its entries and totals."""

    key: BucketKey
    label: str
    start: date
    totals: MacroTotals = field(default_factory=MacroTotals)
    entries: tuple[MealEntry, ...] = ()
    divisor: int = 1


@dataclass(frozen=True)
class HistorySummary:
    """Averages across the buckets of a history view."""

    average_energy: float
    active_buckets: int
    total_entries: int


@dataclass(frozen=True)
class HistoryView:
    """Buckets and summary for a granularity."""

    granularity: Granularity
    buckets: list[Bucket]
    summary: HistorySummary


def to_number(value: object, default: float | None = 0.0) -> float | None:
    """Coerce a stored numeric value, falling back to the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
