"""Domain models for weight history."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

TrendDirection = Literal["up", "down", "stable"]


@dataclass(frozen=True)
class WeightEntry:
    """Weight measurement prepared for display."""

    id: str
    date: date
    weight: float
    display_date: str
    body_fat_percentage: float | None = None
    muscle_percentage: float | None = None
    photo_urls: tuple[str, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class WeightTrend:
    """Change between the two most recent measurements."""

    direction: TrendDirection
    amount: float


@dataclass(frozen=True)
class WeightHistoryView:
    """Weight entries with derived trend data."""

    entries: list[WeightEntry]
    trend: WeightTrend | None
    changes: list[float | None]
