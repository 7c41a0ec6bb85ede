"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

import pytest

from health_history.config import Settings
from health_history.containers import AppContainer
from health_history.domain.history import ImageRef, MealEntry
from health_history.services.history import HistoryRepository, HistoryService
from health_history.services.weights import WeightHistoryService, WeightRepository


@dataclass
class InMemoryHistoryRepository(HistoryRepository):
    """In-memory meal history repository for tests."""

    meals: list[MealEntry] = field(default_factory=list)
    images: list[ImageRef] = field(default_factory=list)
    ranges: list[tuple[datetime, datetime]] = field(default_factory=list)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        self.ranges.append((start, end))
        return list(self.meals)

    def list_meal_images(self, meal_ids: list[str]) -> list[ImageRef]:
        return [image for image in self.images if image.meal_id in meal_ids]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    rows: list[dict[str, object]] = field(default_factory=list)
    since: list[date] = field(default_factory=list)

    def list_weight_rows(
        self, user_id: UUID, since: date
    ) -> list[dict[str, object]]:
        self.since.append(since)
        return list(self.rows)


def make_meal(
    meal_id: str,
    logged_at: datetime | None,
    energy: float = 0,
    protein: float = 0,
    carbs: float = 0,
    fats: float = 0,
) -> MealEntry:
    return MealEntry(
        id=meal_id,
        logged_at=logged_at,
        energy=energy,
        protein=protein,
        carbs=carbs,
        fats=fats,
        meal_type="lunch",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        default_timezone="UTC",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        history_service=HistoryService(InMemoryHistoryRepository()),
        weight_history_service=WeightHistoryService(InMemoryWeightRepository()),
        close_resources=close_resources,
    )
