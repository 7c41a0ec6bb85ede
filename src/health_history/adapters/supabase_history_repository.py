"""Supabase repository for meal history reads."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from health_history.domain.history import ImageRef, MealEntry, to_number
from health_history.services.history import HistoryRepository


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for meal and meal image queries."""

    client: Client

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals created in the time range."""
        response = (
            self.client.table("meals")
            .select("id, text, calories, protein, carbs, fats, created_at, meal_type")
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_meal_images(self, meal_ids: list[str]) -> list[ImageRef]:
        """Return image URLs attached to the meals."""
        if not meal_ids:
            return []
        response = (
            self.client.table("meal_images")
            .select("meal_id, image_url")
            .in_("meal_id", meal_ids)
            .execute()
        )
        return [
            ImageRef(meal_id=str(row["meal_id"]), image_url=row["image_url"])
            for row in response.data or []
            if row.get("meal_id") and isinstance(row.get("image_url"), str)
        ]


def _parse_meal(row: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=str(row.get("id", "")),
        logged_at=_parse_timestamp(row.get("created_at")),
        energy=to_number(row.get("calories")) or 0.0,
        protein=to_number(row.get("protein")) or 0.0,
        carbs=to_number(row.get("carbs")) or 0.0,
        fats=to_number(row.get("fats")) or 0.0,
        meal_type=str(row.get("meal_type") or ""),
        text=str(row.get("text") or ""),
    )


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None
