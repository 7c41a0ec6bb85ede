"""Supabase repository for weight history."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_history.services.weights import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight measurements."""

    client: Client

    def list_weight_rows(
        self, user_id: UUID, since: date
    ) -> list[dict[str, object]]:
        """Return weight rows since a date, newest first."""
        response = (
            self.client.table("weight_history")
            .select(
                "id, date, weight, body_fat_percentage, muscle_percentage, "
                "photo_urls, notes"
            )
            .eq("user_id", str(user_id))
            .gte("date", since.isoformat())
            .order("date", desc=True)
            .execute()
        )
        return list(response.data or [])
