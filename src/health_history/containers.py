"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_history.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from health_history.adapters.supabase_weight_repository import (
    SupabaseWeightRepository,
)
from health_history.config import Settings
from health_history.services.history import HistoryService
from health_history.services.weights import WeightHistoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    history_service: HistoryService
    weight_history_service: WeightHistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    history_service = HistoryService(SupabaseHistoryRepository(supabase_client))
    weight_history_service = WeightHistoryService(
        SupabaseWeightRepository(supabase_client)
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        history_service=history_service,
        weight_history_service=weight_history_service,
        close_resources=close_resources,
    )
