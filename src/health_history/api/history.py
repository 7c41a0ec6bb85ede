"""History API endpoints with simple token auth."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from health_history.api.serializers import serialize_history, serialize_weight_history
from health_history.domain.history import Granularity

if TYPE_CHECKING:
    from health_history.containers import AppContainer

router = APIRouter(prefix="/history", tags=["history"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _now(container: AppContainer) -> datetime:
    return datetime.now(tz=ZoneInfo(container.settings.default_timezone))


@router.get("/{user_id}", dependencies=[Depends(require_token)])
async def meal_history(
    user_id: UUID, request: Request, range: Granularity = Granularity.WEEK  # noqa: A002
) -> dict[str, object]:
    """Return bucketed meal history for a range."""
    container: AppContainer = request.app.state.container
    view = container.history_service.get_history(user_id, range, _now(container))
    return serialize_history(view)


@router.get("/{user_id}/weights", dependencies=[Depends(require_token)])
async def weight_history(
    user_id: UUID, request: Request, range: Granularity = Granularity.WEEK  # noqa: A002
) -> dict[str, object]:
    """Return weight history with the latest trend."""
    container: AppContainer = request.app.state.container
    view = container.weight_history_service.get_weight_history(
        user_id, range, _now(container)
    )
    return serialize_weight_history(view)
