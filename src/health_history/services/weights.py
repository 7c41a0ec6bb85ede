"""Weight history formatting and trend calculation."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from health_history.domain.history import Granularity, to_number
from health_history.domain.weights import (
    WeightEntry,
    WeightHistoryView,
    WeightTrend,
)

logger = logging.getLogger(__name__)


class WeightRepository(Protocol):
    """Persistence interface for weight measurements."""

    def list_weight_rows(
        self, user_id: UUID, since: date
    ) -> list[dict[str, object]]:
        """Return raw weight rows measured on or after a date."""


@dataclass
class WeightHistoryService:
    """Service for weight history views."""

    repository: WeightRepository

    def get_weight_history(
        self, user_id: UUID, granularity: Granularity, now: datetime
    ) -> WeightHistoryView:
        """Return formatted weight entries with trend data."""
        since = (now - timedelta(days=granularity.window_days)).date()
        rows = self.repository.list_weight_rows(user_id, since)
        entries = format_weight_history(rows)
        if len(entries) < len(rows):
            logger.warning(
                "Skipped %d weight rows with invalid dates", len(rows) - len(entries)
            )
        return WeightHistoryView(
            entries=entries,
            trend=compute_trend(entries),
            changes=weight_changes(entries),
        )


def format_weight_history(
    rows: Iterable[Mapping[str, object]],
) -> list[WeightEntry]:
    """Return display-ready weight entries, newest first."""
    entries = []
    for row in rows:
        measured_on = _parse_date(row.get("date"))
        if measured_on is None:
            continue
        entries.append(
            WeightEntry(
                id=str(row.get("id", "")),
                date=measured_on,
                weight=to_number(row.get("weight")) or 0.0,
                display_date=measured_on.strftime("%d.%m"),
                body_fat_percentage=to_number(
                    row.get("body_fat_percentage"), default=None
                ),
                muscle_percentage=to_number(row.get("muscle_percentage"), default=None),
                photo_urls=_photo_urls(row.get("photo_urls")),
                notes=_notes(row.get("notes")),
            )
        )
    entries.sort(key=lambda entry: entry.date, reverse=True)
    return entries


def compute_trend(entries: list[WeightEntry]) -> WeightTrend | None:
    """Return the change from the previous to the latest measurement."""
    if len(entries) < 2:  # noqa: PLR2004
        return None
    difference = entries[0].weight - entries[1].weight
    if difference > 0:
        direction = "up"
    elif difference < 0:
        direction = "down"
    else:
        direction = "stable"
    return WeightTrend(direction=direction, amount=abs(difference))


def weight_changes(entries: list[WeightEntry]) -> list[float | None]:
    """Return each entry's change against the next older measurement."""
    changes: list[float | None] = []
    for index, entry in enumerate(entries):
        if index + 1 < len(entries):
            changes.append(entry.weight - entries[index + 1].weight)
        else:
            changes.append(None)
    return changes


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return None


def _notes(raw: object) -> str | None:
    if not isinstance(raw, str):
        return None
    return raw.strip() or None


def _photo_urls(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, list | tuple):
        return ()
    return tuple(url for url in raw if isinstance(url, str))
