"""JSON serialization of history views."""

from health_history.domain.history import (
    Bucket,
    HistorySummary,
    HistoryView,
    MacroTotals,
    MealEntry,
)
from health_history.domain.weights import WeightEntry, WeightHistoryView


def serialize_history(view: HistoryView) -> dict[str, object]:
    """Return a history view as JSON-ready data."""
    return {
        "range": view.granularity.value,
        "buckets": [_serialize_bucket(bucket) for bucket in view.buckets],
        "summary": _serialize_summary(view.summary),
    }


def serialize_weight_history(view: WeightHistoryView) -> dict[str, object]:
    """Return a weight history view as JSON-ready data."""
    return {
        "entries": [
            {**_serialize_weight(entry), "change": change}
            for entry, change in zip(view.entries, view.changes, strict=True)
        ],
        "trend": (
            {"direction": view.trend.direction, "amount": round(view.trend.amount, 1)}
            if view.trend
            else None
        ),
    }


def _serialize_bucket(bucket: Bucket) -> dict[str, object]:
    return {
        "key": str(bucket.key),
        "label": bucket.label,
        "start": bucket.start.isoformat(),
        "divisor": bucket.divisor,
        **_serialize_totals(bucket.totals),
        "meals": [_serialize_meal(entry) for entry in bucket.entries],
    }


def _serialize_totals(totals: MacroTotals) -> dict[str, object]:
    return {
        "calories": round(totals.energy),
        "protein": round(totals.protein, 1),
        "carbs": round(totals.carbs, 1),
        "fats": round(totals.fats, 1),
    }


def _serialize_meal(entry: MealEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "created_at": entry.logged_at.isoformat() if entry.logged_at else None,
        "calories": entry.energy,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fats": entry.fats,
        "meal_type": entry.meal_type,
        "text": entry.text,
        "images": list(entry.images),
    }


def _serialize_summary(summary: HistorySummary) -> dict[str, object]:
    return {
        "average_calories": round(summary.average_energy),
        "active_periods": summary.active_buckets,
        "total_meals": summary.total_entries,
    }


def _serialize_weight(entry: WeightEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "display_date": entry.display_date,
        "weight": entry.weight,
        "body_fat_percentage": entry.body_fat_percentage,
        "muscle_percentage": entry.muscle_percentage,
        "photo_urls": list(entry.photo_urls),
        "notes": entry.notes,
    }
