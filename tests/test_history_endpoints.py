"""Tests for history endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from health_history.api.app import create_app
from health_history.domain.history import ImageRef
from tests.conftest import (
    InMemoryHistoryRepository,
    InMemoryWeightRepository,
    make_meal,
)

HEADERS = {"X-Api-Token": "api-token"}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_history_requires_token(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/history/{uuid4()}")
    wrong = client.get(f"/history/{uuid4()}", headers={"X-Api-Token": "nope"})

    assert response.status_code == 401
    assert wrong.status_code == 401


def test_history_week_endpoint(container) -> None:
    repo = container.history_service.repository
    assert isinstance(repo, InMemoryHistoryRepository)
    logged_at = datetime.now(tz=UTC).replace(hour=0, minute=0, second=1)
    repo.meals = [make_meal("a", logged_at, energy=512.4, protein=30.25)]
    repo.images = [ImageRef(meal_id="a", image_url="https://img/a.jpg")]
    client = TestClient(create_app(container))

    response = client.get(f"/history/{uuid4()}?range=week", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["range"] == "week"
    assert len(data["buckets"]) == 7
    today = data["buckets"][0]
    assert today["key"] == logged_at.date().isoformat()
    assert today["calories"] == 512
    assert today["protein"] == 30.2
    assert today["meals"][0]["images"] == ["https://img/a.jpg"]
    assert data["summary"]["total_meals"] == 1


def test_history_year_endpoint_uses_week_keys(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/history/{uuid4()}?range=year", headers=HEADERS)

    assert response.status_code == 200
    buckets = response.json()["buckets"]
    assert all("-W" in bucket["key"] for bucket in buckets)


def test_history_rejects_unknown_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/history/{uuid4()}?range=decade", headers=HEADERS)

    assert response.status_code == 422


def test_weight_history_endpoint(container) -> None:
    repo = container.weight_history_service.repository
    assert isinstance(repo, InMemoryWeightRepository)
    today = datetime.now(tz=UTC).date()
    repo.rows = [
        {"id": "old", "date": (today - timedelta(days=7)).isoformat(), "weight": 82},
        {"id": "new", "date": today.isoformat(), "weight": "80.0"},
    ]
    client = TestClient(create_app(container))

    response = client.get(f"/history/{uuid4()}/weights?range=month", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert [entry["id"] for entry in data["entries"]] == ["new", "old"]
    assert data["entries"][0]["change"] == -2.0
    assert data["entries"][1]["change"] is None
    assert data["trend"] == {"direction": "down", "amount": 2.0}
