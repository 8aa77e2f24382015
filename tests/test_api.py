"""FastAPI integration tests.

Strategy:
- Fresh in-memory SQLite per test, injected by overriding the DB dependency.
- The real app from main.py; its lifespan is not run by ASGITransport.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import aiosqlite
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import (
    PREDICTION_SETTINGS, db_dependency, get_prediction_settings, warn_if_unprotected,
)
from app.prediction import PredictionSettings
from main import app

CALLER = {"X-Caller-Id": "parent-1"}


@pytest_asyncio.fixture
async def client(db: aiosqlite.Connection):
    """HTTP test client backed by the in-memory database."""

    async def override_db():
        yield db

    app.dependency_overrides[db_dependency] = override_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# one reference instant per test run keeps the logged gaps exact
NOW = datetime.now(timezone.utc).replace(microsecond=0)


async def _log(client: AsyncClient, event: str, hours_ago: float, note: str | None = None):
    timestamp = NOW - timedelta(hours=hours_ago)
    resp = await client.post(
        "/events",
        json={"event": event, "timestamp": timestamp.isoformat(), "note": note},
        headers=CALLER,
    )
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------

async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "window_days": 7}


async def test_settings_are_read_once(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("PREDICTION_WINDOW_DAYS", "not a number")
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert get_prediction_settings() is PREDICTION_SETTINGS


async def test_health_reports_injected_settings(client: AsyncClient):
    app.dependency_overrides[get_prediction_settings] = lambda: PredictionSettings(window_days=3)
    resp = await client.get("/health")
    assert resp.json()["window_days"] == 3


# ---------------------------------------------------------------------------
# Auth configuration
# ---------------------------------------------------------------------------

def test_warns_when_no_tokens_configured(caplog):
    with patch("app.api.dependencies.API_TOKENS", frozenset()):
        assert warn_if_unprotected() is True
    assert "API_TOKENS is empty" in caplog.text


def test_no_warning_with_tokens(caplog):
    with patch("app.api.dependencies.API_TOKENS", frozenset({"s3cret"})):
        assert warn_if_unprotected() is False
    assert "API_TOKENS" not in caplog.text


# ---------------------------------------------------------------------------
# /events
# ---------------------------------------------------------------------------

async def test_add_event(client: AsyncClient):
    data = await _log(client, "formula", 1, "60ml")
    assert data["event"] == "formula"
    assert data["note"] == "60ml"
    assert data["id"] == 1


async def test_add_event_requires_caller(client: AsyncClient):
    resp = await client.post(
        "/events", json={"event": "formula", "timestamp": "2025-07-15T09:00:00Z"}
    )
    assert resp.status_code == 401


async def test_add_event_invalid(client: AsyncClient):
    """Missing timestamp → 422."""
    resp = await client.post("/events", json={"event": "formula"}, headers=CALLER)
    assert resp.status_code == 422


async def test_get_latest_events(client: AsyncClient):
    await _log(client, "diaper", 3)
    await _log(client, "diaper", 1)
    await _log(client, "formula", 2, "60ml")

    resp = await client.get("/events?event=diaper&limit=1", headers=CALLER)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 1
    assert data[0]["event"] == "diaper"


async def test_get_latest_events_invalid_limit(client: AsyncClient):
    resp = await client.get("/events?event=diaper&limit=0", headers=CALLER)
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# /predictions/next-feeding
# ---------------------------------------------------------------------------

async def test_prediction(client: AsyncClient):
    for i, hours_ago in enumerate([21, 18, 15, 12, 9, 6, 3]):
        if i % 2 == 0:
            await _log(client, "formula", hours_ago, "60ml")
        else:
            await _log(client, "nursing", hours_ago, "左5分/右5分")
    await _log(client, "diaper", 1)

    resp = await client.get("/predictions/next-feeding", headers=CALLER)
    assert resp.status_code == 200
    data = resp.json()
    assert data["data_range"]["event_count"] == 7
    assert set(data["data_range"]) == {"from", "to", "event_count"}
    assert data["predicted_quantity"] == {"amount": 56, "unit": "ml", "range": None}
    assert data["average_interval"] == {"hours": 3, "minutes": 0}
    assert data["data_quality"] == "medium"
    assert data["is_prediction"] is True
    next_time = datetime.fromisoformat(data["next_feeding_time"].replace("Z", "+00:00"))
    last_time = datetime.fromisoformat(data["data_range"]["to"].replace("Z", "+00:00"))
    assert next_time > last_time


async def test_prediction_unauthenticated(client: AsyncClient):
    resp = await client.get("/predictions/next-feeding")
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "unauthenticated"


async def test_prediction_with_api_tokens(client: AsyncClient):
    await _log(client, "formula", 3, "60ml")
    await _log(client, "formula", 0, "60ml")
    with patch("app.api.dependencies.API_TOKENS", frozenset({"s3cret"})):
        refused = await client.get("/predictions/next-feeding", headers=CALLER)
        accepted = await client.get(
            "/predictions/next-feeding",
            headers={**CALLER, "Authorization": "Bearer s3cret"},
        )
    assert refused.status_code == 401
    assert accepted.status_code == 200


async def test_prediction_insufficient_data(client: AsyncClient):
    await _log(client, "formula", 1, "60ml")
    resp = await client.get("/predictions/next-feeding", headers=CALLER)
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == "insufficient_data"


async def test_prediction_no_valid_cadence(client: AsyncClient):
    await _log(client, "formula", 10, "60ml")
    await _log(client, "formula", 0, "60ml")
    resp = await client.get("/predictions/next-feeding", headers=CALLER)
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == "no_valid_cadence"


async def test_prediction_fetch_error_hides_details(client: AsyncClient):
    with patch(
        "app.services.event_service.fetch_recent_feeding_events",
        side_effect=RuntimeError("disk I/O error"),
    ):
        resp = await client.get("/predictions/next-feeding", headers=CALLER)
    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail["code"] == "internal_fetch_error"
    assert "disk" not in detail["message"]
