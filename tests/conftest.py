from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from notes_api.config import get_settings
from notes_api.main import create_app
from notes_api.observability.metrics import MetricsRegistry
from notes_api.services.note_store import NoteStore


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLLECT_DEFAULT_METRICS", "false")
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def note_store() -> NoteStore:
    return NoteStore()


@pytest.fixture
def metrics() -> MetricsRegistry:
    return MetricsRegistry(collect_default_metrics=False)


@pytest.fixture
def app(note_store: NoteStore, metrics: MetricsRegistry) -> FastAPI:
    return create_app(store=note_store, metrics=metrics)


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    # Unhandled handler faults come back as 500 responses instead of raising in the test.
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
