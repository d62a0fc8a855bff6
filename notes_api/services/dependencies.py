from __future__ import annotations

from fastapi import Request

from notes_api.observability.metrics import MetricsRegistry
from notes_api.services.note_store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store


def get_metrics_registry(request: Request) -> MetricsRegistry:
    return request.app.state.metrics
