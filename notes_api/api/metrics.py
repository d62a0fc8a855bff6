from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from notes_api.models.schemas import BasicMetricsResponse
from notes_api.observability.metrics import EXPOSITION_CONTENT_TYPE, MetricsRegistry
from notes_api.services.dependencies import get_metrics_registry, get_note_store
from notes_api.services.note_store import NoteStore


router = APIRouter(tags=["metrics"])


@router.get("/basic-metrics", response_model=BasicMetricsResponse)
async def basic_metrics(
    metrics: MetricsRegistry = Depends(get_metrics_registry),
    store: NoteStore = Depends(get_note_store),
) -> BasicMetricsResponse:
    snapshot = metrics.basic_snapshot()
    # The gauge only refreshes when a request completes; report the live count here.
    return BasicMetricsResponse(request_count=snapshot.request_count, notes_count=store.count())


@router.get("/metrics")
async def metrics_exposition(metrics: MetricsRegistry = Depends(get_metrics_registry)) -> Response:
    return Response(content=metrics.snapshot(), media_type=EXPOSITION_CONTENT_TYPE)
