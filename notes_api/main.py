from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notes_api.api.metrics import router as metrics_router
from notes_api.api.notes import router as notes_router
from notes_api.config import get_settings
from notes_api.models.schemas import HealthResponse
from notes_api.observability.logging import configure_logging
from notes_api.observability.metrics import MetricsRegistry
from notes_api.observability.middleware import RequestPipelineMiddleware
from notes_api.services.note_store import NoteNotFoundError, NoteStore


def create_app(store: NoteStore | None = None, metrics: MetricsRegistry | None = None) -> FastAPI:
    """Build the service around an explicitly owned store and metrics registry."""

    settings = get_settings()
    configure_logging(settings)

    store = store or NoteStore()
    metrics = metrics or MetricsRegistry(collect_default_metrics=settings.collect_default_metrics)

    app = FastAPI(title="Notes API", version="0.1.0")
    app.state.note_store = store
    app.state.metrics = metrics

    app.add_middleware(RequestPipelineMiddleware, metrics=metrics, store=store)
    app.include_router(notes_router)
    app.include_router(metrics_router)

    @app.exception_handler(NoteNotFoundError)
    async def _note_not_found(request: Request, exc: NoteNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Not found"})

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy")

    return app


app = create_app()
