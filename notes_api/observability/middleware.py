from __future__ import annotations

import re
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders

from notes_api.observability.context import begin
from notes_api.observability.logging import record
from notes_api.observability.metrics import MetricsRegistry
from notes_api.services.note_store import NoteStore


_PATH_PARAM = re.compile(r"\{([^}:]+)(?::[^}]*)?\}")


def resolve_route(scope: dict[str, Any]) -> str:
    """Return the matched route template as ``/notes/:id``, or the raw path.

    The router stores the matched route in ``scope["route"]`` while handling,
    so this must run after the downstream app returns.
    """

    template = getattr(scope.get("route"), "path", None)
    if not isinstance(template, str):
        return scope.get("path", "")
    return _PATH_PARAM.sub(r":\1", template)


class RequestPipelineMiddleware:
    """Adds correlation ids, access logs, and per-route HTTP metrics."""

    def __init__(self, app: Callable[..., Any], metrics: MetricsRegistry, store: NoteStore) -> None:
        self.app = app
        self.metrics = metrics
        self.store = store

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        context = begin()
        method = scope.get("method", "")
        path = scope.get("path", "")

        self.metrics.count_received()
        structlog.contextvars.bind_contextvars(correlation_id=context.id)
        record("request.started", context.id, method=method, path=path)

        # Starlette's ServerErrorMiddleware answers 500 when the handler raises
        # before a response starts.
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = context.id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = context.elapsed_ms()
            route = resolve_route(scope)

            # Each update is guarded on its own: the request counter and the
            # live gauge must move even if the latency histogram fails.
            self._observe(context.id, "requests", self.metrics.increment_request, method, route, status_code)
            self._observe(context.id, "live_count", lambda: self.metrics.set_live_count(self.store.count()))
            self._observe(context.id, "latency", self.metrics.observe_latency, method, route, elapsed_ms / 1000.0)

            record(
                "request.completed",
                context.id,
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )

            structlog.contextvars.clear_contextvars()

    @staticmethod
    def _observe(correlation_id: str, metric: str, update: Callable[..., None], *args: Any) -> None:
        try:
            update(*args)
        except Exception as exc:  # noqa: BLE001 - instrumentation must not fail requests
            record("request.metrics_failed", correlation_id, metric=metric, error=repr(exc))
