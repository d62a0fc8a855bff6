from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


EXPOSITION_CONTENT_TYPE = CONTENT_TYPE_LATEST


@dataclass(frozen=True)
class BasicSnapshot:
    request_count: int
    record_count: int


class MetricsRegistry:
    """Process-local request metrics backed by a private prometheus registry.

    Each instance owns its own ``CollectorRegistry`` so tests and embedded apps
    never share series. Counter increments are atomic per label set (the
    prometheus client guards every value with a lock); the received-request
    tally has its own lock.
    """

    def __init__(self, collect_default_metrics: bool = True) -> None:
        self._lock = Lock()
        self._received_total = 0
        self.registry = CollectorRegistry(auto_describe=True)

        if collect_default_metrics:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status"],
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "route"],
            registry=self.registry,
        )
        self.notes_count = Gauge(
            "notes_count",
            "Current number of notes stored in memory",
            registry=self.registry,
        )

    def count_received(self) -> int:
        with self._lock:
            self._received_total += 1
            return self._received_total

    def increment_request(self, method: str, route: str, status: int | str) -> None:
        self.http_requests_total.labels(method=method, route=route, status=str(status)).inc()

    def observe_latency(self, method: str, route: str, seconds: float) -> None:
        self.http_request_duration_seconds.labels(method=method, route=route).observe(seconds)

    def set_live_count(self, n: int) -> None:
        # Store counts are never negative; clamp.
        self.notes_count.set(max(n, 0))

    def request_total(self, method: str, route: str, status: int | str) -> float:
        value = self.registry.get_sample_value(
            "http_requests_total",
            {"method": method, "route": route, "status": str(status)},
        )
        return value or 0.0

    def snapshot(self) -> str:
        return generate_latest(self.registry).decode("utf-8")

    def basic_snapshot(self) -> BasicSnapshot:
        with self._lock:
            received = self._received_total
        live = self.registry.get_sample_value("notes_count") or 0.0
        return BasicSnapshot(request_count=received, record_count=int(live))
