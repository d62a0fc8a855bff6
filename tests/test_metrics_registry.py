from concurrent.futures import ThreadPoolExecutor

from notes_api.observability.metrics import MetricsRegistry


def test_unseen_label_triple_reads_zero(metrics) -> None:
    assert metrics.request_total("GET", "/notes", 200) == 0.0


def test_increment_request_is_keyed_by_exact_triple(metrics) -> None:
    metrics.increment_request("GET", "/notes", 200)
    metrics.increment_request("GET", "/notes", 200)
    metrics.increment_request("GET", "/notes", 404)
    metrics.increment_request("POST", "/notes", 200)

    assert metrics.request_total("GET", "/notes", 200) == 2.0
    assert metrics.request_total("GET", "/notes", "404") == 1.0
    assert metrics.request_total("POST", "/notes", 200) == 1.0
    assert metrics.request_total("DELETE", "/notes", 200) == 0.0


def test_concurrent_increments_are_not_lost(metrics) -> None:
    workers, per_worker = 8, 500

    def hammer() -> None:
        for _ in range(per_worker):
            metrics.increment_request("GET", "/notes", 200)
            metrics.count_received()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(hammer) for _ in range(workers)]:
            future.result()

    assert metrics.request_total("GET", "/notes", 200) == workers * per_worker
    assert metrics.basic_snapshot().request_count == workers * per_worker


def test_live_count_is_last_write_wins(metrics) -> None:
    metrics.set_live_count(5)
    metrics.set_live_count(2)
    assert metrics.basic_snapshot().record_count == 2


def test_live_count_clamps_negative_to_zero(metrics) -> None:
    metrics.set_live_count(4)
    metrics.set_live_count(-1)
    assert metrics.basic_snapshot().record_count == 0


def test_snapshot_renders_one_line_per_series(metrics) -> None:
    metrics.increment_request("GET", "/health", 200)
    metrics.increment_request("PUT", "/notes/:id", 404)
    metrics.set_live_count(3)

    lines = metrics.snapshot().splitlines()

    assert 'http_requests_total{method="GET",route="/health",status="200"} 1.0' in lines
    assert 'http_requests_total{method="PUT",route="/notes/:id",status="404"} 1.0' in lines
    assert "notes_count 3.0" in lines


def test_basic_snapshot_starts_empty(metrics) -> None:
    snapshot = metrics.basic_snapshot()
    assert snapshot.request_count == 0
    assert snapshot.record_count == 0


def test_registries_are_isolated() -> None:
    first = MetricsRegistry(collect_default_metrics=False)
    second = MetricsRegistry(collect_default_metrics=False)

    first.increment_request("GET", "/notes", 200)

    assert second.request_total("GET", "/notes", 200) == 0.0


def test_default_collectors_are_optional() -> None:
    with_defaults = MetricsRegistry(collect_default_metrics=True).snapshot()
    without = MetricsRegistry(collect_default_metrics=False).snapshot()

    assert "python_info" in with_defaults
    assert "python_info" not in without
