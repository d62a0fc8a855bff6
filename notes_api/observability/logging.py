from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, WrappedLogger

from notes_api.config import Settings


_CONFIGURED = False

# Access-log entries lead with these keys, in this order.
_ENVELOPE = ("timestamp", "level", "correlation_id", "event")


def _access_envelope(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Put timestamp, level, correlation id and event first in every JSON line."""

    event_dict.setdefault("correlation_id", None)
    head = {key: event_dict.pop(key, None) for key in _ENVELOPE}
    head.update(event_dict)
    return head


def configure_logging(settings: Settings, stream: TextIO | None = None, force: bool = False) -> None:
    """Route structlog and stdlib records to one JSON-lines handler.

    The level and output stream come from ``settings`` unless a stream is
    passed. Later calls are no-ops unless ``force`` is set.
    """

    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    level = settings.log_level_value
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or settings.log_output)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _access_envelope,
                structlog.processors.JSONRenderer(),
            ],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # uvicorn installs its own handlers; send its records through ours.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.propagate = False
        server_logger.setLevel(level)

    _CONFIGURED = True


def record(event: str, correlation_id: str, **fields: Any) -> None:
    """Emit one access-log entry tagged with the request's correlation id.

    Never raises; a broken log pipeline is reported on stderr and the request
    carries on.
    """

    try:
        structlog.get_logger("access").info(event, correlation_id=correlation_id, **fields)
    except Exception as exc:  # noqa: BLE001 - logging must not fail requests
        try:
            sys.stderr.write(f"log record dropped: event={event} correlation_id={correlation_id} error={exc!r}\n")
        except Exception:  # noqa: BLE001
            pass
