from __future__ import annotations

import structlog
import uvicorn

from notes_api.config import get_settings
from notes_api.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    structlog.get_logger("notes_api").info("server.starting", host=settings.host, port=settings.port)
    uvicorn.run("notes_api.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
