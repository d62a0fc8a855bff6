from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from time import perf_counter


@dataclass(frozen=True)
class CorrelationContext:
    id: str
    start_time: float
    started_at: datetime = field(compare=False)

    def elapsed_ms(self) -> float:
        return (perf_counter() - self.start_time) * 1000.0


def begin() -> CorrelationContext:
    """Start a request: random UUID4 id plus monotonic and wall-clock start."""

    return CorrelationContext(
        id=str(uuid.uuid4()),
        start_time=perf_counter(),
        started_at=datetime.now(timezone.utc),
    )
