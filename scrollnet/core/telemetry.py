"""Telemetry sink for soft failures.

Interaction and feedback writes never surface errors to the user. Instead
every degraded outcome is reported here so it shows up in logs (and, in
tests, in the recorded event list).
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    error: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class TelemetrySink(Protocol):
    def emit(self, event: TelemetryEvent) -> None:
        ...


class LoggingTelemetrySink:
    """Logs degraded events and keeps the most recent ones in memory."""

    def __init__(self, max_events: int = 500, level: int = logging.WARNING):
        self.level = level
        self._events: Deque[TelemetryEvent] = deque(maxlen=max_events)

    def emit(self, event: TelemetryEvent) -> None:
        self._events.append(event)
        logger.log(self.level, f"{event.name}: {event.error or 'ok'} {event.context}")

    @property
    def events(self) -> List[TelemetryEvent]:
        return list(self._events)

    def named(self, name: str) -> List[TelemetryEvent]:
        return [e for e in self._events if e.name == name]
