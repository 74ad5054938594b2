"""
Event Bus Infrastructure

Architectural Intent:
- In-memory event bus implementation for publishing domain events
- Supports async subscription handlers
- A failing handler is logged and does not stop delivery to the others
"""

import logging

from keel.domain.events.event_base import DomainEvent
from keel.domain.ports.event_bus_port import EventHandler

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = {}

    async def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            for handler in self._handlers.get(type(event), []):
                try:
                    await handler(event)
                except Exception:
                    logger.exception(
                        "Handler %r failed for %s", handler, event.event_type
                    )

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)
