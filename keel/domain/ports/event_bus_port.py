"""
Event Bus Port

Architectural Intent:
- Lets the rollback use case announce outcomes without knowing who listens
- Listeners (telemetry today) subscribe per event class
"""

from typing import Awaitable, Callable, Protocol, runtime_checkable

from keel.domain.events.event_base import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


@runtime_checkable
class EventBusPort(Protocol):
    async def publish(self, events: list[DomainEvent]) -> None:
        """Deliver each event to the handlers of its exact class, in order.

        A failing handler must not stop delivery to the others.
        """
        ...

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        ...
