"""
Domain Events Package

Architectural Intent:
- Contains domain events published by the rollback core
- Events are the primary mechanism for cross-boundary communication
"""

from keel.domain.events.event_base import DomainEvent
from keel.domain.events.release_events import (
    ReleaseRolledBackEvent,
    ReleaseRollbackFailedEvent,
)

__all__ = [
    "DomainEvent",
    "ReleaseRolledBackEvent",
    "ReleaseRollbackFailedEvent",
]
