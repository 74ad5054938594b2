"""
Release Events

Architectural Intent:
- Outcomes of a rollback, published after the store reflects them
- aggregate_id is the release name
"""

from dataclasses import dataclass
from typing import Any

from keel.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class ReleaseRolledBackEvent(DomainEvent):
    version: int = 0
    target_version: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(version=self.version, target_version=self.target_version)
        return data


@dataclass(frozen=True)
class ReleaseRollbackFailedEvent(DomainEvent):
    version: int = 0
    error_message: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(version=self.version, error_message=self.error_message)
        return data
