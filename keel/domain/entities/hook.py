"""
Hook Module

Architectural Intent:
- Lifecycle hook definitions carried by a release
- A hook is bound to one or more phases and ordered by weight within a phase
- Hooks are value objects copied verbatim between release versions
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class HookEvent(Enum):
    PRE_INSTALL = "pre-install"
    POST_INSTALL = "post-install"
    PRE_DELETE = "pre-delete"
    POST_DELETE = "post-delete"
    PRE_UPGRADE = "pre-upgrade"
    POST_UPGRADE = "post-upgrade"
    PRE_ROLLBACK = "pre-rollback"
    POST_ROLLBACK = "post-rollback"
    RELEASE_TEST_SUCCESS = "test-success"
    RELEASE_TEST_FAILURE = "test-failure"


@dataclass(frozen=True)
class Hook:
    name: str
    kind: str
    manifest: str
    events: tuple[HookEvent, ...] = ()
    path: str = ""
    weight: int = 0
    last_run: Optional[datetime] = None

    def runs_on(self, phase: HookEvent) -> bool:
        return phase in self.events

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "manifest": self.manifest,
            "events": [e.value for e in self.events],
            "path": self.path,
            "weight": self.weight,
            "last_run": self.last_run.isoformat() if self.last_run else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Hook":
        last_run = data.get("last_run")
        return cls(
            name=data["name"],
            kind=data["kind"],
            manifest=data.get("manifest", ""),
            events=tuple(HookEvent(e) for e in data.get("events", [])),
            path=data.get("path", ""),
            weight=int(data.get("weight", 0)),
            last_run=datetime.fromisoformat(last_run) if last_run else None,
        )


def hooks_for_phase(hooks: tuple[Hook, ...], phase: HookEvent) -> list[Hook]:
    """Hooks bound to ``phase`` in execution order (ascending weight, stable)."""
    return sorted((h for h in hooks if h.runs_on(phase)), key=lambda h: h.weight)
