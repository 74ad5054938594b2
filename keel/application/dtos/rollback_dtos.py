"""
Rollback DTOs

Architectural Intent:
- Data Transfer Objects for the rollback use case boundary
- Field validation (name policy, revision sign) happens inside the use case,
  after the release lock is held, so these DTOs accept any input
"""

from dataclasses import dataclass
from typing import Optional
from keel.domain.entities.release import Release

DEFAULT_TIMEOUT_SECONDS = 300


@dataclass(frozen=True)
class RollbackReleaseRequest:
    name: str
    version: int = 0
    dry_run: bool = False
    disable_hooks: bool = False
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class RollbackReleaseResponse:
    release: Optional[Release] = None
