"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for every failure the rollback core can surface
- Prepare-phase errors (MissingRelease, InvalidRevision, NotFound) abort before
  any store mutation
- ModuleRollbackError carries the already-persisted response so callers can
  inspect both the error and the FAILED release record
"""

from __future__ import annotations
from typing import Any, Optional


class KeelError(Exception):
    """Base class for all Keel errors."""


class MissingReleaseError(KeelError):
    def __init__(self, name: str = "") -> None:
        super().__init__(f"no release provided or invalid release name: {name!r}")
        self.name = name


class InvalidRevisionError(KeelError):
    def __init__(self, version: int) -> None:
        super().__init__(f"invalid release revision: {version}")
        self.version = version


class ReleaseNotFoundError(KeelError):
    def __init__(self, name: str, version: Optional[int] = None) -> None:
        if version is None:
            message = f"release: {name!r} not found"
        else:
            message = f"release: {name!r} revision {version} not found"
        super().__init__(message)
        self.name = name
        self.version = version


class ReleaseConflictError(KeelError):
    def __init__(self, name: str, version: int) -> None:
        super().__init__(f"release: {name!r} revision {version} already exists")
        self.name = name
        self.version = version


class LockUnavailableError(KeelError):
    def __init__(self, name: str) -> None:
        super().__init__(f"release {name!r} is locked by another operation")
        self.name = name


class HookFailureError(KeelError):
    def __init__(self, phase: str, hook_name: str, reason: str) -> None:
        super().__init__(f"{phase} hook {hook_name!r} failed: {reason}")
        self.phase = phase
        self.hook_name = hook_name
        self.reason = reason


class KubeClientError(KeelError):
    """Raised by kube client adapters when a kubectl invocation fails."""


class ModuleRollbackError(KeelError):
    def __init__(self, message: str, response: Any, cause: BaseException) -> None:
        super().__init__(message)
        self.response = response
        self.cause = cause
