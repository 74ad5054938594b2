"""
Release Module Port

Architectural Intent:
- The only component allowed to mutate the live environment
- Applies a computed rollback (current -> target) to the target cluster
- Implemented by KubeReleaseModule or test doubles
"""

from abc import ABC, abstractmethod
from typing import Any
from keel.domain.entities.release import Release
from keel.domain.environment import Environment


class ReleaseModulePort(ABC):
    """
    Port interface for applying releases to the environment.
    """

    @abstractmethod
    async def rollback(
        self,
        current: Release,
        target: Release,
        request: Any,
        environment: Environment,
    ) -> None:
        """
        Replaces the live state of ``current`` with ``target``.
        Raises on failure; the caller records the failed attempt.
        """
        pass
