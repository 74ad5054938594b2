"""
Hook Runner Port

Architectural Intent:
- Runs the hooks of a release bound to one lifecycle phase
- Execution is bounded by a timeout; exceeding it is a hook failure
- Implemented by KubeHookRunner or test doubles
"""

from abc import ABC, abstractmethod
from keel.domain.entities.hook import Hook, HookEvent


class HookRunnerPort(ABC):
    """
    Port interface for executing lifecycle hooks.
    """

    @abstractmethod
    async def run_hooks(
        self,
        hooks: tuple[Hook, ...],
        release_name: str,
        namespace: str,
        phase: HookEvent,
        timeout_seconds: int,
    ) -> tuple[Hook, ...]:
        """
        Runs every hook in ``hooks`` bound to ``phase``.
        Returns all of ``hooks`` in their original order, with last_run set on
        each hook that ran. Raises HookFailureError on the first failing hook.
        """
        pass
