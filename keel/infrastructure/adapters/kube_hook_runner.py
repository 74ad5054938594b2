"""
Kube Hook Runner

Architectural Intent:
- Infrastructure adapter implementing HookRunnerPort on top of a KubeClientPort
- Hooks for a phase run one at a time in ascending weight order
- Job hooks are waited on until complete; other kinds only need to apply
- Each hook that completes is returned with last_run set to its finish time
- The first failing hook stops the phase and surfaces as HookFailureError
"""

import logging
from dataclasses import replace
from datetime import datetime, UTC

from keel.domain.entities.hook import Hook, HookEvent, hooks_for_phase
from keel.domain.errors import HookFailureError, KubeClientError
from keel.domain.ports.hook_runner_port import HookRunnerPort
from keel.domain.ports.kube_client_port import KubeClientPort

logger = logging.getLogger(__name__)


class KubeHookRunner(HookRunnerPort):
    def __init__(self, kube_client: KubeClientPort):
        self.kube_client = kube_client

    async def run_hooks(
        self,
        hooks: tuple[Hook, ...],
        release_name: str,
        namespace: str,
        phase: HookEvent,
        timeout_seconds: int,
    ) -> tuple[Hook, ...]:
        selected = hooks_for_phase(hooks, phase)
        if not selected:
            logger.debug("No %s hooks for %s", phase.value, release_name)
            return tuple(hooks)

        logger.info(
            "Executing %d %s hook(s) for %s", len(selected), phase.value, release_name
        )
        # Keyed by identity: two hooks may compare equal.
        ran: dict[int, Hook] = {}
        for hook in selected:
            try:
                await self.kube_client.apply(namespace, hook.manifest, timeout_seconds)
                if hook.kind == "Job":
                    await self.kube_client.wait_for_job(
                        namespace, hook.name, timeout_seconds
                    )
            except (KubeClientError, OSError) as e:
                logger.error(
                    "%s hook %s for %s failed: %s",
                    phase.value, hook.name, release_name, e,
                )
                raise HookFailureError(phase.value, hook.name, str(e)) from e
            ran[id(hook)] = replace(hook, last_run=datetime.now(UTC))
            logger.debug("Hook %s (%s) complete", hook.name, hook.path or hook.kind)

        logger.info("Hooks complete for %s %s", phase.value, release_name)
        return tuple(ran.get(id(h), h) for h in hooks)
