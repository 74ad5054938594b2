"""
Kube Release Module

Architectural Intent:
- Infrastructure adapter implementing ReleaseModulePort
- Applies the target release's manifest through the environment's kube client
- Errors propagate unchanged; recording the failed attempt is the caller's job
"""

import logging
from typing import Any

from keel.domain.entities.release import Release
from keel.domain.environment import Environment
from keel.domain.ports.release_module_port import ReleaseModulePort

logger = logging.getLogger(__name__)


class KubeReleaseModule(ReleaseModulePort):
    async def rollback(
        self,
        current: Release,
        target: Release,
        request: Any,
        environment: Environment,
    ) -> None:
        logger.info(
            "Applying %s v%d over v%d in namespace %s",
            target.name, target.version, current.version, target.namespace,
        )
        output = await environment.kube_client.apply(
            target.namespace, target.manifest, request.timeout_seconds
        )
        if output:
            logger.debug(output)
