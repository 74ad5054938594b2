"""
Fabric Kubectl Client

Architectural Intent:
- Infrastructure adapter implementing KubeClientPort via Fabric/SSH
- Runs kubectl on a control node that holds the cluster credentials
- Manifests are streamed to the remote kubectl over stdin, never written to disk

Security:
- SSH connections use connect_timeout, allow_agent, look_for_keys
- All remote arguments quoted via shlex.quote()
"""

import asyncio
import io
import logging
import shlex
from typing import Optional

from fabric import Connection
from invoke.exceptions import CommandTimedOut

from keel.domain.errors import KubeClientError
from keel.domain.ports.kube_client_port import KubeClientPort
from keel.domain.value_objects.control_node import ControlNode

logger = logging.getLogger(__name__)


class FabricKubectlClient(KubeClientPort):
    """Adapter running kubectl on a remote control node."""

    def __init__(self, node: ControlNode, kubectl: str = "kubectl", context: str = ""):
        self.node = node
        self.kubectl = kubectl
        self.context = context

    def _get_connection(self) -> Connection:
        return Connection(
            self.node.address,
            connect_timeout=30,
            connect_kwargs={
                "allow_agent": True,
                "look_for_keys": True,
            },
        )

    def _command(self, namespace: str, *args: str) -> str:
        parts = [self.kubectl]
        if self.context:
            parts += ["--context", self.context]
        parts += ["--namespace", namespace, *args]
        return " ".join(shlex.quote(p) for p in parts)

    async def apply(self, namespace: str, manifest: str, timeout_seconds: int) -> str:
        cmd = self._command(namespace, "apply", "-f", "-")
        return await self._run(cmd, timeout_seconds, stdin=manifest)

    async def wait_for_job(self, namespace: str, name: str, timeout_seconds: int) -> None:
        cmd = self._command(
            namespace, "wait", "--for=condition=complete",
            f"job/{name}", f"--timeout={timeout_seconds}s",
        )
        await self._run(cmd, timeout_seconds + 5)

    async def _run(
        self, cmd: str, timeout_seconds: int, stdin: Optional[str] = None
    ) -> str:
        def _exec() -> str:
            logger.debug("[%s] $ %s", self.node, cmd)
            conn = self._get_connection()
            try:
                result = conn.run(
                    cmd,
                    in_stream=io.StringIO(stdin) if stdin is not None else False,
                    hide=True,
                    warn=True,
                    timeout=timeout_seconds,
                )
            except CommandTimedOut as e:
                raise KubeClientError(
                    f"timed out after {timeout_seconds}s on {self.node}: {cmd}"
                ) from e
            finally:
                conn.close()
            if result.failed:
                raise KubeClientError(
                    f"kubectl on {self.node} exited with {result.exited}: "
                    f"{result.stderr.strip()}"
                )
            return result.stdout.strip()

        return await asyncio.get_event_loop().run_in_executor(None, _exec)
