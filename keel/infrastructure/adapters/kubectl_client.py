"""
Kubectl Client

Architectural Intent:
- Infrastructure adapter implementing KubeClientPort with the local kubectl
- Uses subprocess for kubectl operations wrapped in async
- Every invocation is bounded by the caller's timeout; a timeout surfaces as
  KubeClientError like any other kubectl failure
"""

import asyncio
import logging
import subprocess
from typing import List, Optional

from keel.domain.errors import KubeClientError
from keel.domain.ports.kube_client_port import KubeClientPort

logger = logging.getLogger(__name__)


class KubectlClient(KubeClientPort):
    def __init__(self, kubectl: str = "kubectl", context: str = ""):
        self.kubectl = kubectl
        self.context = context

    def _command(self, namespace: str, *args: str) -> List[str]:
        cmd = [self.kubectl]
        if self.context:
            cmd += ["--context", self.context]
        return cmd + ["--namespace", namespace, *args]

    async def apply(self, namespace: str, manifest: str, timeout_seconds: int) -> str:
        cmd = self._command(namespace, "apply", "-f", "-")
        return await self._run(cmd, timeout_seconds, stdin=manifest)

    async def wait_for_job(self, namespace: str, name: str, timeout_seconds: int) -> None:
        cmd = self._command(
            namespace, "wait", "--for=condition=complete",
            f"job/{name}", f"--timeout={timeout_seconds}s",
        )
        # kubectl enforces --timeout itself; the extra margin covers startup
        await self._run(cmd, timeout_seconds + 5)

    async def _run(
        self, cmd: List[str], timeout_seconds: int, stdin: Optional[str] = None
    ) -> str:
        def _exec() -> str:
            logger.debug("$ %s", " ".join(cmd))
            try:
                result = subprocess.run(
                    cmd,
                    input=stdin,
                    capture_output=True,
                    text=True,
                    timeout=timeout_seconds,
                    check=True,
                )
                return result.stdout.strip()
            except FileNotFoundError as e:
                raise KubeClientError(f"'{cmd[0]}' not found") from e
            except subprocess.TimeoutExpired as e:
                raise KubeClientError(
                    f"timed out after {timeout_seconds}s: {' '.join(cmd)}"
                ) from e
            except subprocess.CalledProcessError as e:
                raise KubeClientError(
                    f"kubectl exited with {e.returncode}: {(e.stderr or '').strip()}"
                ) from e

        return await asyncio.get_event_loop().run_in_executor(None, _exec)
