"""
Kube Client Port

Architectural Intent:
- Minimal contract for talking to the target cluster
- Implemented by KubectlClient (local) and FabricKubectlClient (via SSH)
"""

from abc import ABC, abstractmethod


class KubeClientPort(ABC):
    """
    Port interface for applying manifests to a cluster.
    """

    @abstractmethod
    async def apply(self, namespace: str, manifest: str, timeout_seconds: int) -> str:
        """
        Applies a manifest in a namespace. Returns kubectl output.
        Raises KubeClientError on failure or timeout.
        """
        pass

    @abstractmethod
    async def wait_for_job(self, namespace: str, name: str, timeout_seconds: int) -> None:
        """
        Blocks until a Job completes. Raises KubeClientError otherwise.
        """
        pass
