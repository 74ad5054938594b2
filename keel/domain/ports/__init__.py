"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
"""

from keel.domain.ports.release_store_port import ReleaseStorePort
from keel.domain.ports.hook_runner_port import HookRunnerPort
from keel.domain.ports.release_module_port import ReleaseModulePort
from keel.domain.ports.kube_client_port import KubeClientPort
from keel.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "ReleaseStorePort",
    "HookRunnerPort",
    "ReleaseModulePort",
    "KubeClientPort",
    "EventBusPort",
]
