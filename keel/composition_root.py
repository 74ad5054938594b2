"""
Composition Root

Architectural Intent:
- Dependency injection composition root for Keel
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Storage driver and kube client are picked from configuration
- Telemetry always listens to rollback events; it exports only when an
  endpoint is configured
"""

from dataclasses import dataclass
from typing import Optional

from keel.application.use_cases.rollback_release import RollbackRelease
from keel.domain.environment import Environment
from keel.domain.events.release_events import (
    ReleaseRollbackFailedEvent,
    ReleaseRolledBackEvent,
)
from keel.domain.ports.kube_client_port import KubeClientPort
from keel.domain.ports.release_store_port import ReleaseStorePort
from keel.domain.value_objects.control_node import ControlNode
from keel.infrastructure.adapters.fabric_kubectl_client import FabricKubectlClient
from keel.infrastructure.adapters.kube_hook_runner import KubeHookRunner
from keel.infrastructure.adapters.kube_release_module import KubeReleaseModule
from keel.infrastructure.adapters.kubectl_client import KubectlClient
from keel.infrastructure.config import KeelConfig
from keel.infrastructure.event_bus import EventBus
from keel.infrastructure.repositories.memory_release_store import InMemoryReleaseStore
from keel.infrastructure.repositories.sqlite_release_store import SQLiteReleaseStore
from keel.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter


@dataclass
class KeelContainer:
    """DI container holding all wired dependencies."""

    config: KeelConfig
    releases: ReleaseStorePort
    kube_client: KubeClientPort
    event_bus: EventBus
    telemetry: OTELExporter
    rollback: RollbackRelease

    def close(self) -> None:
        self.telemetry.shutdown()
        if isinstance(self.releases, SQLiteReleaseStore):
            self.releases.close()


def _create_store(config: KeelConfig) -> ReleaseStorePort:
    if config.storage.driver == "memory":
        return InMemoryReleaseStore()
    if config.storage.driver != "sqlite":
        raise ValueError(f"Unknown storage driver: {config.storage.driver!r}")
    store = SQLiteReleaseStore(config.storage.db_path)
    store.connect()
    return store


def _create_kube_client(config: KeelConfig) -> KubeClientPort:
    if config.kube.control_node:
        return FabricKubectlClient(
            ControlNode(config.kube.control_node),
            kubectl=config.kube.kubectl,
            context=config.kube.context,
        )
    return KubectlClient(kubectl=config.kube.kubectl, context=config.kube.context)


def create_container(config: Optional[KeelConfig] = None) -> KeelContainer:
    """Create and wire all dependencies."""
    config = config or KeelConfig()
    releases = _create_store(config)
    kube_client = _create_kube_client(config)
    event_bus = EventBus()

    telemetry = OTELExporter(
        OTELConfig(
            endpoint=config.telemetry.endpoint,
            insecure=config.telemetry.insecure,
        )
    )
    telemetry.initialize()
    event_bus.subscribe(ReleaseRolledBackEvent, telemetry.on_rolled_back)
    event_bus.subscribe(ReleaseRollbackFailedEvent, telemetry.on_rollback_failed)

    rollback = RollbackRelease(
        releases=releases,
        hook_runner=KubeHookRunner(kube_client),
        release_module=KubeReleaseModule(),
        environment=Environment(releases=releases, kube_client=kube_client),
        event_bus=event_bus,
    )

    return KeelContainer(
        config=config,
        releases=releases,
        kube_client=kube_client,
        event_bus=event_bus,
        telemetry=telemetry,
        rollback=rollback,
    )
