"""Global test configuration.

Shared builders for release histories used across the test suite.
"""

from datetime import datetime, UTC

import pytest

from keel.domain.entities.hook import Hook, HookEvent
from keel.domain.entities.release import Chart, Info, Release, Status, StatusCode
from keel.infrastructure.repositories.memory_release_store import InMemoryReleaseStore

FIRST_DEPLOYED = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

PRE_HOOK = Hook(
    name="db-backup",
    kind="Job",
    manifest="kind: Job\nmetadata:\n  name: db-backup\n",
    events=(HookEvent.PRE_ROLLBACK,),
    path="templates/backup-job.yaml",
    weight=5,
)

POST_HOOK = Hook(
    name="cache-flush",
    kind="ConfigMap",
    manifest="kind: ConfigMap\nmetadata:\n  name: cache-flush\n",
    events=(HookEvent.POST_ROLLBACK, HookEvent.POST_UPGRADE),
    weight=0,
)


def build_release(
    name: str = "app",
    version: int = 1,
    status: StatusCode = StatusCode.DEPLOYED,
    config: str = "replicas: 1",
    namespace: str = "default",
    notes: str = "",
    hooks: tuple = (),
    description: str = "Install complete",
) -> Release:
    return Release(
        name=name,
        version=version,
        namespace=namespace,
        chart=Chart(name=name, version=f"0.{version}.0"),
        config=config,
        manifest=f"kind: Deployment\nmetadata:\n  name: {name}\n# {config}\n",
        hooks=hooks,
        info=Info(
            status=Status(code=status, notes=notes),
            first_deployed=FIRST_DEPLOYED,
            last_deployed=FIRST_DEPLOYED,
            description=description,
        ),
    )


@pytest.fixture
def make_release():
    return build_release


@pytest.fixture
def app_store():
    """Release "app": v1 SUPERSEDED (config A), v2 DEPLOYED (config A')."""
    store = InMemoryReleaseStore()
    store.create(
        build_release(
            version=1,
            status=StatusCode.SUPERSEDED,
            config="replicas: 1",
            notes="v1 notes",
            hooks=(PRE_HOOK, POST_HOOK),
        )
    )
    store.create(
        build_release(
            version=2,
            status=StatusCode.DEPLOYED,
            config="replicas: 3",
            namespace="prod",
            notes="v2 notes",
            description="Upgrade complete",
        )
    )
    return store
