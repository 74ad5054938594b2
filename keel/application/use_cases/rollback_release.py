"""
Rollback Release Use Case

Architectural Intent:
- Reverts a release to a previously recorded version by creating a new
  version (current + 1) that copies the older version's definition
- Holds the per-name release lock for the whole operation
- Sequences pre-rollback hooks, the release module and post-rollback hooks
- Hooks returned by the runner (with last_run set) replace the target's hooks

Failure contract:
- Validation and lookup errors abort before any store write
- Pre-hook failure aborts without recording the attempt
- Release module failure records current as SUPERSEDED and the new version
  as FAILED, then raises ModuleRollbackError carrying the response
- Post-hook failure raises without recording anything
"""

import logging
from datetime import datetime, UTC
from typing import Optional

from keel.application.dtos.rollback_dtos import (
    RollbackReleaseRequest,
    RollbackReleaseResponse,
)
from keel.domain.entities.hook import HookEvent
from keel.domain.entities.release import Info, Release, Status, StatusCode
from keel.domain.environment import Environment
from keel.domain.errors import (
    InvalidRevisionError,
    KeelError,
    MissingReleaseError,
    ModuleRollbackError,
)
from keel.domain.events.event_base import DomainEvent
from keel.domain.events.release_events import (
    ReleaseRollbackFailedEvent,
    ReleaseRolledBackEvent,
)
from keel.domain.ports.event_bus_port import EventBusPort
from keel.domain.ports.hook_runner_port import HookRunnerPort
from keel.domain.ports.release_module_port import ReleaseModulePort
from keel.domain.ports.release_store_port import ReleaseStorePort
from keel.domain.value_objects.release_name import is_valid_release_name

logger = logging.getLogger(__name__)


class RollbackRelease:
    def __init__(
        self,
        releases: ReleaseStorePort,
        hook_runner: HookRunnerPort,
        release_module: ReleaseModulePort,
        environment: Environment,
        event_bus: Optional[EventBusPort] = None,
    ):
        self.releases = releases
        self.hook_runner = hook_runner
        self.release_module = release_module
        self.environment = environment
        self.event_bus = event_bus

    async def execute(self, request: RollbackReleaseRequest) -> RollbackReleaseResponse:
        with self.releases.locked(request.name):
            current, target = self._prepare(request)

            try:
                response = await self._perform(current, target, request)
            except ModuleRollbackError as e:
                await self._publish(
                    ReleaseRollbackFailedEvent(
                        aggregate_id=target.name,
                        version=target.version,
                        error_message=str(e.cause),
                    )
                )
                raise

            if request.dry_run:
                return response

            self.releases.create(response.release)

        await self._publish(
            ReleaseRolledBackEvent(
                aggregate_id=target.name,
                version=target.version,
                target_version=self._target_version(request, current),
            )
        )
        return response

    @staticmethod
    def _target_version(request: RollbackReleaseRequest, current: Release) -> int:
        return request.version or current.version - 1

    def _prepare(self, request: RollbackReleaseRequest) -> tuple[Release, Release]:
        """Resolve the current release and build the new target version."""
        if not is_valid_release_name(request.name):
            raise MissingReleaseError(request.name)
        if request.version < 0:
            raise InvalidRevisionError(request.version)

        current = self.releases.last(request.name)
        target_version = self._target_version(request, current)

        logger.info(
            "rolling back %s (current: v%d, target: v%d)",
            request.name, current.version, target_version,
        )

        previous = self.releases.get(request.name, target_version)

        target = Release(
            name=request.name,
            version=current.version + 1,
            namespace=current.namespace,
            chart=previous.chart,
            config=previous.config,
            manifest=previous.manifest,
            hooks=previous.hooks,
            info=Info(
                status=Status(
                    code=StatusCode.UNKNOWN,
                    notes=previous.info.status.notes,
                ),
                first_deployed=current.info.first_deployed,
                last_deployed=datetime.now(UTC),
                description=f"Rollback to v{target_version}",
            ),
        )
        return current, target

    async def _perform(
        self,
        current: Release,
        target: Release,
        request: RollbackReleaseRequest,
    ) -> RollbackReleaseResponse:
        if request.dry_run:
            logger.info("dry run for %s", target.name)
            return RollbackReleaseResponse(release=target)

        if not request.disable_hooks:
            target = target.with_hooks(
                await self.hook_runner.run_hooks(
                    target.hooks, target.name, target.namespace,
                    HookEvent.PRE_ROLLBACK, request.timeout_seconds,
                )
            )

        try:
            await self.release_module.rollback(
                current, target, request, self.environment
            )
        except Exception as e:
            msg = f'Rollback "{target.name}" failed: {e}'
            logger.warning("warning: %s", msg)
            failed = target.fail(msg)
            self._record(current.supersede(), update=True)
            self._record(failed, update=False)
            raise ModuleRollbackError(
                msg, RollbackReleaseResponse(release=failed), e
            ) from e

        if not request.disable_hooks:
            target = target.with_hooks(
                await self.hook_runner.run_hooks(
                    target.hooks, target.name, target.namespace,
                    HookEvent.POST_ROLLBACK, request.timeout_seconds,
                )
            )

        self._record(current.supersede(), update=True)
        return RollbackReleaseResponse(release=target.deploy())

    def _record(self, release: Release, update: bool) -> None:
        try:
            if update:
                self.releases.update(release)
            else:
                self.releases.create(release)
        except KeelError as e:
            logger.warning(
                "warning: Failed to record release %r: %s", release.name, e
            )

    async def _publish(self, event: DomainEvent) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish([event])
