"""
In-Memory Release Store

Architectural Intent:
- ReleaseStorePort backed by a dict of name -> {version: Release}
- Used by tests and for dry-run tooling where no database is configured
"""

from __future__ import annotations
import logging
import threading
from typing import List

from keel.domain.entities.release import Release
from keel.domain.errors import ReleaseConflictError, ReleaseNotFoundError
from keel.domain.ports.release_store_port import ReleaseStorePort
from keel.infrastructure.locking import ReleaseLocks

logger = logging.getLogger(__name__)


class InMemoryReleaseStore(ReleaseStorePort):
    """Release history kept in process memory."""

    def __init__(self) -> None:
        self._records: dict[str, dict[int, Release]] = {}
        self._mutex = threading.Lock()
        self._locks = ReleaseLocks()

    def lock_release(self, name: str) -> None:
        self._locks.acquire(name)

    def unlock_release(self, name: str) -> None:
        self._locks.release(name)

    def last(self, name: str) -> Release:
        with self._mutex:
            versions = self._records.get(name)
            if not versions:
                raise ReleaseNotFoundError(name)
            return versions[max(versions)]

    def get(self, name: str, version: int) -> Release:
        with self._mutex:
            release = self._records.get(name, {}).get(version)
        if release is None:
            raise ReleaseNotFoundError(name, version)
        return release

    def create(self, release: Release) -> None:
        with self._mutex:
            versions = self._records.setdefault(release.name, {})
            if release.version in versions:
                raise ReleaseConflictError(release.name, release.version)
            versions[release.version] = release
        logger.debug("Created release %s v%d", release.name, release.version)

    def update(self, release: Release) -> None:
        with self._mutex:
            versions = self._records.get(release.name, {})
            if release.version not in versions:
                raise ReleaseNotFoundError(release.name, release.version)
            versions[release.version] = release
        logger.debug(
            "Updated release %s v%d (%s)",
            release.name, release.version, release.status.value,
        )

    def history(self, name: str) -> List[Release]:
        with self._mutex:
            versions = self._records.get(name)
            if not versions:
                raise ReleaseNotFoundError(name)
            return [versions[v] for v in sorted(versions)]
