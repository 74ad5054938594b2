"""
Release Store Port

Architectural Intent:
- Durable, versioned history of releases keyed by name
- Non-blocking exclusive locking per release name
- Implemented by InMemoryReleaseStore and SQLiteReleaseStore

Concurrency:
- Implementations guarantee single-record atomicity only; cross-record
  sequencing is safe only while the caller holds the name's lock
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List
from keel.domain.entities.release import Release, StatusCode
from keel.domain.errors import ReleaseNotFoundError


class ReleaseStorePort(ABC):
    """
    Port interface for release history storage.
    """

    @abstractmethod
    def lock_release(self, name: str) -> None:
        """
        Acquires the exclusive lock for a release name without waiting.
        Raises LockUnavailableError if another operation holds it.
        """
        pass

    @abstractmethod
    def unlock_release(self, name: str) -> None:
        """
        Releases the lock for a release name. Safe to call when not held.
        """
        pass

    @abstractmethod
    def last(self, name: str) -> Release:
        """
        Returns the release with the highest version for a name.
        """
        pass

    @abstractmethod
    def get(self, name: str, version: int) -> Release:
        """
        Returns a specific version of a release.
        """
        pass

    @abstractmethod
    def create(self, release: Release) -> None:
        """
        Inserts a new version. Raises ReleaseConflictError if it exists.
        """
        pass

    @abstractmethod
    def update(self, release: Release) -> None:
        """
        Rewrites an existing version. Raises ReleaseNotFoundError if absent.
        """
        pass

    @abstractmethod
    def history(self, name: str) -> List[Release]:
        """
        Returns every version of a release, oldest first.
        """
        pass

    def deployed(self, name: str) -> Release:
        """
        Returns the DEPLOYED version of a release.
        """
        for release in reversed(self.history(name)):
            if release.status == StatusCode.DEPLOYED:
                return release
        raise ReleaseNotFoundError(name)

    @contextmanager
    def locked(self, name: str) -> Iterator[None]:
        """
        Holds the release lock for the duration of the block.
        """
        self.lock_release(name)
        try:
            yield
        finally:
            self.unlock_release(name)
