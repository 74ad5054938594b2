"""
Release Locks

Architectural Intent:
- Exclusive, non-blocking lock per release name
- One threading.Lock per held name; the table is guarded by a short-lived
  mutex, and a name's entry is dropped as soon as its lock is released
- Operations on distinct names never contend
"""

import logging
import threading

from keel.domain.errors import LockUnavailableError

logger = logging.getLogger(__name__)


class ReleaseLocks:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def acquire(self, name: str) -> None:
        with self._guard:
            lock = self._locks.setdefault(name, threading.Lock())
            # Never waits: a held lock fails straight away.
            if not lock.acquire(blocking=False):
                raise LockUnavailableError(name)
        logger.debug("Locked release %s", name)

    def release(self, name: str) -> None:
        with self._guard:
            lock = self._locks.pop(name, None)
            if lock is None:
                return
            lock.release()
        logger.debug("Unlocked release %s", name)

    def is_locked(self, name: str) -> bool:
        with self._guard:
            return name in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
