"""Tests for ReleaseLocks."""

import threading
import pytest
from keel.domain.errors import LockUnavailableError
from keel.infrastructure.locking import ReleaseLocks


class TestReleaseLocks:
    def test_acquire_and_release(self):
        locks = ReleaseLocks()
        locks.acquire("app")
        assert locks.is_locked("app")
        locks.release("app")
        assert not locks.is_locked("app")

    def test_second_acquire_fails_immediately(self):
        locks = ReleaseLocks()
        locks.acquire("app")
        with pytest.raises(LockUnavailableError, match="app"):
            locks.acquire("app")

    def test_distinct_names_are_independent(self):
        locks = ReleaseLocks()
        locks.acquire("app")
        locks.acquire("db")
        assert locks.is_locked("app") and locks.is_locked("db")

    def test_release_is_idempotent(self):
        locks = ReleaseLocks()
        locks.release("never-locked")
        locks.acquire("app")
        locks.release("app")
        locks.release("app")
        locks.acquire("app")

    def test_contention_from_another_thread(self):
        locks = ReleaseLocks()
        locks.acquire("app")
        errors = []

        def worker():
            try:
                locks.acquire("app")
            except LockUnavailableError as e:
                errors.append(e)

        t = threading.Thread(target=worker)
        t.start()
        t.join(timeout=5)

        assert len(errors) == 1
        assert locks.is_locked("app")

    def test_released_names_are_forgotten(self):
        locks = ReleaseLocks()
        for i in range(100):
            name = f"app-{i}"
            locks.acquire(name)
            locks.release(name)
        assert len(locks) == 0

    def test_only_held_names_are_tracked(self):
        locks = ReleaseLocks()
        locks.acquire("app")
        locks.acquire("db")
        locks.release("db")
        assert len(locks) == 1
        assert locks.is_locked("app")
        assert not locks.is_locked("db")
