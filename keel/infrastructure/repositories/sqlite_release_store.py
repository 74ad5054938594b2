"""
SQLite Release Store

Architectural Intent:
- Durable ReleaseStorePort backed by SQLite (stdlib, zero external deps)
- One row per (name, version); the primary key enforces create conflicts
- Status and description are duplicated into columns for history queries;
  the full record is stored as JSON in the body column

Design Decisions:
- Single database file at configurable path (default: keel.db)
- Auto-creates tables on first use
- WAL mode for concurrent readers while a rollback writes
- Release locks are process-local (ReleaseLocks), not stored in the database
"""

from __future__ import annotations
import json
import logging
import sqlite3
import threading
from datetime import datetime, UTC
from typing import List, Optional

from keel.domain.entities.release import Release
from keel.domain.errors import ReleaseConflictError, ReleaseNotFoundError
from keel.domain.ports.release_store_port import ReleaseStorePort
from keel.infrastructure.locking import ReleaseLocks

logger = logging.getLogger(__name__)


class SQLiteReleaseStore(ReleaseStorePort):
    """Release history persisted in SQLite."""

    def __init__(self, db_path: str = "keel.db"):
        self._db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None
        self._mutex = threading.Lock()
        self._locks = ReleaseLocks()

    def connect(self) -> None:
        """Open database connection and create tables."""
        self._conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.row_factory = sqlite3.Row
        self._create_tables()
        logger.info("SQLite release store connected: %s", self._db_path)

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def _create_tables(self) -> None:
        assert self._conn is not None
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS releases (
                name TEXT NOT NULL,
                version INTEGER NOT NULL,
                namespace TEXT NOT NULL,
                status TEXT NOT NULL,
                description TEXT DEFAULT '',
                body TEXT NOT NULL,
                recorded_at TEXT NOT NULL,
                PRIMARY KEY (name, version)
            );

            CREATE INDEX IF NOT EXISTS idx_releases_status ON releases(name, status);
        """)

    # -- Locking -------------------------------------------------------------

    def lock_release(self, name: str) -> None:
        self._locks.acquire(name)

    def unlock_release(self, name: str) -> None:
        self._locks.release(name)

    # -- Reads ---------------------------------------------------------------

    def last(self, name: str) -> Release:
        assert self._conn is not None
        row = self._conn.execute(
            "SELECT body FROM releases WHERE name = ? ORDER BY version DESC LIMIT 1",
            (name,),
        ).fetchone()
        if row is None:
            raise ReleaseNotFoundError(name)
        return Release.from_dict(json.loads(row["body"]))

    def get(self, name: str, version: int) -> Release:
        assert self._conn is not None
        row = self._conn.execute(
            "SELECT body FROM releases WHERE name = ? AND version = ?",
            (name, version),
        ).fetchone()
        if row is None:
            raise ReleaseNotFoundError(name, version)
        return Release.from_dict(json.loads(row["body"]))

    def history(self, name: str) -> List[Release]:
        assert self._conn is not None
        rows = self._conn.execute(
            "SELECT body FROM releases WHERE name = ? ORDER BY version ASC",
            (name,),
        ).fetchall()
        if not rows:
            raise ReleaseNotFoundError(name)
        return [Release.from_dict(json.loads(r["body"])) for r in rows]

    # -- Writes --------------------------------------------------------------

    def create(self, release: Release) -> None:
        assert self._conn is not None
        with self._mutex:
            try:
                self._conn.execute(
                    """INSERT INTO releases
                       (name, version, namespace, status, description, body, recorded_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (release.name, release.version, release.namespace,
                     release.status.value, release.info.description,
                     json.dumps(release.to_dict()),
                     datetime.now(UTC).isoformat()),
                )
                self._conn.commit()
            except sqlite3.IntegrityError:
                self._conn.rollback()
                raise ReleaseConflictError(release.name, release.version)
        logger.debug("Created release %s v%d", release.name, release.version)

    def update(self, release: Release) -> None:
        assert self._conn is not None
        with self._mutex:
            cursor = self._conn.execute(
                """UPDATE releases
                   SET namespace = ?, status = ?, description = ?, body = ?, recorded_at = ?
                   WHERE name = ? AND version = ?""",
                (release.namespace, release.status.value, release.info.description,
                 json.dumps(release.to_dict()), datetime.now(UTC).isoformat(),
                 release.name, release.version),
            )
            self._conn.commit()
        if cursor.rowcount == 0:
            raise ReleaseNotFoundError(release.name, release.version)
        logger.debug(
            "Updated release %s v%d (%s)",
            release.name, release.version, release.status.value,
        )
