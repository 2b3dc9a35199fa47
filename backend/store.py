"""
SQLite event store shared by ingestion, queries and stats.

One EventStore is created per process, opened in the app lifespan and
handed to routes through a dependency. Every operation uses its own short
connection, so concurrent requests never share a transaction; SQLite's
own locking serialises writers.
"""

import json
import logging
import os
import sqlite3
from contextlib import closing, contextmanager
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source TEXT NOT NULL,
    context TEXT NOT NULL DEFAULT '',
    timestamp TEXT NOT NULL,
    metadata TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    UNIQUE(source, context, timestamp)
);
CREATE INDEX IF NOT EXISTS idx_events_timestamp ON events(timestamp);
CREATE INDEX IF NOT EXISTS idx_events_source ON events(source);
"""

INSERT_EVENT = """
INSERT OR IGNORE INTO events (source, context, timestamp, metadata)
VALUES (?, ?, ?, ?)
"""

BUSY_TIMEOUT_SECONDS = 30


class StoreError(RuntimeError):
    """The database could not be opened, written or committed."""


class EventStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._open = False

    # ---------- Lifetime ----------

    def open(self) -> None:
        """Create the data directory and schema. Safe to call on an existing database."""
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        self._open = True
        try:
            with self._connection() as conn:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.executescript(SCHEMA)
        except StoreError:
            self._open = False
            raise
        logger.info("Event store ready at %s", self.db_path)

    def close(self) -> None:
        self._open = False
        logger.info("Event store closed")

    @property
    def is_open(self) -> bool:
        return self._open

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if not self._open:
            raise StoreError("Event store is not open")
        try:
            conn = sqlite3.connect(
                self.db_path,
                timeout=BUSY_TIMEOUT_SECONDS,
                isolation_level=None,   # explicit BEGIN/COMMIT only
                check_same_thread=False,
            )
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open {self.db_path}: {exc}") from exc
        with closing(conn):
            conn.row_factory = sqlite3.Row
            try:
                yield conn
            except sqlite3.Error as exc:
                raise StoreError(str(exc)) from exc

    # ---------- Writes ----------

    def insert_many(self, rows: Iterable[tuple[str, str, str, object]]) -> int:
        """
        Insert (source, context, timestamp, metadata) rows in one transaction.

        Rows colliding with an existing (source, context, timestamp) are
        skipped. Returns the number of rows actually inserted. Any other
        database failure rolls back the whole batch and raises StoreError.
        """
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                inserted = 0
                for source, context, timestamp, metadata in rows:
                    cur = conn.execute(
                        INSERT_EVENT,
                        (source, context, timestamp, json.dumps(metadata)),
                    )
                    if cur.rowcount == 1:
                        inserted += 1
                conn.execute("COMMIT")
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
        return inserted

    # ---------- Reads ----------

    def events_between(self, start: str, end: str, source: Optional[str] = None) -> list[dict]:
        """Events with start <= timestamp < end, newest first."""
        query = """
            SELECT source, context, timestamp, metadata
            FROM events
            WHERE timestamp >= ? AND timestamp < ?
        """
        params: list = [start, end]
        if source is not None:
            query += " AND source = ?"
            params.append(source)
        query += " ORDER BY timestamp DESC, id DESC"

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()

        return [
            {
                "source": r["source"],
                "context": r["context"],
                "timestamp": r["timestamp"],
                "metadata": json.loads(r["metadata"]),
            }
            for r in rows
        ]

    def count(self) -> int:
        with self._connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM events").fetchone()[0]

    def count_between(self, start: str, end: str) -> int:
        with self._connection() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM events WHERE timestamp >= ? AND timestamp < ?",
                (start, end),
            ).fetchone()[0]

    def count_by_source(self) -> dict[str, int]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT source, COUNT(*) AS n
                FROM events
                GROUP BY source
                ORDER BY n DESC, source
                """
            ).fetchall()
        return {r["source"]: r["n"] for r in rows}

    def recent_days(self, limit: int) -> list[str]:
        """Distinct UTC dates (YYYY-MM-DD) that have events, newest first."""
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT DISTINCT substr(timestamp, 1, 10) AS day
                FROM events
                ORDER BY day DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [r["day"] for r in rows]
