"""SQLite key-value store backing the journal's persisted state."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

import structlog

from ..errors import PersistenceError

logger = structlog.get_logger(__name__)


class KeyValueStore:
    """Opaque string keys mapped to string values in a single SQLite table."""

    def __init__(self, db_path: str = "journal.db", timeout_seconds: float = 30.0):
        self.db_path = Path(db_path)
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(db_path=str(self.db_path))
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._get_connection("init") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Get database connection, translating sqlite errors to PersistenceError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout_seconds)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", operation=operation, error=str(e))
            raise PersistenceError(
                f"Key-value store {operation} failed: {e}",
                operation=operation,
                target=str(self.db_path)
            ) from e
        finally:
            if conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        """Value stored under key, or None."""
        with self._get_connection("get") as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        with self._lock:
            with self._get_connection("set") as conn:
                now = datetime.now(timezone.utc).isoformat()
                conn.execute("""
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                """, (key, value, now))
                conn.commit()

    def set_many(self, items: dict[str, str]) -> None:
        """Store several keys in one transaction."""
        with self._lock:
            with self._get_connection("set_many") as conn:
                now = datetime.now(timezone.utc).isoformat()
                conn.executemany("""
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                """, [(key, value, now) for key, value in items.items()])
                conn.commit()

    def delete(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""
        with self._lock:
            with self._get_connection("delete") as conn:
                cursor = conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
                return cursor.rowcount > 0

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        with self._get_connection("keys") as conn:
            return [row["key"] for row in conn.execute("SELECT key FROM kv ORDER BY key")]
