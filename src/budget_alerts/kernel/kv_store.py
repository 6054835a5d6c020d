"""
Key-value backends for alert records

The alert store only needs string keys and string values with prefix
listing, the same surface a browser's localStorage offers. Backends raise
freely; the alert store adapter is the layer that turns failures into
"not triggered".
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Protocol

from budget_alerts.kernel.errors import StorageCapacityExceeded
from budget_alerts.kernel.retry import retry_on_sqlite_lock


class KeyValueStore(Protocol):
    """Minimal durable string store consumed by the alert store adapter"""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent"""
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or replace a value"""
        ...

    def delete(self, key: str) -> None:
        """Remove a key; absent keys are ignored"""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with prefix"""
        ...


class InMemoryKeyValueStore:
    """
    Dict-backed store for tests and single-process hosts

    An optional max_entries emulates a storage quota: inserting a new key
    into a full store raises StorageCapacityExceeded, while overwriting an
    existing key still succeeds.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self.max_entries = max_entries
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if (
            self.max_entries is not None
            and key not in self._data
            and len(self._data) >= self.max_entries
        ):
            raise StorageCapacityExceeded(key, self.max_entries)
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def __len__(self) -> int:
        return len(self._data)


class SQLiteKeyValueStore:
    """
    SQLite-based key-value store

    Schema:
    - kv_entries table: key (primary key) and value text
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize store with SQLite database

        Args:
            db_path: Path to SQLite database file (created if missing)
        """
        self.db_path = Path(db_path)
        self._initialize_schema()

    def _initialize_schema(self) -> None:
        """Create tables if they don't exist"""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections"""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_entries WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    @retry_on_sqlite_lock()
    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_entries (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
                (key, value),
            )
            conn.commit()

    @retry_on_sqlite_lock()
    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
            conn.commit()

    def keys(self, prefix: str = "") -> list[str]:
        # substr comparison instead of LIKE so '%' and '_' in ids match literally
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT key FROM kv_entries WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            )
            return [row["key"] for row in cursor.fetchall()]
