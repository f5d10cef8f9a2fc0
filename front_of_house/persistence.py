"""SQLite snapshot persistence for the front-of-house collections."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Protocol, TypeVar

from front_of_house.config import DB_PATH

logger = logging.getLogger(__name__)

T = TypeVar("T")

CATEGORIES_KEY = "categories"
MENU_ITEMS_KEY = "menuItems"
TABLES_KEY = "tables"
ORDERS_KEY = "orders"


class SnapshotStore(Protocol):
    """Key to JSON value store with whole-value load/save."""

    def load(self, key: str) -> Any | None: ...

    def save(self, key: str, value: Any) -> None: ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteSnapshotStore:
    """Keeps one JSON document per key in a local SQLite file."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the snapshot table if it does not already exist."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS snapshots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def load(self, key: str) -> Any | None:
        """Return the decoded value stored under key, or None if absent."""
        self.bootstrap_schema()
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM snapshots WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return json.loads(row[0])

    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under key in a single write."""
        payload = json.dumps(value, ensure_ascii=False)
        self.bootstrap_schema()
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO snapshots (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, payload, _utc_now_iso()),
                )
        finally:
            conn.close()


class MemoryStore:
    """In-process store holding JSON text, so values round-trip like the SQLite one."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def put_raw(self, key: str, text: str) -> None:
        """Store text as-is; used to simulate damaged snapshots."""
        self._data[key] = text


class SnapshotRepository(Generic[T]):
    """
    Load and save one whole collection under a fixed key.

    A missing snapshot yields the defaults (which are then persisted).
    A snapshot that cannot be decoded is logged and replaced by the defaults
    in memory; it is overwritten on the next save.

    With keep_invalid_entries, a list snapshot is decoded entry by entry
    instead: entries that fail are logged, left out of the loaded items and
    written back untouched on every save.
    """

    def __init__(
        self,
        store: SnapshotStore,
        key: str,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[T], dict[str, Any]],
        defaults: Callable[[], list[T]] = list,
        keep_invalid_entries: bool = False,
    ) -> None:
        self.store = store
        self.key = key
        self._decode = decode
        self._encode = encode
        self._defaults = defaults
        self._keep_invalid_entries = keep_invalid_entries
        self.rejected: list[Any] = []

    def load_all(self) -> list[T]:
        self.rejected = []
        try:
            raw = self.store.load(self.key)
        except (ValueError, sqlite3.DatabaseError) as exc:
            logger.warning("snapshot %r unreadable, using defaults: %s", self.key, exc)
            return self._defaults()

        if raw is None:
            items = self._defaults()
            if items:
                self.save_all(items)
            return items

        if not isinstance(raw, list):
            logger.warning("snapshot %r malformed, using defaults: expected a list, got %.200r", self.key, raw)
            return self._defaults()

        if self._keep_invalid_entries:
            return self._decode_entries(raw)

        try:
            return [self._decode(entry) for entry in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("snapshot %r malformed, using defaults: %s", self.key, exc)
            return self._defaults()

    def _decode_entries(self, raw: list[Any]) -> list[T]:
        items: list[T] = []
        for index, entry in enumerate(raw):
            try:
                items.append(self._decode(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("snapshot %r entry %d kept aside: %s raw=%.500r", self.key, index, exc, entry)
                self.rejected.append(entry)
        return items

    def save_all(self, items: list[T]) -> None:
        self.store.save(self.key, [self._encode(item) for item in items] + self.rejected)
        logger.debug("saved snapshot %r with %d entries", self.key, len(items))
