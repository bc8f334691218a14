from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Protocol


class StorageError(Exception):
    """The settings area could not be read or written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed slot store. Lives as long as the object does."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SQLiteKeyValueStore:
    """Process-private settings file.

    One `settings` table of key/value text pairs. Every call opens its own
    connection, so the file is never held open between operations.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"cannot open settings file {self.db_path}: {exc}") from exc

    @staticmethod
    def default_path() -> Path:
        return Path.home() / ".proxifocus" / "settings.db"

    # ----------------------------
    # Connection / schema
    # ----------------------------

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _init_db(self) -> None:
        con = self._connect()
        try:
            with con:
                con.execute(
                    """
                    CREATE TABLE IF NOT EXISTS settings (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    );
                    """
                )
        finally:
            con.close()

    # ----------------------------
    # Slots
    # ----------------------------

    def get(self, key: str) -> Optional[str]:
        try:
            con = self._connect()
            try:
                row = con.execute("SELECT value FROM settings WHERE key=?", (key,)).fetchone()
            finally:
                con.close()
        except sqlite3.Error as exc:
            raise StorageError(f"cannot read {key!r} from {self.db_path}: {exc}") from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            con = self._connect()
            try:
                with con:
                    con.execute(
                        """
                        INSERT INTO settings(key, value) VALUES(?, ?)
                        ON CONFLICT(key) DO UPDATE SET value=excluded.value
                        """,
                        (key, value),
                    )
            finally:
                con.close()
        except sqlite3.Error as exc:
            raise StorageError(f"cannot write {key!r} to {self.db_path}: {exc}") from exc
