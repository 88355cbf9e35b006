"""Keyed JSON persistence over a synchronous key-value substrate."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from resto.config import resolve_db_path

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueSubstrate(Protocol):
    """Synchronous string store the adapter writes through."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteSubstrate:
    """Key-value table in a local SQLite file."""

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = Path(db_path or resolve_db_path())
        self._bootstrapped = False

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        if not self._bootstrapped:
            self.bootstrap_schema(conn)
        return conn

    def bootstrap_schema(self, conn: sqlite3.Connection) -> None:
        """Create the key-value table if it does not already exist."""
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        self._bootstrapped = True

    def get(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return str(row[0])

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value, _utc_now_iso()),
                )
        finally:
            conn.close()


class MemorySubstrate:
    """Dict-backed substrate; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class UnavailableSubstrate:
    """Stand-in for a headless session: reads are absent, writes are dropped."""

    def __init__(self) -> None:
        self._reported = False

    def get(self, key: str) -> str | None:
        if not self._reported:
            logger.warning("store unavailable, using defaults key=%r", key)
            self._reported = True
        return None

    def set(self, key: str, value: str) -> None:
        return None


class KeyedStore:
    """
    Load and save JSON values by key.

    Persistence is best-effort. Read failures (missing substrate, corrupted or
    incompatible payload) fall back to the caller's default and write failures
    are reported through the return value; both are logged and never raised.
    """

    def __init__(self, substrate: KeyValueSubstrate) -> None:
        self.substrate = substrate

    def load(self, key: str, default: T, decode: Callable[[Any], T] | None = None) -> T:
        try:
            raw = self.substrate.get(key)
        except Exception as exc:
            logger.warning("store read failed key=%r error=%r", key, exc)
            return default
        if raw is None:
            return default

        try:
            value = json.loads(raw)
            if decode is not None:
                value = decode(value)
        except Exception as exc:
            logger.warning("store payload unreadable key=%r error=%r", key, exc)
            return default
        return value

    def save(self, key: str, value: Any, encode: Callable[[Any], Any] | None = None) -> bool:
        try:
            payload = encode(value) if encode is not None else value
            raw = json.dumps(payload, ensure_ascii=False, allow_nan=False)
        except Exception as exc:
            logger.warning("store serialization failed key=%r error=%r", key, exc)
            return False

        try:
            self.substrate.set(key, raw)
        except Exception as exc:
            logger.warning("store write failed key=%r error=%r", key, exc)
            return False
        logger.debug("store saved key=%r bytes=%d", key, len(raw))
        return True
