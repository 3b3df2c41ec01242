"""Per-song top-N high scores over a key-value store, with SQLite persistence."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from notefall.config import DEFAULT_DB_PATH, HIGH_SCORE_LIMIT
from notefall.models import HighScoreEntry

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing store cannot be read or written."""


@runtime_checkable
class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStorage:
    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        try:
            if str(db_path) != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(db_path))
            self._init_db()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Cannot open score database {db_path}: {exc}") from exc

    def _init_db(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def get(self, key: str) -> str | None:
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self.conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    def close(self) -> None:
        self.conn.close()


def _now_ms() -> int:
    return int(time.time() * 1000)


class HighScoreStore:
    """Best scores per song, highest first, ties kept in the order they were set.

    Stored data that is missing or unreadable counts as an empty list; failures
    are logged and never raised to the caller.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        limit: int = HIGH_SCORE_LIMIT,
        now: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = storage
        self._limit = limit
        self._now = now

    @staticmethod
    def key_for(song_id: str) -> str:
        return f"score:{song_id}"

    def load(self, song_id: str) -> list[HighScoreEntry]:
        try:
            raw = self._storage.get(self.key_for(song_id))
        except StorageError as exc:
            logger.warning("Could not read scores for %s: %s", song_id, exc)
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            entries = [
                HighScoreEntry(score=int(item["score"]), achieved_at=int(item["achievedAt"]))
                for item in data
            ]
        except (ValueError, TypeError, KeyError, OverflowError) as exc:
            logger.warning("Ignoring corrupt scores for %s: %s", song_id, exc)
            return []
        return entries

    def record(self, song_id: str, score: int) -> list[HighScoreEntry]:
        entries = self.load(song_id)
        entries.append(HighScoreEntry(score=int(score), achieved_at=self._now()))
        # sort() is stable, so equal scores keep insertion order
        entries.sort(key=lambda e: e.score, reverse=True)
        entries = entries[: self._limit]

        payload = json.dumps([{"score": e.score, "achievedAt": e.achieved_at} for e in entries])
        try:
            self._storage.set(self.key_for(song_id), payload)
        except StorageError as exc:
            logger.warning("Could not save scores for %s: %s", song_id, exc)
        return entries

    def qualifies(self, song_id: str, score: int) -> bool:
        entries = self.load(song_id)
        return len(entries) < self._limit or score > entries[-1].score

    def best(self, song_id: str) -> int | None:
        entries = self.load(song_id)
        return entries[0].score if entries else None
