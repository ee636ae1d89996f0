"""Insults on request, stored by level."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

MIN_LEVEL = "min"
MAX_LEVEL = "max"

TRIGGER_WORDS = (
    "他妈", "公交车", "你妈", "操", "屎", "去死", "快死", "我日", "逼",
    "尼玛", "艾滋", "癌症", "有病", "烦你", "你爹", "屮", "cnm",
)


class CurseStore:
    """A table of lines, each tagged with a level."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS curse ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, text TEXT NOT NULL, level TEXT NOT NULL)"
            )

    def __enter__(self) -> "CurseStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add(self, text: str, level: str) -> int:
        """Store a line and return its id."""
        with self._lock, self._conn:
            cur = self._conn.execute(
                "INSERT INTO curse (text, level) VALUES (?, ?)", (text, level)
            )
            return int(cur.lastrowid)

    def count(self) -> int:
        with self._lock:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM curse").fetchone()
        return int(n)

    def random_by_level(self, level: str) -> str | None:
        """A random line of the given level, or None if there is none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT text FROM curse WHERE level = ? ORDER BY RANDOM() LIMIT 1", (level,)
            ).fetchone()
        return row[0] if row else None