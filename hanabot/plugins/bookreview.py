"""Recorded book recommendations, searched by keyword or picked at random."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

KEYWORD_PATTERN = r"^书评([\u4E00-\u9FA5A-Za-z0-9]{1,25})$"


class BookReviewStore:
    """A table of book reviews."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bookreview ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, bookreview TEXT NOT NULL)"
            )

    def __enter__(self) -> "BookReviewStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add(self, review: str) -> int:
        """Store a review and return its id."""
        with self._lock, self._conn:
            cur = self._conn.execute(
                "INSERT INTO bookreview (bookreview) VALUES (?)", (review,)
            )
            return int(cur.lastrowid)

    def count(self) -> int:
        with self._lock:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM bookreview").fetchone()
        return int(n)

    def by_keyword(self, keyword: str) -> str | None:
        """The first review containing ``keyword``, or None."""
        with self._lock:
            row = self._conn.execute(
                "SELECT bookreview FROM bookreview WHERE instr(bookreview, ?) > 0 "
                "ORDER BY id LIMIT 1",
                (keyword,),
            ).fetchone()
        return row[0] if row else None

    def random(self) -> str | None:
        """A random review, or None if there are none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT bookreview FROM bookreview ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        return row[0] if row else None