"""Short couple stories with the two names filled in."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

GONG_MARK = "<攻>"
SHOU_MARK = "<受>"


@dataclass
class CpStory:
    """A story template and the two names it was written with."""

    id: int
    gong: str
    shou: str
    story: str


class CpStoryStore:
    """A table of story templates."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS cp_story ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, gong TEXT NOT NULL, "
                "shou TEXT NOT NULL, story TEXT NOT NULL)"
            )

    def __enter__(self) -> "CpStoryStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add(self, gong: str, shou: str, story: str) -> CpStory:
        with self._lock, self._conn:
            cur = self._conn.execute(
                "INSERT INTO cp_story (gong, shou, story) VALUES (?, ?, ?)", (gong, shou, story)
            )
            return CpStory(int(cur.lastrowid), gong, shou, story)

    def count(self) -> int:
        with self._lock:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM cp_story").fetchone()
        return int(n)

    def random(self) -> CpStory | None:
        """A random story, or None if the table is empty."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id, gong, shou, story FROM cp_story ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        return CpStory(*row) if row else None


def fill_story(story: CpStory, gong: str, shou: str) -> str:
    """Put the names into the template.

    The markers take their own name; the story's original names are both
    replaced by ``gong``.
    """
    text = story.story.replace(GONG_MARK, gong)
    text = text.replace(SHOU_MARK, shou)
    text = text.replace(story.gong, gong)
    return text.replace(story.shou, gong)


def split_names(args: str) -> tuple[str, str]:
    """Split the two space-separated names of a request."""
    params = args.split(" ")
    if len(params) < 2:
        raise ValueError("请用空格分开两个人名")
    return params[0], params[1]