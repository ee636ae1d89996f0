"""Turn text into "abstract speech" by swapping words for emoji of the same sound."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path


class PinyinStore:
    """Pronunciations of characters and emoji for pronunciations."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS pinyin ("
                "word TEXT PRIMARY KEY, pronunciation TEXT NOT NULL)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS emoji ("
                "pronunciation TEXT PRIMARY KEY, emoji TEXT NOT NULL)"
            )

    def __enter__(self) -> "PinyinStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add_pinyin(self, word: str, pronunciation: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO pinyin (word, pronunciation) VALUES (?, ?)",
                (word, pronunciation),
            )

    def add_emoji(self, pronunciation: str, emoji: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO emoji (pronunciation, emoji) VALUES (?, ?)",
                (pronunciation, emoji),
            )

    def pinyin(self, word: str) -> str:
        """Pronunciation of a word, or an empty string."""
        with self._lock:
            row = self._conn.execute(
                "SELECT pronunciation FROM pinyin WHERE word = ?", (word,)
            ).fetchone()
        return row[0] if row else ""

    def emoji(self, pronunciation: str) -> str:
        """Emoji for a pronunciation, or an empty string."""
        with self._lock:
            row = self._conn.execute(
                "SELECT emoji FROM emoji WHERE pronunciation = ?", (pronunciation,)
            ).fetchone()
        return row[0] if row else ""


def convert(store: PinyinStore, text: str) -> str:
    """Replace character pairs, then single characters, by matching emoji."""
    out: list[str] = []
    i = 0
    while i < len(text):
        if i < len(text) - 1:
            pair = store.pinyin(text[i]) + store.pinyin(text[i + 1])
            found = store.emoji(pair)
            if found:
                out.append(found)
                i += 2
                continue
        found = store.emoji(store.pinyin(text[i]))
        out.append(found or text[i])
        i += 1
    return "".join(out)