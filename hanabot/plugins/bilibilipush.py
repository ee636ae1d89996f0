"""Subscriptions of sessions to bilibili ups for dynamic and live pushes."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Push:
    """One session's subscription to one up."""

    id: int
    bilibili_uid: int
    group_id: int
    live_disable: int = 0
    dynamic_disable: int = 0


class PushStore:
    """Subscriptions and up names kept in SQLite."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_push ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, bilibili_uid INTEGER, group_id INTEGER, "
                "live_disable INTEGER DEFAULT 0, dynamic_disable INTEGER DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_buid_gid ON bilibili_push (bilibili_uid, group_id)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_up (bilibili_uid INTEGER PRIMARY KEY, name TEXT)"
            )

    def __enter__(self) -> "PushStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def upsert(
        self,
        buid: int,
        gid: int,
        live_disable: int | None = None,
        dynamic_disable: int | None = None,
    ) -> None:
        """Create or update a subscription; flags left as None keep their value (0 when new)."""
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT id FROM bilibili_push WHERE bilibili_uid = ? AND group_id = ?",
                (buid, gid),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO bilibili_push (bilibili_uid, group_id, live_disable, dynamic_disable) "
                    "VALUES (?, ?, ?, ?)",
                    (buid, gid, live_disable or 0, dynamic_disable or 0),
                )
                return
            changes = {
                k: v
                for k, v in (("live_disable", live_disable), ("dynamic_disable", dynamic_disable))
                if v is not None
            }
            if changes:
                sets = ", ".join(f"{k} = ?" for k in changes)
                self._conn.execute(
                    f"UPDATE bilibili_push SET {sets} WHERE bilibili_uid = ? AND group_id = ?",
                    (*changes.values(), buid, gid),
                )

    def _uids(self, column: str) -> list[int]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT bilibili_uid FROM bilibili_push WHERE {column} = 0 ORDER BY id"
            ).fetchall()
        return list(dict.fromkeys(int(r[0]) for r in rows))

    def live_uids(self) -> list[int]:
        """Distinct ups with at least one live subscription."""
        return self._uids("live_disable")

    def dynamic_uids(self) -> list[int]:
        """Distinct ups with at least one dynamic subscription."""
        return self._uids("dynamic_disable")

    def _groups(self, buid: int, column: str) -> list[int]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT group_id FROM bilibili_push WHERE bilibili_uid = ? AND {column} = 0 "
                "ORDER BY id",
                (buid,),
            ).fetchall()
        return [int(r[0]) for r in rows]

    def groups_for_live(self, buid: int) -> list[int]:
        return self._groups(buid, "live_disable")

    def groups_for_dynamic(self, buid: int) -> list[int]:
        return self._groups(buid, "dynamic_disable")

    def pushes_for_group(self, gid: int) -> list[Push]:
        """Subscriptions of a session that still push something."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, bilibili_uid, group_id, live_disable, dynamic_disable "
                "FROM bilibili_push WHERE group_id = ? AND (live_disable = 0 OR dynamic_disable = 0) "
                "ORDER BY id",
                (gid,),
            ).fetchall()
        return [Push(*row) for row in rows]

    def insert_up(self, buid: int, name: str) -> None:
        """Remember an up's name; an existing entry is kept."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO bilibili_up (bilibili_uid, name) VALUES (?, ?)",
                (buid, name),
            )

    def up_names(self) -> dict[int, str]:
        with self._lock:
            rows = self._conn.execute("SELECT bilibili_uid, name FROM bilibili_up").fetchall()
        return {int(b): n for b, n in rows}