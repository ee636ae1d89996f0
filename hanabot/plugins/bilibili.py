"""Bilibili user lookups: response parsing and the local vup database."""

from __future__ import annotations

import json
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

SEARCH_URL = "http://api.bilibili.com/x/web-interface/search/type?search_type=bili_user&keyword="
FANS_URL = "https://api.vtbs.moe/v1/detail/"
FOLLOWINGS_URL = "https://api.bilibili.com/x/relation/same/followings?vmid="
CARD_URL = "https://account.bilibili.com/api/member/getCardByMid?mid="
MEDALWALL_URL = "https://api.live.bilibili.com/xlive/web-ucenter/user/MedalWall?target_id="
VTB_URLS = (
    "https://api.vtbs.moe/v1/short",
    "https://api.tokyo.vtbs.moe/v1/short",
    "https://vtbs.musedash.moe/v1/short",
)
COOKIE_KEY = "bilbili_cookie"
NOT_FOUND = "查无此人"
ERR_NEED_COOKIE = (
    "该api需要设置b站cookie，请发送命令设置cookie，例如\"设置b站cookie SESSDATA=placeholder\""
)
NEED_COOKIE_CODE = -101


@dataclass
class SearchResult:
    """One user found by a name search."""

    mid: int
    uname: str
    gender: int
    usign: str
    level: int


@dataclass
class Medal:
    """A fan medal worn by a user for an up."""

    mid: int
    uname: str
    medal_name: str
    level: int
    medal_color_start: int
    medal_color_end: int
    medal_color_border: int


def _load(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray, str)):
        return json.loads(data)
    return data


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _check_code(doc: Any) -> None:
    code = _int(doc.get("code")) if isinstance(doc, dict) else 0
    if code == NEED_COOKIE_CODE:
        raise PermissionError(ERR_NEED_COOKIE)
    if code != 0:
        raise RuntimeError(str(doc.get("message", "")))


def parse_search(data: Any) -> list[SearchResult]:
    """Users in a search response; LookupError when nobody was found."""
    doc = _load(data)
    body = doc.get("data") if isinstance(doc, dict) else None
    if not isinstance(body, dict) or _int(body.get("numResults")) == 0:
        raise LookupError(NOT_FOUND)
    return [
        SearchResult(
            mid=_int(item.get("mid")),
            uname=str(item.get("uname", "")),
            gender=_int(item.get("gender")),
            usign=str(item.get("usign", "")),
            level=_int(item.get("level")),
        )
        for item in body.get("result") or []
        if isinstance(item, dict)
    ]


def parse_followings(data: Any) -> str:
    """JSON array of the names of common followings."""
    doc = _load(data)
    _check_code(doc)
    body = doc.get("data") if isinstance(doc, dict) else None
    items = body.get("list") if isinstance(body, dict) else None
    names = [item.get("uname") for item in items or [] if isinstance(item, dict)]
    return json.dumps(names, ensure_ascii=False, separators=(",", ":"))


def parse_medals(data: Any) -> list[Medal]:
    """Medals in a medal-wall response."""
    doc = _load(data)
    _check_code(doc)
    body = doc.get("data") if isinstance(doc, dict) else None
    medals = []
    for item in (body.get("list") if isinstance(body, dict) else None) or []:
        if not isinstance(item, dict):
            continue
        info = item.get("medal_info") if isinstance(item.get("medal_info"), dict) else {}
        medals.append(
            Medal(
                mid=_int(info.get("target_id")),
                uname=str(item.get("target_name", "")),
                medal_name=str(info.get("medal_name", "")),
                level=_int(info.get("level")),
                medal_color_start=_int(info.get("medal_color_start")),
                medal_color_end=_int(info.get("medal_color_end")),
                medal_color_border=_int(info.get("medal_color_border")),
            )
        )
    return medals


def sort_medals(medals: Iterable[Medal]) -> list[Medal]:
    """Medals from the highest level to the lowest."""
    return sorted(medals, key=lambda m: -m.level)


class VupStore:
    """Known vups and a small key-value configuration table."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS vup ("
                "mid INTEGER PRIMARY KEY, uname TEXT, roomid INTEGER)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS config (key TEXT PRIMARY KEY, value TEXT)"
            )

    def __enter__(self) -> "VupStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def insert_vup(self, mid: int, uname: str, roomid: int) -> None:
        """Add a vup unless one with the same mid is already known."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO vup (mid, uname, roomid) VALUES (?, ?, ?)",
                (mid, uname, roomid),
            )

    def filter_vups(self, ids: Iterable[int]) -> list[tuple[int, str, int]]:
        """The known vups among ``ids`` as (mid, uname, roomid), ordered by mid."""
        wanted = list(dict.fromkeys(int(i) for i in ids))
        if not wanted:
            return []
        marks = ",".join("?" * len(wanted))
        with self._lock:
            rows = self._conn.execute(
                f"SELECT mid, uname, roomid FROM vup WHERE mid IN ({marks}) ORDER BY mid",
                wanted,
            ).fetchall()
        return [(int(m), u, int(r)) for m, u, r in rows]

    def set_cookie(self, cookie: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO config (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (COOKIE_KEY, cookie),
            )

    def get_cookie(self) -> str:
        """The stored cookie, or an empty string."""
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM config WHERE key = ?", (COOKIE_KEY,)
            ).fetchone()
        return row[0] if row else ""