"""Drift bottles: throw a message into a channel, let someone else pick it up."""

from __future__ import annotations

import re
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CHANNEL = "global"

_POLY_ISO = 0xD800000000000000
_MASK64 = 0xFFFFFFFFFFFFFFFF
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_WORD = r"[0-9A-Za-z_]"
_SPACE = r"[\t\n\f\r ]"
_THROW_RE = re.compile(
    rf"(在群[0-9]+)?丢漂流瓶(到频道{_WORD}+)?{_SPACE}+(.*)"
)
_FETCH_RE = re.compile(rf"(从频道{_WORD}+)?捡漂流瓶")


def _make_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY_ISO if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


def _crc64_iso(data: bytes) -> int:
    crc = _MASK64
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


def bottle_id(qq: int, grp: int, name: str, msg: str) -> int:
    """Signed 64-bit CRC-64/ISO of ``qq_grp_name_msg``."""
    value = _crc64_iso(f"{qq}_{grp}_{name}_{msg}".encode("utf-8"))
    return value - 2**64 if value > _INT64_MAX else value


@dataclass
class Bottle:
    """A thrown message; ``grp`` limits where it can be picked up (0 means anywhere)."""

    qq: int
    grp: int
    name: str
    msg: str
    id: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            self.id = bottle_id(self.qq, self.grp, self.name, self.msg)


def _quote(channel: str) -> str:
    return '"' + channel.replace('"', '""') + '"'


class Sea:
    """Channels of bottles kept in one SQLite database."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()
        self.create_channel(DEFAULT_CHANNEL)

    def __enter__(self) -> "Sea":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def _require(self, channel: str) -> None:
        row = self._conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?", (channel,)
        ).fetchone()
        if row is None:
            raise LookupError(f"no such channel: {channel}")

    def create_channel(self, channel: str) -> None:
        if not channel:
            raise ValueError("频道名为空!")
        with self._lock, self._conn:
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote(channel)} ("
                "id INTEGER PRIMARY KEY, qq INTEGER NOT NULL, grp INTEGER NOT NULL, "
                "name TEXT NOT NULL, msg TEXT NOT NULL)"
            )

    def throw(self, bottle: Bottle, channel: str = DEFAULT_CHANNEL) -> None:
        if not bottle.msg:
            raise ValueError("消息为空!")
        with self._lock:
            self._require(channel)
            with self._conn:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO {_quote(channel)} (id, qq, grp, name, msg) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (bottle.id, bottle.qq, bottle.grp, bottle.name, bottle.msg),
                )

    def fetch(self, channel: str, grp: int) -> Bottle:
        """A random bottle open to everyone or to ``grp``; LookupError if none."""
        if grp == 0:
            raise ValueError("找不到对象!")
        with self._lock:
            self._require(channel)
            row = self._conn.execute(
                f"SELECT id, qq, grp, name, msg FROM {_quote(channel)} "
                "WHERE grp = 0 OR grp = ? ORDER BY RANDOM() LIMIT 1",
                (grp,),
            ).fetchone()
        if row is None:
            raise LookupError("the sea is empty")
        bid, qq, bgrp, name, msg = row
        return Bottle(qq=qq, grp=bgrp, name=name, msg=msg, id=bid)

    def destroy(self, bottle: Bottle, channel: str = DEFAULT_CHANNEL) -> None:
        with self._lock:
            self._require(channel)
            with self._conn:
                self._conn.execute(f"DELETE FROM {_quote(channel)} WHERE id = ?", (bottle.id,))

    def count(self, channel: str = DEFAULT_CHANNEL) -> int:
        with self._lock:
            self._require(channel)
            (n,) = self._conn.execute(f"SELECT COUNT(*) FROM {_quote(channel)}").fetchone()
        return int(n)


def parse_throw(text: str) -> tuple[int | None, str, str] | None:
    """Parse a throw request into (group or None, channel, message).

    Returns None when the text is not a throw request; raises ValueError
    for an invalid group number or an empty message.
    """
    match = _THROW_RE.fullmatch(text)
    if match is None:
        return None
    group_part, channel_part, msg = match.group(1), match.group(2), match.group(3)
    grp = None
    if group_part:
        grp = int(group_part[2:])
        if not _INT64_MIN <= grp <= _INT64_MAX:
            raise ValueError("群号非法!")
    channel = channel_part[3:] if channel_part else DEFAULT_CHANNEL
    if not msg:
        raise ValueError("消息为空!")
    return grp, channel, msg


def parse_fetch(text: str) -> str | None:
    """The channel named by a pick-up request, or None if it is not one."""
    match = _FETCH_RE.fullmatch(text)
    if match is None:
        return None
    return match.group(1)[3:] if match.group(1) else DEFAULT_CHANNEL