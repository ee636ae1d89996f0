"""Stored short essays and a plagiarism check report."""

from __future__ import annotations

import hashlib
import math
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from ..engine import Segment

HENTAI_ID = -3802576048116006195
CHECK_URL = "https://asoulcnki.asia/v1/api/check"
CHECK_WORD = "查重"
NO_MATCH = "枝网没搜到，查重率为0%，鉴定为原创"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_CONTENT_LIMIT = 102


def text_id(text: str) -> int:
    """First eight bytes of the MD5 of ``text``, read as a signed little-endian integer."""
    digest = hashlib.md5(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little", signed=True)


class TextStore:
    """A table of essays keyed by the id of their text."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS text (id INTEGER PRIMARY KEY, data TEXT NOT NULL)"
            )

    def __enter__(self) -> "TextStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add(self, text: str) -> int:
        """Store an essay and return its id."""
        tid = text_id(text)
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO text (id, data) VALUES (?, ?)", (tid, text)
            )
        return tid

    def count(self) -> int:
        with self._lock:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM text").fetchone()
        return int(n)

    def random(self) -> str:
        """A random essay; LookupError if there are none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT data FROM text ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no essays stored")
        return row[0]

    def hentai(self) -> str:
        """The one special essay; LookupError if it is missing."""
        with self._lock:
            row = self._conn.execute(
                "SELECT data FROM text WHERE id = ?", (HENTAI_ID,)
            ).fetchone()
        if row is None:
            raise LookupError("special essay not found")
        return row[0]


def is_check_request(segments: Sequence[Segment]) -> bool:
    """A reply whose text, without spaces and line breaks, is the check word."""
    if not segments or segments[0].type != "reply":
        return False
    for seg in segments:
        if seg.type != "text":
            continue
        text = seg.data.get("text", "")
        for ch in (" ", "\r", "\n"):
            text = text.replace(ch, "")
        if text == CHECK_WORD:
            return True
    return False


def build_request_body(text: str) -> bytes:
    """The JSON body sent to the check service."""
    return ('{\n"text":"' + text + '"\n}').encode("utf-8")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report(result: Any, now: datetime) -> str:
    """Text answering a check result from the service."""
    if not isinstance(result, dict):
        result = {}
    code = _to_int(result.get("code"))
    if code != 0:
        return f"api返回错误:{code}"
    data = result.get("data")
    related = data.get("related") if isinstance(data, dict) else None
    if not related:
        return NO_MATCH
    first = related[0] if isinstance(related[0], dict) else {}
    reply = first.get("reply") if isinstance(first.get("reply"), dict) else {}
    try:
        rate = float(first.get("rate") or 0)
    except (TypeError, ValueError):
        rate = 0.0
    content = _to_str(reply.get("content"))
    raw = content.encode("utf-8")
    if len(raw) > _CONTENT_LIMIT:
        content = raw[:_CONTENT_LIMIT].decode("utf-8", errors="ignore") + "....."
    ctime = datetime.fromtimestamp(_to_int(reply.get("ctime")))
    return (
        "枝网文本复制检测报告(简洁)\n"
        f"查重时间: {now.strftime(_TIME_FORMAT)}\n"
        f"总文字复制比: {int(math.floor(rate * 100))}%\n"
        f"相似小作文：\n{content}\n"
        f"获赞数：{_to_str(reply.get('like_num'))}\n"
        f"{_to_str(first.get('reply_url'))}\n"
        f"作者: {_to_str(reply.get('m_name'))}\n"
        f"发表时间: {ctime.strftime(_TIME_FORMAT)}\n"
        "查重结果仅作参考，请注意辨别是否为原创\n"
        "数据来源: https://asoulcnki.asia/"
    )