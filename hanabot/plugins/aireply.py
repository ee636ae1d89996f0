"""Reply-mode and voice-mode settings, and numbers spoken in Chinese."""

from __future__ import annotations

import math
import re
import threading
from decimal import Decimal

from ..engine import ServiceData

REPLY_MODES = ("青云客", "小爱")
TTS_NAMES = ("拟声鸟阿梓", "拟声鸟药水哥", "百度女声", "百度男声", "百度度逍遥", "百度度丫丫")

_NUMBER_RE = re.compile(r"[-+]?[0-9]+(\.[0-9]+)?")
_DIGITS = "零一二三四五六七八九"
_UNITS = ("", "十", "百", "千")
_SECTIONS = ("", "万", "亿", "万亿")


class ReplyModes:
    """Per-session choice of the chat reply backend."""

    def __init__(self, data: ServiceData | None = None) -> None:
        self.data = data if data is not None else ServiceData()

    def set_mode(self, gid: int, name: str) -> None:
        try:
            index = REPLY_MODES.index(name)
        except ValueError:
            raise ValueError("no such mode") from None
        self.data.set(gid, index)

    def get_mode(self, gid: int) -> str:
        index = self.data.get(gid)
        if 0 <= index < len(REPLY_MODES):
            return REPLY_MODES[index]
        return REPLY_MODES[0]


class TTSModes:
    """Per-session choice of voice; the first name is the default."""

    def __init__(self, data: ServiceData | None = None) -> None:
        self.data = data if data is not None else ServiceData()
        self._names = list(TTS_NAMES)
        self._lock = threading.RLock()

    def names(self) -> list[str]:
        with self._lock:
            return list(self._names)

    def _index(self, name: str) -> int:
        try:
            return self._names.index(name)
        except ValueError:
            raise ValueError(f"no such voice: {name}") from None

    def set_mode(self, gid: int, name: str) -> None:
        with self._lock:
            index = self._index(name)
        self.data.set(gid, index)

    def get_mode(self, gid: int) -> str:
        with self._lock:
            index = self.data.get(gid)
            if 0 <= index < len(self._names):
                return self._names[index]
        return TTS_NAMES[0]

    def set_default(self, name: str) -> None:
        """Swap ``name`` into the first place."""
        with self._lock:
            index = self._index(name)
            self._names[0], self._names[index] = self._names[index], self._names[0]


def _section(n: int) -> str:
    out: list[str] = []
    pending_zero = False
    for pos in (3, 2, 1, 0):
        digit = n // 10**pos % 10
        if digit == 0:
            pending_zero = pending_zero or bool(out)
            continue
        if pending_zero:
            out.append("零")
            pending_zero = False
        out.append(_DIGITS[digit] + _UNITS[pos])
    return "".join(out)


def _int_to_chinese(n: int) -> str:
    if n == 0:
        return "零"
    sections: list[int] = []
    while n:
        n, rest = divmod(n, 10000)
        sections.append(rest)
    if len(sections) > len(_SECTIONS):
        raise ValueError("number too large")
    out = ""
    need_zero = False
    for unit, value in reversed(list(zip(_SECTIONS, sections))):
        if value == 0:
            need_zero = need_zero or bool(out)
            continue
        if out and (need_zero or value < 1000):
            out += "零"
        out += _section(value) + unit
        need_zero = False
    if out.startswith("一十"):
        out = out[1:]
    return out


def float_to_chinese(value: float) -> str:
    """Spell a number in Chinese numerals, e.g. 12 as 十二."""
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ValueError("cannot spell a non-finite number")
    sign = "负" if value < 0 else ""
    digits = format(Decimal(repr(abs(value))), "f")
    whole, _, frac = digits.partition(".")
    frac = frac.rstrip("0")
    text = _int_to_chinese(int(whole))
    if frac:
        text += "点" + "".join(_DIGITS[int(d)] for d in frac)
    return sign + text


def numbers_to_chinese(text: str) -> str:
    """Replace every decimal number in ``text`` by its Chinese spelling."""

    def repl(match: re.Match[str]) -> str:
        try:
            return float_to_chinese(float(match.group(0)))
        except ValueError:
            return match.group(0)

    return _NUMBER_RE.sub(repl, text)