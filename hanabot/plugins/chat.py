"""Small talk: name calls, poke replies and a group air conditioner."""

from __future__ import annotations

import random
import threading
import time
from typing import Callable

DEFAULT_TEMPERATURE = 26
POKE_PERIOD = 300.0
POKE_CAPACITY = 8


class RateLimiter:
    """A token bucket holding ``capacity`` tokens refilled over ``period`` seconds."""

    def __init__(
        self,
        period: float = POKE_PERIOD,
        capacity: int = POKE_CAPACITY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.period = period
        self.capacity = capacity
        self._clock = clock
        self._tokens = float(capacity)
        self._last = clock()
        self._lock = threading.Lock()

    def acquire(self, n: int = 1) -> bool:
        """Take ``n`` tokens if that many are available."""
        with self._lock:
            now = self._clock()
            rate = self.capacity / self.period
            self._tokens = min(self.capacity, self._tokens + (now - self._last) * rate)
            self._last = now
            if self._tokens >= n:
                self._tokens -= n
                return True
            return False


class AirConditioner:
    """Per-group switch and temperature."""

    def __init__(self) -> None:
        self._temps: dict[int, int] = {}
        self._on: dict[int, bool] = {}

    def turn_on(self, gid: int) -> str:
        self._on[gid] = True
        return "❄️哔~"

    def turn_off(self, gid: int) -> str:
        self._on[gid] = False
        self._temps.pop(gid, None)
        return "💤哔~"

    def set_temperature(self, gid: int, temp: int | str) -> str:
        """Change the temperature if the conditioner is on; return the status line."""
        self._temps.setdefault(gid, DEFAULT_TEMPERATURE)
        if self._on.get(gid, False):
            try:
                self._temps[gid] = int(temp)
            except ValueError:
                self._temps[gid] = 0
        return self.status(gid)

    def status(self, gid: int) -> str:
        temp = self._temps.setdefault(gid, DEFAULT_TEMPERATURE)
        head = "❄️风速中" if self._on.get(gid, False) else "💤"
        return f"{head}\n群温度 {temp}℃"


def nickname_reply(nickname: str, rng: random.Random | None = None) -> str:
    """Answer to being called by name."""
    rng = rng or random.Random()
    return rng.choice(
        [
            nickname + "在此，有何贵干~",
            "(っ●ω●)っ在~",
            "这里是" + nickname + "(っ●ω●)っ",
            nickname + "不在呢~",
        ]
    )


def poke_reply(limiter: RateLimiter, nickname: str) -> str | None:
    """Answer to a poke, or None when poked too often."""
    if limiter.acquire(3):
        return "请不要戳" + nickname + " >_<"
    if limiter.acquire(1):
        return "喂(#`O′) 戳" + nickname + "干嘛！"
    return None