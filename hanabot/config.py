"""Bot configuration: defaults, loading and saving."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

DEFAULT_URL = "ws://127.0.0.1:6700"
DEFAULT_NICKNAME = "椛椛"
DEFAULT_PREFIX = "/"
EXTRA_NICKNAMES = ("ATRI", "atri", "亚托莉", "アトリ")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass
class WSClient:
    """Connection settings for one websocket client driver."""

    url: str = DEFAULT_URL
    access_token: str = ""


@dataclass
class ZeroConfig:
    """Core bot settings."""

    nickname: list[str] = field(default_factory=list)
    command_prefix: str = ""
    super_users: list[int] = field(default_factory=list)


@dataclass
class AppConfig:
    """Complete configuration: bot settings plus its websocket drivers."""

    zero: ZeroConfig = field(default_factory=ZeroConfig)
    ws: list[WSClient] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "zero": {
                "nickname": list(self.zero.nickname),
                "command_prefix": self.zero.command_prefix,
                "super_users": list(self.zero.super_users),
            },
            "ws": [{"Url": w.url, "AccessToken": w.access_token} for w in self.ws],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        zero = data.get("zero") or {}
        ws = data.get("ws") or []
        if not isinstance(zero, dict) or not isinstance(ws, list):
            raise ValueError("malformed configuration")
        try:
            zero_cfg = ZeroConfig(
                nickname=[str(n) for n in zero.get("nickname") or []],
                command_prefix=str(zero.get("command_prefix") or ""),
                super_users=[int(u) for u in zero.get("super_users") or []],
            )
            clients = [
                WSClient(url=str(w.get("Url", "")), access_token=str(w.get("AccessToken", "")))
                for w in ws
            ]
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed configuration: {exc}") from exc
        return cls(zero=zero_cfg, ws=clients)


def parse_superusers(args: Iterable[str]) -> list[int]:
    """Keep the arguments that are valid 64-bit decimal integers."""
    users = []
    for arg in args:
        if not _INT_RE.fullmatch(arg):
            continue
        value = int(arg)
        if _INT64_MIN <= value <= _INT64_MAX:
            users.append(value)
    return users


def default_config(
    url: str = DEFAULT_URL,
    token: str = "",
    nickname: str = DEFAULT_NICKNAME,
    prefix: str = DEFAULT_PREFIX,
    superusers: Iterable[int] = (),
) -> AppConfig:
    """Build the configuration used when no config file is given."""
    return AppConfig(
        zero=ZeroConfig(
            nickname=[nickname, *EXTRA_NICKNAMES],
            command_prefix=prefix,
            super_users=list(superusers),
        ),
        ws=[WSClient(url=url, access_token=token)],
    )


def load_config(path: str | Path) -> AppConfig:
    """Read a configuration from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return AppConfig.from_dict(json.load(f))


def save_config(config: AppConfig, path: str | Path) -> None:
    """Write a configuration to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, ensure_ascii=False)
        f.write("\n")