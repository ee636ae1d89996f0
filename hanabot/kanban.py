"""Start-up banner and notice board text."""

from __future__ import annotations

import sys
from typing import TextIO

INFO = (
    "* OneBot + ZeroBot",
    "* Version 1.4.0-beta5 - 2022-05-09 12:11:53 +0800 CST",
)

BANNER = "\n".join(INFO)


def banner_text(kanban: str = "") -> str:
    """Return the full banner with the given notice-board text."""
    return (
        "\n======================[ZeroBot-Plugin]======================"
        "\n" + BANNER + "\n"
        "----------------------[ZeroBot-公告栏]----------------------"
        "\n" + kanban + "\n"
        "============================================================\n\n"
    )


def print_banner(kanban: str = "", stream: TextIO | None = None) -> None:
    """Write the banner to ``stream`` (standard output by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(banner_text(kanban))
    out.flush()