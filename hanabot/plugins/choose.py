"""Pick one of several options separated by 还是."""

from __future__ import annotations

import random

SEPARATOR = "还是"


def choose(args: str, nickname: str, rng: random.Random | None = None) -> str:
    """List the options and announce a random pick."""
    rng = rng or random.Random()
    raw_options = args.split(SEPARATOR)
    options = [f"{count}, {option}" for count, option in enumerate(raw_options, start=1)]
    result = rng.choice(raw_options)
    return (
        "> " + nickname + "\n"
        "你的选项有:" + "\n" + "\n".join(options) + "\n"
        "你最终会选: " + result
    )