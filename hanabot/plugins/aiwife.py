"""Random generated waifu picture."""

from __future__ import annotations

import random

BED = "https://www.thiswaifudoesnotexist.net/example-{}.jpg"
COUNT = 100000


def waifu_url(rng: random.Random | None = None) -> str:
    """Return the address of a random picture numbered 1 to 100000."""
    rng = rng or random.Random()
    return BED.format(rng.randrange(COUNT) + 1)