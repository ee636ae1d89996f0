"""A search link for those who will not search themselves."""

from __future__ import annotations

from urllib.parse import quote_plus

BASE = "https://buhuibaidu.me/?s="


def search_link(text: str) -> str | None:
    """The link for ``text``, or None for empty text."""
    if not text:
        return None
    return BASE + quote_plus(text)