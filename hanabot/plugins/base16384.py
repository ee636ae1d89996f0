"""Base16384: seven bytes become four CJK characters, 14 bits each."""

from __future__ import annotations

_BASE = 0x4E00
_MARKER = 0x3D00
_SPAN = 0x4000
_MASK = 0x3FFF
_TAIL_CHARS = {1: 1, 2: 2, 3: 2, 4: 3, 5: 3, 6: 4}


def _block_chars(block: bytes, count: int) -> list[str]:
    value = int.from_bytes(block.ljust(7, b"\0"), "big")
    return [chr(_BASE + ((value >> (42 - 14 * i)) & _MASK)) for i in range(count)]


def _chars_block(codes: list[int]) -> bytes:
    value = 0
    for i, code in enumerate(codes):
        value |= (code - _BASE) << (42 - 14 * i)
    return value.to_bytes(7, "big")


def encode(data: bytes) -> str:
    """Encode bytes; a trailing marker character records a partial last block."""
    data = bytes(data)
    full = len(data) // 7 * 7
    chars: list[str] = []
    for start in range(0, full, 7):
        chars.extend(_block_chars(data[start:start + 7], 4))
    rest = len(data) - full
    if rest:
        chars.extend(_block_chars(data[full:], _TAIL_CHARS[rest]))
        chars.append(chr(_MARKER + rest))
    return "".join(chars)


def decode(text: str) -> bytes:
    """Decode text produced by :func:`encode`; raise ValueError if it is malformed."""
    codes = [ord(c) for c in text]
    offset = 0
    if codes and _MARKER < codes[-1] <= _MARKER + 6:
        offset = codes.pop() - _MARKER
    bad = next((c for c in codes if not _BASE <= c < _BASE + _SPAN), None)
    if bad is not None:
        raise ValueError(f"invalid base16384 character: {chr(bad)!r}")
    tail = _TAIL_CHARS.get(offset, 0)
    body = len(codes) - tail
    if body < 0 or body % 4:
        raise ValueError("invalid base16384 length")
    out = bytearray()
    for start in range(0, len(codes), 4):
        out += _chars_block(codes[start:start + 4])
    if offset:
        del out[body // 4 * 7 + offset:]
    return bytes(out)


def encode_string(s: str) -> str:
    """Encode the UTF-8 bytes of a string."""
    return encode(s.encode("utf-8"))


def decode_string(s: str) -> str:
    """Decode to bytes and read them as UTF-8."""
    return decode(s).decode("utf-8", errors="replace")