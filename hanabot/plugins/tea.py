"""TEA block cipher in CBC-like chaining with random leading padding."""

from __future__ import annotations

import os

_DELTA = 0x9E3779B9
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_ROUNDS = 16
_SUMS = tuple((_DELTA * (i + 1)) & _MASK32 for i in range(_ROUNDS))


class TEA:
    """A cipher keyed by four 32-bit words."""

    def __init__(self, key: tuple[int, int, int, int] | list[int]) -> None:
        words = tuple(int(k) & _MASK32 for k in key)
        if len(words) != 4:
            raise ValueError("TEA key must have four words")
        self.key = words

    def __repr__(self) -> str:
        return f"TEA(key={self.key!r})"

    def _encode(self, n: int) -> int:
        v0, v1 = n >> 32, n & _MASK32
        k0, k1, k2, k3 = self.key
        for s in _SUMS:
            v0 = (v0 + ((((v1 << 4) + k0) ^ (v1 + s) ^ ((v1 >> 5) + k1)) & _MASK32)) & _MASK32
            v1 = (v1 + ((((v0 << 4) + k2) ^ (v0 + s) ^ ((v0 >> 5) + k3)) & _MASK32)) & _MASK32
        return (v0 << 32) | v1

    def _decode(self, n: int) -> int:
        v0, v1 = n >> 32, n & _MASK32
        k0, k1, k2, k3 = self.key
        for s in reversed(_SUMS):
            v1 = (v1 - ((((v0 << 4) + k2) ^ (v0 + s) ^ ((v0 >> 5) + k3)) & _MASK32)) & _MASK32
            v0 = (v0 - ((((v1 << 4) + k0) ^ (v1 + s) ^ ((v1 >> 5) + k1)) & _MASK32)) & _MASK32
        return (v0 << 32) | v1

    def encrypt(self, data: bytes) -> bytes:
        """Pad and encrypt; the output length is a multiple of eight."""
        data = bytes(data)
        fill = 10 - (len(data) + 1) % 8
        buf = bytearray(fill + len(data) + 7)
        buf[:fill] = os.urandom(fill)
        buf[0] = (fill - 3) | 0xF8
        buf[fill:fill + len(data)] = data
        iv1 = iv2 = 0
        out = bytearray()
        for start in range(0, len(buf), 8):
            holder = int.from_bytes(buf[start:start + 8], "big") ^ iv1
            iv1 = self._encode(holder) ^ iv2
            iv2 = holder
            out += iv1.to_bytes(8, "big")
        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt and strip padding; raise ValueError on malformed input."""
        data = bytes(data)
        if len(data) < 16 or len(data) % 8:
            raise ValueError("ciphertext length must be a multiple of 8 and at least 16")
        iv2 = holder = 0
        out = bytearray()
        for start in range(0, len(data), 8):
            iv1 = int.from_bytes(data[start:start + 8], "big")
            iv2 = self._decode(iv2 ^ iv1)
            out += ((iv2 ^ holder) & _MASK64).to_bytes(8, "big")
            holder = iv1
        begin = (out[0] & 7) + 3
        end = len(data) - 7
        if begin > end:
            raise ValueError("corrupt padding")
        return bytes(out[begin:end])


def key_from_text(key: str) -> TEA:
    """Build a cipher from the first four characters of ``key``.

    Shorter keys are filled with the numbers of missing places, 3, 2, 1.
    """
    words = [ord(c) for c in key[:4]]
    while len(words) < 4:
        words.append(4 - len(words))
    return TEA(words)