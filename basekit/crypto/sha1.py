"""
SHA-1 Hash Engine

Streaming SHA-1 as described in FIPS PUB 180-3. Identifier names follow
the notation in the standard (A..E working variables, H chaining state,
W message schedule, f/K round function and constant).

Usage:
    sha = SHA1()
    for chunk in chunks:
        sha.update(chunk)
    sha.final()
    sha.digest()  # 20 bytes

To reuse an instance call sha.init().
"""
from __future__ import annotations

import struct

from basekit.crypto.engine import MASK_32, BlockHashEngine, BytesLike, register_engine, rotl32

_H0 = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

_WORDS = struct.Struct(">16I")


def _f(t: int, b: int, c: int, d: int) -> int:
    if t < 20:
        return (b & c) | (~b & d)
    elif t < 40:
        return b ^ c ^ d
    elif t < 60:
        return (b & c) | (b & d) | (c & d)
    else:
        return b ^ c ^ d


def _k(t: int) -> int:
    if t < 20:
        return 0x5A827999
    elif t < 40:
        return 0x6ED9EBA1
    elif t < 60:
        return 0x8F1BBCDC
    else:
        return 0xCA62C1D6


@register_engine
class SHA1(BlockHashEngine):
    """SHA-1 engine: 20-byte digest, 64-byte block."""

    NAME = "sha1"
    DIGEST_SIZE = 20
    BLOCK_SIZE = 64

    def _initial_state(self) -> tuple[int, ...]:
        return _H0

    def _compress(self, block: bytes | bytearray | memoryview) -> None:
        # a. sixteen big-endian words of the block
        w = list(_WORDS.unpack_from(block))

        # b. expand to the 80-word schedule
        for t in range(16, 80):
            w.append(rotl32(w[t - 3] ^ w[t - 8] ^ w[t - 14] ^ w[t - 16], 1))

        # c.
        h = self._state
        a, b, c, d, e = h

        # d.
        for t in range(80):
            temp = (rotl32(a, 5) + _f(t, b, c, d) + e + w[t] + _k(t)) & MASK_32
            e = d
            d = c
            c = rotl32(b, 30)
            b = a
            a = temp

        # e.
        h[0] = (h[0] + a) & MASK_32
        h[1] = (h[1] + b) & MASK_32
        h[2] = (h[2] + c) & MASK_32
        h[3] = (h[3] + d) & MASK_32
        h[4] = (h[4] + e) & MASK_32

        w[:] = [0] * 80
        a = b = c = d = e = temp = 0


def sha1_hash_bytes(data: BytesLike) -> bytes:
    """Compute the 20-byte SHA-1 digest of ``data`` in one call."""
    sha = SHA1()
    sha.update(data)
    sha.final()
    return sha.digest()


def sha1_hex_string(text: str | BytesLike) -> str:
    """SHA-1 of ``text`` (UTF-8 encoded when a str) as lowercase hex."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return sha1_hash_bytes(text).hex()


__all__ = [
    "SHA1",
    "sha1_hash_bytes",
    "sha1_hex_string",
]
