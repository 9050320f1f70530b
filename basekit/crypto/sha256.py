"""
SHA-256 Hash Engine

Streaming SHA-256 as described in FIPS PUB 180-3.

Components:
- Message schedule: 16 big-endian words expanded to 64 with s0/s1
- Compression: 64 rounds over an 8-word state using S0, S1, Ch, Maj
  and the fixed round-constant table K
- Output: the 8-word state serialized big-endian (32 bytes)
"""
from __future__ import annotations

import struct

from basekit.crypto.engine import MASK_32, BlockHashEngine, BytesLike, register_engine, rotr32

# Initial hash values: first 32 bits of the fractional parts of the
# square roots of the first 8 primes
_H0 = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

# Round constants: first 32 bits of the fractional parts of the
# cube roots of the first 64 primes
_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_WORDS = struct.Struct(">16I")


def _ch(x: int, y: int, z: int) -> int:
    """Choice: bits of y where x is set, bits of z elsewhere."""
    return (x & (y ^ z)) ^ z


def _maj(x: int, y: int, z: int) -> int:
    """Majority vote of the three bits."""
    return (x & (y | z)) | (y & z)


def _big_sigma0(x: int) -> int:
    return rotr32(x, 2) ^ rotr32(x, 13) ^ rotr32(x, 22)


def _big_sigma1(x: int) -> int:
    return rotr32(x, 6) ^ rotr32(x, 11) ^ rotr32(x, 25)


def _sigma0(x: int) -> int:
    return rotr32(x, 7) ^ rotr32(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    return rotr32(x, 17) ^ rotr32(x, 19) ^ (x >> 10)


@register_engine
class SHA256(BlockHashEngine):
    """SHA-256 engine: 32-byte digest, 64-byte block."""

    NAME = "sha256"
    DIGEST_SIZE = 32
    BLOCK_SIZE = 64

    def _initial_state(self) -> tuple[int, ...]:
        return _H0

    def _compress(self, block: bytes | bytearray | memoryview) -> None:
        # 1. Prepare message schedule W
        w = list(_WORDS.unpack_from(block))
        for i in range(16, 64):
            w.append(
                (_sigma1(w[i - 2]) + w[i - 7] + _sigma0(w[i - 15]) + w[i - 16]) & MASK_32
            )

        # 2. Initialize working variables
        s = list(self._state)

        # 3. Mix. Round i works on the state rotated right by i, so the
        # variable a of round i lives at s[(64 - i) % 8], b at s[(65 - i) % 8]...
        for i in range(64):
            a = s[(64 - i) % 8]
            b = s[(65 - i) % 8]
            c = s[(66 - i) % 8]
            e = s[(68 - i) % 8]
            f = s[(69 - i) % 8]
            g = s[(70 - i) % 8]
            h = s[(71 - i) % 8]
            t0 = (h + _big_sigma1(e) + _ch(e, f, g) + w[i] + _K[i]) & MASK_32
            t1 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
            s[(67 - i) % 8] = (s[(67 - i) % 8] + t0) & MASK_32
            s[(71 - i) % 8] = (t0 + t1) & MASK_32

        # 4. Mix local working variables into the chaining state
        state = self._state
        for i in range(8):
            state[i] = (state[i] + s[i]) & MASK_32

        # Clean the working arrays
        w[:] = [0] * 64
        s[:] = [0] * 8
        t0 = t1 = 0


def sha256_hash_bytes(data: BytesLike) -> bytes:
    """Compute the 32-byte SHA-256 digest of ``data`` in one call."""
    hasher = SHA256()
    hasher.update(data)
    hasher.final()
    return hasher.digest()


def sha256_hex_string(text: str | BytesLike) -> str:
    """SHA-256 of ``text`` (UTF-8 encoded when a str) as lowercase hex."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return sha256_hash_bytes(text).hex()


__all__ = [
    "SHA256",
    "sha256_hash_bytes",
    "sha256_hex_string",
]
