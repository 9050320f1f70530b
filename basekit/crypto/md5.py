"""
MD5 Hash Engine

MD5 exposed through the same engine contract as SHA-1/SHA-256 so it can be
dropped into HMAC. The block transform itself is the platform's
(hashlib); this class owns the lifecycle and contract checks only.
"""
from __future__ import annotations

import hashlib

from basekit.crypto.engine import BytesLike, HashEngine, register_engine


@register_engine
class MD5(HashEngine):
    """MD5 engine: 16-byte digest, 64-byte block."""

    NAME = "md5"
    DIGEST_SIZE = 16
    BLOCK_SIZE = 64

    def _reset(self) -> None:
        self._hasher = hashlib.md5(usedforsecurity=False)

    def _absorb(self, view: memoryview) -> None:
        self._hasher.update(view)

    def _finish(self) -> bytes:
        digest = self._hasher.digest()
        self._hasher = None
        return digest


def md5_hex_string(text: str | BytesLike) -> str:
    """MD5 of ``text`` (UTF-8 encoded when a str) as lowercase hex."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    hasher = MD5()
    hasher.update(text)
    hasher.final()
    return hasher.hex_digest()


__all__ = [
    "MD5",
    "md5_hex_string",
]
