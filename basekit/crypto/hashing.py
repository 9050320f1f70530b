"""
Hashing Utilities
Algorithm-by-name hashing and digest rendering helpers.

This module provides:
- base16_encode: lowercase hex rendering of raw digests
- hash_bytes / hex_digest: one-shot hashing with a named or default engine
- constant_time_equal: digest comparison that does not short-circuit

The default algorithm comes from RuntimeConfig.hash.default_algorithm
(BASEKIT_DEFAULT_HASH), "sha256" unless configured otherwise.
"""
from __future__ import annotations

import secrets

from basekit.config.runtime import get_default_config
from basekit.crypto.engine import BytesLike, HashEngine, as_byte_view, new_engine


def base16_encode(data: BytesLike) -> str:
    """
    Render bytes as lowercase hexadecimal (no prefix).

    Example:
        >>> base16_encode(bytes.fromhex("DEADBEEF"))
        'deadbeef'
    """
    return bytes(as_byte_view(data)).hex()


def hash_bytes(data: BytesLike, algorithm: str | type[HashEngine] | None = None) -> bytes:
    """
    Hash ``data`` in one call.

    Args:
        data: Raw bytes to hash
        algorithm: Engine name or class; None uses the configured default

    Returns:
        The engine's raw digest

    Raises:
        UnsupportedAlgorithmException: If the algorithm is not registered
    """
    if algorithm is None:
        algorithm = get_default_config().hash.default_algorithm
    engine = new_engine(algorithm)
    engine.update(data)
    engine.final()
    return engine.digest()


def hex_digest(text: str | BytesLike, algorithm: str | type[HashEngine] | None = None) -> str:
    """Hash ``text`` (UTF-8 encoded when a str) and render it as lowercase hex."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return base16_encode(hash_bytes(text, algorithm))


def constant_time_equal(left: BytesLike, right: BytesLike) -> bool:
    """Compare two digests without leaking the position of the first difference."""
    return secrets.compare_digest(bytes(as_byte_view(left)), bytes(as_byte_view(right)))


__all__ = [
    "base16_encode",
    "hash_bytes",
    "hex_digest",
    "constant_time_equal",
]
