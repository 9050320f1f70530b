"""
Test fixtures package for basekit tests.

Provides published known-answer vectors and small data factories:
- vectors.py: FIPS 180 / RFC 2202 / RFC 4231 / RFC 4648 test vectors

Usage:
    from fixtures import SHA256_VECTORS, make_message

    def test_something():
        data = make_message(130)
"""

from .vectors import (
    SHA1_VECTORS,
    SHA256_VECTORS,
    MD5_VECTORS,
    HMAC_VECTORS,
    BASE64_VECTORS,
    FOX,
    make_message,
)

__all__ = [
    "SHA1_VECTORS",
    "SHA256_VECTORS",
    "MD5_VECTORS",
    "HMAC_VECTORS",
    "BASE64_VECTORS",
    "FOX",
    "make_message",
]
