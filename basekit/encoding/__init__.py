"""
Binary-to-text encodings.
"""
from .base64_codec import (
    BASE64_ALPHABET,
    base64_encode,
    base64_decode,
    base64_decode_strict,
)

__all__ = [
    "BASE64_ALPHABET",
    "base64_encode",
    "base64_decode",
    "base64_decode_strict",
]
