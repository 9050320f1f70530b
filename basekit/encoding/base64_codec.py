"""
Base64 Codec (RFC 4648 standard alphabet)

Encoding Rules:
1. Every 3 input bytes become 4 characters from A-Z a-z 0-9 + /
2. A final group of 1 byte becomes 2 characters + "=="
3. A final group of 2 bytes becomes 3 characters + "="
4. Output length is always ceil(n / 3) * 4

Decoding Rules:
1. Input length must be a multiple of 4
2. "=" may only appear as the last one or two characters
3. Any other character outside the alphabet is rejected
4. Failure produces no partial output

base64_decode() reports failure as None; base64_decode_strict() raises
MalformedInputException carrying the reason and offending position.
"""
from __future__ import annotations

import logging
from typing import Union

from basekit.schemas.errors import MalformedInputException

logger = logging.getLogger(__name__)

PAD = "="

BASE64_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789+/"
)

_DECODE_TABLE: dict[str, int] = {char: index for index, char in enumerate(BASE64_ALPHABET)}

TextLike = Union[str, bytes, bytearray, memoryview]


def base64_encode(data: str | bytes | bytearray | memoryview) -> str:
    """
    Encode bytes (or a UTF-8 encoded str) as base64 text.

    Example:
        >>> base64_encode(b"hello")
        'aGVsbG8='
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    raw = bytes(data)
    length = len(raw)
    out: list[str] = []

    i = 0
    while i < length:
        b0 = raw[i]
        out.append(BASE64_ALPHABET[(b0 >> 2) & 0x3F])

        c = (b0 << 4) & 0x3F
        i += 1
        if i < length:
            c |= (raw[i] >> 4) & 0x0F
        out.append(BASE64_ALPHABET[c])

        if i < length:
            c = (raw[i] << 2) & 0x3F
            i += 1
            if i < length:
                c |= (raw[i] >> 6) & 0x03
            out.append(BASE64_ALPHABET[c])
        else:
            out.append(PAD)

        if i < length:
            out.append(BASE64_ALPHABET[raw[i] & 0x3F])
            i += 1
        else:
            out.append(PAD)

    return "".join(out)


def _as_text(text: TextLike) -> str:
    if isinstance(text, str):
        return text
    # Bytes outside ASCII map to characters outside the alphabet and fail below
    return bytes(text).decode("latin-1")


def base64_decode_strict(text: TextLike) -> bytes:
    """
    Decode base64 text, raising on malformed input.

    Args:
        text: Base64 text as str or ASCII bytes

    Returns:
        The decoded bytes

    Raises:
        MalformedInputException: If the length is not a multiple of 4, a
            character is outside the alphabet, or "=" appears anywhere but
            the last one or two positions
    """
    s = _as_text(text)
    n = len(s)
    if n % 4 != 0:
        raise MalformedInputException(
            f"Base64 input length {n} is not a multiple of 4",
            reason="length",
        )

    padding = 0
    if n >= 1 and s[n - 1] == PAD:
        padding = 1
        if n >= 2 and s[n - 2] == PAD:
            padding = 2

    # Divide first; n is already a multiple of 4
    out_len = (n // 4) * 3 - padding
    out = bytearray(out_len)
    j = 0
    accum = 0
    for i, char in enumerate(s):
        value = _DECODE_TABLE.get(char)
        if value is None:
            if char != PAD:
                raise MalformedInputException(
                    f"Invalid base64 character {char!r} at position {i}",
                    reason="character",
                    position=i,
                )
            if i < n - padding:
                raise MalformedInputException(
                    f"Misplaced base64 padding at position {i}",
                    reason="padding",
                    position=i,
                )
            value = 0

        accum = (accum << 6) | value
        if (i + 1) % 4 == 0:
            out[j] = accum >> 16
            j += 1
            if j < out_len:
                out[j] = (accum >> 8) & 0xFF
                j += 1
            if j < out_len:
                out[j] = accum & 0xFF
                j += 1
            accum = 0

    return bytes(out)


def base64_decode(text: TextLike) -> bytes | None:
    """
    Decode base64 text; return None if it is malformed.

    Example:
        >>> base64_decode("aGVsbG8=")
        b'hello'
        >>> base64_decode("aGVsbG8") is None
        True
    """
    try:
        return base64_decode_strict(text)
    except MalformedInputException as e:
        logger.debug(f"Rejected base64 input: {e.message}")
        return None


__all__ = [
    "BASE64_ALPHABET",
    "PAD",
    "base64_encode",
    "base64_decode",
    "base64_decode_strict",
]
