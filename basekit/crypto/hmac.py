"""
Keyed-Hash Message Authentication (HMAC, RFC 2104)

Generic HMAC over any HashEngine. Two engines of the same algorithm are
held: the inner one is primed with (K xor ipad) and receives the message,
the outer one is primed with (K xor opad) and receives the inner digest.

Key handling:
- len(key) > BLOCK_SIZE: the key is hashed once and the digest is used
- otherwise the key is used as-is (including the empty key)
- the effective key is XORed into the first bytes of the block-sized
  pads; remaining pad bytes are the literal 0x36 / 0x5c

Usage:
    mac = HMAC(SHA256, b"key")
    mac.update(b"The quick brown fox ")
    mac.update(b"jumps over the lazy dog")
    mac.final()
    mac.hex_string()
"""
from __future__ import annotations

import logging
import secrets
from typing import Generic

from basekit.config.runtime import get_default_config
from basekit.crypto.engine import BytesLike, EngineT, HashEngine, as_byte_view, get_engine_class
from basekit.schemas.errors import EngineStateException

logger = logging.getLogger(__name__)

IPAD = 0x36
OPAD = 0x5C


def _key_bytes(key: str | BytesLike) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(as_byte_view(key))


def _resolve_engine(algorithm: str | type[HashEngine] | None) -> type[HashEngine]:
    if algorithm is None:
        algorithm = get_default_config().hash.default_algorithm
    return get_engine_class(algorithm)


class HMAC(Generic[EngineT]):
    """
    HMAC parameterized by an engine class.

    The engine may also be given by name ("sha1", "SHA-256") or as None for
    the configured default algorithm; unknown names raise
    UnsupportedAlgorithmException.

    The instance owns both engines; the key is kept as an immutable copy so
    ``init()`` can re-prime without the caller passing it again.
    """

    def __init__(
        self,
        engine_cls: type[EngineT] | str | None,
        key: str | BytesLike = b"",
    ) -> None:
        engine_cls = _resolve_engine(engine_cls)
        self._engine_cls = engine_cls
        self._key = _key_bytes(key)
        self._inner: EngineT = engine_cls()
        self._outer: EngineT = engine_cls()
        self._finalized = False
        self._prime()

    @property
    def name(self) -> str:
        return f"hmac-{self._engine_cls.NAME}"

    @property
    def digest_size(self) -> int:
        return self._engine_cls.DIGEST_SIZE

    @property
    def block_size(self) -> int:
        return self._engine_cls.BLOCK_SIZE

    def init(self, key: str | BytesLike | None = None) -> None:
        """Reset for a new message, optionally switching to a new key."""
        if key is not None:
            self._key = _key_bytes(key)
        self._inner.init()
        self._outer.init()
        self._prime()

    def update(self, data: BytesLike) -> None:
        """Feed message bytes to the inner engine."""
        if self._finalized:
            raise EngineStateException(
                f"{self.name}: update() called after final(); call init() first",
                engine=self.name,
            )
        self._inner.update(data)

    def final(self) -> None:
        """Finish the inner hash and run it through the outer engine."""
        if self._finalized:
            raise EngineStateException(
                f"{self.name}: final() called twice; call init() first",
                engine=self.name,
            )
        self._inner.final()
        self._outer.update(self._inner.digest())
        self._outer.final()
        self._finalized = True

    def digest(self) -> bytes:
        """Return the MAC (DIGEST_SIZE bytes); valid only after final()."""
        if not self._finalized:
            raise EngineStateException(
                f"{self.name}: digest() is only available after final()",
                engine=self.name,
            )
        return self._outer.digest()

    def hex_string(self) -> str:
        """Return the MAC as lowercase hexadecimal."""
        return self.digest().hex()

    def equal_digest(self, expected: BytesLike) -> bool:
        """Constant-time comparison of the MAC with ``expected``."""
        return secrets.compare_digest(self.digest(), bytes(as_byte_view(expected)))

    def _prime(self) -> None:
        block_size = self._engine_cls.BLOCK_SIZE
        key = self._key

        if len(key) > block_size:
            logger.debug(
                f"{self.name}: key of {len(key)} bytes exceeds block size, hashing it first"
            )
            self._inner.update(key)
            self._inner.final()
            key = self._inner.digest()
            self._inner.init()

        key_ipad = bytearray([IPAD]) * block_size
        key_opad = bytearray([OPAD]) * block_size
        for i, byte in enumerate(key):
            key_ipad[i] ^= byte
            key_opad[i] ^= byte

        # compute inner, mix ipad and data
        self._inner.update(key_ipad)
        # compute outer, mix opad and inner
        self._outer.update(key_opad)
        self._finalized = False

        key_ipad[:] = bytes(block_size)
        key_opad[:] = bytes(block_size)

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "open"
        return f"HMAC({self._engine_cls.__name__}, {state})"


def sign_hmac(
    algorithm: str | type[HashEngine] | None,
    key: str | BytesLike,
    data: str | BytesLike,
) -> bytes:
    """
    One-shot HMAC of ``data`` under ``key``.

    Args:
        algorithm: Engine class, algorithm name, or None for the configured default
        key: Secret key (str is UTF-8 encoded)
        data: Message (str is UTF-8 encoded)

    Returns:
        The raw MAC bytes
    """
    mac = HMAC(algorithm, key)
    if isinstance(data, str):
        data = data.encode("utf-8")
    mac.update(data)
    mac.final()
    return mac.digest()


def sign_hmac_hex_string(
    algorithm: str | type[HashEngine] | None,
    key: str | BytesLike,
    text: str | BytesLike,
) -> str:
    """One-shot HMAC rendered as lowercase hexadecimal."""
    return sign_hmac(algorithm, key, text).hex()


__all__ = [
    "HMAC",
    "IPAD",
    "OPAD",
    "sign_hmac",
    "sign_hmac_hex_string",
]
