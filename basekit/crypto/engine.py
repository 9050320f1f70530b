"""
Hash Engine Contract
Streaming hash engine abstraction shared by SHA-1, SHA-256 and MD5.

This module provides:
- HashEngine: the init/update/final/digest contract every engine honours
- BlockHashEngine: 64-byte block buffering and big-endian length padding
  for the Merkle-Damgard engines implemented in pure Python
- A name -> engine registry used by the hashing and HMAC helpers

Engine lifecycle:
    engine = SHA256()          # constructor calls init()
    engine.update(b"part one")
    engine.update(b"part two") # any number of updates
    engine.final()             # pad + last transform(s)
    engine.digest()            # fixed-size bytes

Calling update()/final() after final(), or digest() before it, raises
EngineStateException. Call init() to reuse an engine.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, TypeVar, Union

from basekit.schemas.errors import EngineStateException, UnsupportedAlgorithmException

logger = logging.getLogger(__name__)

# Mask for 32-bit word arithmetic
MASK_32 = 0xFFFFFFFF

# Message bit lengths are encoded modulo 2^64
MASK_64 = 0xFFFFFFFFFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview]


def as_byte_view(data: BytesLike) -> memoryview:
    """
    Return a flat unsigned-byte view over ``data`` without copying.

    Raises:
        TypeError: If ``data`` is a ``str`` or does not support the buffer protocol
    """
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def rotl32(value: int, amount: int) -> int:
    """Rotate a 32-bit word left."""
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def rotr32(value: int, amount: int) -> int:
    """Rotate a 32-bit word right."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


class HashEngine(ABC):
    """
    Incremental hash engine contract.

    Subclasses define NAME, DIGEST_SIZE and BLOCK_SIZE and implement
    ``_reset``, ``_absorb`` and ``_finish``. The public methods here enforce
    the lifecycle so every engine (and HMAC over it) fails the same way.
    """

    NAME: ClassVar[str]
    DIGEST_SIZE: ClassVar[int]
    BLOCK_SIZE: ClassVar[int]

    def __init__(self) -> None:
        self._digest: bytes | None = None
        self.init()

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def digest_size(self) -> int:
        return self.DIGEST_SIZE

    @property
    def block_size(self) -> int:
        return self.BLOCK_SIZE

    def init(self) -> None:
        """Reset to the initial chaining values with an empty pending buffer."""
        self._digest = None
        self._reset()

    def update(self, data: BytesLike) -> None:
        """Append ``data`` to the message being hashed."""
        if self._digest is not None:
            raise EngineStateException(
                f"{self.NAME}: update() called after final(); call init() first",
                engine=self.NAME,
            )
        view = as_byte_view(data)
        if len(view):
            self._absorb(view)

    def final(self) -> None:
        """Pad the message, run the remaining transform(s) and latch the digest."""
        if self._digest is not None:
            raise EngineStateException(
                f"{self.NAME}: final() called twice; call init() first",
                engine=self.NAME,
            )
        self._digest = self._finish()

    def digest(self) -> bytes:
        """Return the DIGEST_SIZE-byte digest computed by final()."""
        if self._digest is None:
            raise EngineStateException(
                f"{self.NAME}: digest() is only available after final()",
                engine=self.NAME,
            )
        return self._digest

    def hex_digest(self) -> str:
        """Return the digest as lowercase hexadecimal."""
        return self.digest().hex()

    @abstractmethod
    def _reset(self) -> None:
        """Restore the algorithm's initial state."""

    @abstractmethod
    def _absorb(self, view: memoryview) -> None:
        """Consume a non-empty byte view."""

    @abstractmethod
    def _finish(self) -> bytes:
        """Finalize the state and return the digest bytes."""

    def __repr__(self) -> str:
        state = "finalized" if self._digest is not None else "open"
        return f"{self.__class__.__name__}({state})"


class BlockHashEngine(HashEngine):
    """
    Shared buffering and finalization for 64-byte-block big-endian engines.

    Keeps a pending block buffer, the number of bytes buffered and the
    total message length. Every complete block, including blocks assembled
    across several update() calls, is handed to ``_compress``.

    Padding (FIPS 180-3 section 5.1.1): a single 0x80 byte, zero bytes up
    to 56 mod 64, then the message length in bits as a 64-bit big-endian
    integer.
    """

    BLOCK_SIZE: ClassVar[int] = 64

    def _reset(self) -> None:
        self._state: list[int] = list(self._initial_state())
        self._buffer = bytearray(self.BLOCK_SIZE)
        self._buffered = 0
        self._length = 0

    def _absorb(self, view: memoryview) -> None:
        block_size = self.BLOCK_SIZE
        total = len(view)
        self._length += total
        offset = 0

        # Top up a partially filled block first
        if self._buffered:
            take = min(block_size - self._buffered, total)
            self._buffer[self._buffered:self._buffered + take] = view[:take]
            self._buffered += take
            offset = take
            if self._buffered < block_size:
                return
            self._compress(self._buffer)
            self._buffered = 0

        # Whole blocks straight from the caller's data
        while total - offset >= block_size:
            self._compress(view[offset:offset + block_size])
            offset += block_size

        rest = total - offset
        if rest:
            self._buffer[:rest] = view[offset:]
            self._buffered = rest

    def _finish(self) -> bytes:
        bit_length = (self._length * 8) & MASK_64
        zeros = (55 - self._length) % self.BLOCK_SIZE
        trailer = b"\x80" + bytes(zeros) + bit_length.to_bytes(8, "big")
        self._absorb(memoryview(trailer))

        digest = b"".join(word.to_bytes(4, "big") for word in self._state)

        # Drop message residue and chaining state
        self._buffer[:] = bytes(self.BLOCK_SIZE)
        self._state = [0] * len(self._state)
        return digest[:self.DIGEST_SIZE]

    @abstractmethod
    def _initial_state(self) -> tuple[int, ...]:
        """Initial chaining values (FIPS 180-3 section 5.3)."""

    @abstractmethod
    def _compress(self, block: bytes | bytearray | memoryview) -> None:
        """Run the block transform over exactly BLOCK_SIZE bytes."""


# =============================================================================
# Engine Registry
# =============================================================================

EngineT = TypeVar("EngineT", bound=HashEngine)

_ENGINES: dict[str, type[HashEngine]] = {}


def _normalize_name(name: str) -> str:
    return name.lower().replace("-", "").replace("_", "")


def register_engine(engine_cls: type[EngineT]) -> type[EngineT]:
    """
    Register an engine class under its NAME (class decorator).

    Raises:
        TypeError: If the class does not declare the contract constants
    """
    for attr in ("NAME", "DIGEST_SIZE", "BLOCK_SIZE"):
        if not hasattr(engine_cls, attr):
            raise TypeError(f"{engine_cls.__name__} must define {attr}")
    _ENGINES[_normalize_name(engine_cls.NAME)] = engine_cls
    logger.debug(f"Registered hash engine {engine_cls.NAME}")
    return engine_cls


def get_engine_class(algorithm: str | type[HashEngine]) -> type[HashEngine]:
    """
    Resolve an algorithm name (or engine class) to an engine class.

    Names are case-insensitive and ignore '-' and '_', so "SHA-256",
    "sha_256" and "sha256" are the same engine.

    Raises:
        UnsupportedAlgorithmException: If no engine is registered under the name
    """
    if isinstance(algorithm, type) and issubclass(algorithm, HashEngine):
        return algorithm
    if not isinstance(algorithm, str):
        raise UnsupportedAlgorithmException(
            f"Algorithm must be a name or HashEngine subclass, got {algorithm!r}"
        )
    engine_cls = _ENGINES.get(_normalize_name(algorithm))
    if engine_cls is None:
        raise UnsupportedAlgorithmException(
            f"Unsupported hash algorithm: {algorithm}",
            algorithm=algorithm,
            details={"available": available_engines()},
        )
    return engine_cls


def new_engine(algorithm: str | type[HashEngine]) -> HashEngine:
    """Create a freshly initialized engine for ``algorithm``."""
    return get_engine_class(algorithm)()


def available_engines() -> list[str]:
    """Names of all registered engines, sorted."""
    return sorted(engine_cls.NAME for engine_cls in _ENGINES.values())


__all__ = [
    "MASK_32",
    "MASK_64",
    "BytesLike",
    "as_byte_view",
    "rotl32",
    "rotr32",
    "HashEngine",
    "BlockHashEngine",
    "register_engine",
    "get_engine_class",
    "new_engine",
    "available_engines",
]
