"""
Big-Endian Cursor
Bounds-checked reading and writing of network-order integers over a
caller-owned byte buffer.

This module provides:
- read_big_endian / write_big_endian: the byte <-> integer conversions
- double_to_bits / bits_to_double: exact IEEE-754 bit reinterpretation
- BigEndianReader: sequential reads (and non-advancing peeks)
- BigEndianWriter: sequential writes

Cursor Rules (Hard Contracts):
1. The cursor never owns the buffer; it holds a memoryview over it
2. position never moves past the end of the range
3. A read/write either completes and advances by exactly its size, or
   fails and leaves both the buffer and position untouched
4. Failure is reported as None (reads) or False (writes/skips); nothing
   is raised for running out of room

Convenience accessors (read_uint32() and friends) return 0 when the read
fails. A decoded zero and a failed read look identical through them, so
code that needs to tell the two apart must use the read_u32() family.
"""
from __future__ import annotations

import struct
from typing import Union

from basekit.schemas.errors import BoundsExceededException, ValueRangeException

BufferLike = Union[bytes, bytearray, memoryview]

_NATIVE_DOUBLE = struct.Struct("=d")
_NATIVE_U64 = struct.Struct("=Q")


# =============================================================================
# Conversions
# =============================================================================

def read_big_endian(buf: BufferLike, size: int, signed: bool = False, offset: int = 0) -> int:
    """
    Decode ``size`` bytes at ``offset`` as a big-endian integer.

    Bytes are folded most significant first by shift-and-OR; a signed
    result is the two's complement reading of the same bits. The caller
    guarantees ``offset + size <= len(buf)``.
    """
    if size == 1:
        value = buf[offset]
    else:
        value = buf[offset]
        for i in range(1, size):
            value = (value << 8) | buf[offset + i]
    if signed:
        sign_bit = 1 << (size * 8 - 1)
        if value & sign_bit:
            value -= sign_bit << 1
    return value


def write_big_endian(buf: bytearray | memoryview, value: int, size: int, offset: int = 0) -> None:
    """
    Encode ``value`` into ``size`` big-endian bytes at ``offset``.

    Negative values are written in two's complement. The caller guarantees
    the value fits and ``offset + size <= len(buf)``.
    """
    if size == 1:
        buf[offset] = value & 0xFF
        return
    for i in range(size):
        buf[offset + size - i - 1] = value & 0xFF
        value >>= 8


def double_to_bits(value: float) -> int:
    """Reinterpret an IEEE-754 double as its unsigned 64-bit pattern."""
    return _NATIVE_U64.unpack(_NATIVE_DOUBLE.pack(value))[0]


def bits_to_double(bits: int) -> float:
    """Reinterpret an unsigned 64-bit pattern as an IEEE-754 double."""
    return _NATIVE_DOUBLE.unpack(_NATIVE_U64.pack(bits))[0]


def _check_range(value: int, size: int, signed: bool) -> None:
    if not isinstance(value, int):
        raise TypeError(f"Expected int, got {type(value).__name__}")
    bits = size * 8
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        kind = "int" if signed else "uint"
        raise ValueRangeException(
            f"{value} does not fit in {kind}{bits}",
            value=value,
            size=size,
        )


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"Byte count must be non-negative, got {count}")


def _range(view: memoryview, offset: int, length: int | None) -> tuple[int, int]:
    """Validate an (offset, length) window over ``view``; return (start, end)."""
    total = len(view)
    if offset < 0 or offset > total:
        raise BoundsExceededException(
            f"Offset {offset} outside buffer of {total} bytes",
            requested=offset,
            available=total,
        )
    if length is None:
        return offset, total
    if length < 0 or offset + length > total:
        raise BoundsExceededException(
            f"Range of {length} bytes at offset {offset} exceeds buffer of {total} bytes",
            requested=length,
            available=total - offset,
        )
    return offset, offset + length


def _byte_view(buf: BufferLike) -> memoryview:
    if isinstance(buf, str):
        raise TypeError("Cursor buffers must be bytes-like, not str")
    view = memoryview(buf)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


# =============================================================================
# Reader
# =============================================================================

class BigEndianReader:
    """
    Reads network-order values while walking a read-only byte range.

    Every read advances the position; every peek does not. A read that
    would pass the end of the range returns None and consumes nothing.

    Example:
        >>> reader = BigEndianReader(b"\\x00\\x01\\xff")
        >>> reader.read_u16()
        1
        >>> reader.read_u16() is None
        True
        >>> reader.remaining()
        1
    """

    __slots__ = ("_buf", "_pos", "_end")

    def __init__(self, buf: BufferLike, offset: int = 0, length: int | None = None) -> None:
        self.reset(buf, offset, length)

    def reset(self, buf: BufferLike, offset: int = 0, length: int | None = None) -> None:
        """
        Point the reader at ``buf[offset:offset + length]``.

        Raises:
            BoundsExceededException: If the window lies outside ``buf``
        """
        view = _byte_view(buf)
        start, end = _range(view, offset, length)
        self._buf = view
        self._pos = start
        self._end = end

    @property
    def position(self) -> int:
        """Index of the next unread byte in the underlying buffer."""
        return self._pos

    def tell(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self._end - self._pos

    def skip(self, count: int) -> bool:
        """Advance by ``count`` bytes if that many remain."""
        _check_count(count)
        if count > self._end - self._pos:
            return False
        self._pos += count
        return True

    # -- raw spans -----------------------------------------------------------

    def read_bytes(self, count: int) -> bytes | None:
        """Copy out the next ``count`` bytes."""
        piece = self.read_piece(count)
        return None if piece is None else piece.tobytes()

    def read_piece(self, count: int) -> memoryview | None:
        """Return a view of the next ``count`` bytes that shares the buffer."""
        piece = self.peek_piece(count)
        if piece is not None:
            self._pos += count
        return piece

    def peek_bytes(self, count: int) -> bytes | None:
        piece = self.peek_piece(count)
        return None if piece is None else piece.tobytes()

    def peek_piece(self, count: int) -> memoryview | None:
        _check_count(count)
        if count > self._end - self._pos:
            return None
        return self._buf[self._pos:self._pos + count]

    # -- typed values --------------------------------------------------------

    def _peek(self, size: int, signed: bool) -> int | None:
        if size > self._end - self._pos:
            return None
        return read_big_endian(self._buf, size, signed, self._pos)

    def _read(self, size: int, signed: bool) -> int | None:
        value = self._peek(size, signed)
        if value is not None:
            self._pos += size
        return value

    def read_u8(self) -> int | None:
        return self._read(1, False)

    def read_u16(self) -> int | None:
        return self._read(2, False)

    def read_u32(self) -> int | None:
        return self._read(4, False)

    def read_u64(self) -> int | None:
        return self._read(8, False)

    def read_i8(self) -> int | None:
        return self._read(1, True)

    def read_i16(self) -> int | None:
        return self._read(2, True)

    def read_i32(self) -> int | None:
        return self._read(4, True)

    def read_i64(self) -> int | None:
        return self._read(8, True)

    def read_double(self) -> float | None:
        """Read 8 bytes as a big-endian bit pattern and reinterpret as a double."""
        bits = self._read(8, False)
        return None if bits is None else bits_to_double(bits)

    def peek_u8(self) -> int | None:
        return self._peek(1, False)

    def peek_u16(self) -> int | None:
        return self._peek(2, False)

    def peek_u32(self) -> int | None:
        return self._peek(4, False)

    def peek_u64(self) -> int | None:
        return self._peek(8, False)

    def peek_i8(self) -> int | None:
        return self._peek(1, True)

    def peek_i16(self) -> int | None:
        return self._peek(2, True)

    def peek_i32(self) -> int | None:
        return self._peek(4, True)

    def peek_i64(self) -> int | None:
        return self._peek(8, True)

    def peek_double(self) -> float | None:
        bits = self._peek(8, False)
        return None if bits is None else bits_to_double(bits)

    # -- lossy convenience accessors (0 on failure) --------------------------

    def read_uint8(self) -> int:
        return self._read(1, False) or 0

    def read_uint16(self) -> int:
        return self._read(2, False) or 0

    def read_uint32(self) -> int:
        return self._read(4, False) or 0

    def read_uint64(self) -> int:
        return self._read(8, False) or 0

    def read_int8(self) -> int:
        return self._read(1, True) or 0

    def read_int16(self) -> int:
        return self._read(2, True) or 0

    def read_int32(self) -> int:
        return self._read(4, True) or 0

    def read_int64(self) -> int:
        return self._read(8, True) or 0

    def peek_uint8(self) -> int:
        return self._peek(1, False) or 0

    def peek_uint16(self) -> int:
        return self._peek(2, False) or 0

    def peek_uint32(self) -> int:
        return self._peek(4, False) or 0

    def peek_uint64(self) -> int:
        return self._peek(8, False) or 0

    def peek_int8(self) -> int:
        return self._peek(1, True) or 0

    def peek_int16(self) -> int:
        return self._peek(2, True) or 0

    def peek_int32(self) -> int:
        return self._peek(4, True) or 0

    def peek_int64(self) -> int:
        return self._peek(8, True) or 0

    def __repr__(self) -> str:
        return f"BigEndianReader(position={self._pos}, remaining={self.remaining()})"


# =============================================================================
# Writer
# =============================================================================

class BigEndianWriter:
    """
    Writes network-order values while walking a mutable byte range.

    A writer built without a buffer has an empty range and refuses every
    non-empty write until reset() gives it one.

    Example:
        >>> buf = bytearray(3)
        >>> writer = BigEndianWriter(buf)
        >>> writer.write_u16(0x0102)
        True
        >>> writer.write_u16(0x0304)
        False
        >>> bytes(buf)
        b'\\x01\\x02\\x00'
    """

    __slots__ = ("_buf", "_pos", "_end")

    def __init__(
        self,
        buf: bytearray | memoryview | None = None,
        offset: int = 0,
        length: int | None = None,
    ) -> None:
        self.reset(bytearray() if buf is None else buf, offset, length)

    def reset(self, buf: bytearray | memoryview, offset: int = 0, length: int | None = None) -> None:
        """
        Point the writer at ``buf[offset:offset + length]``.

        Raises:
            TypeError: If ``buf`` is read-only
            BoundsExceededException: If the window lies outside ``buf``
        """
        view = _byte_view(buf)
        if view.readonly:
            raise TypeError("BigEndianWriter needs a writable buffer (e.g. bytearray)")
        start, end = _range(view, offset, length)
        self._buf = view
        self._pos = start
        self._end = end

    @property
    def position(self) -> int:
        """Index of the next byte to be written in the underlying buffer."""
        return self._pos

    def tell(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self._end - self._pos

    def skip(self, count: int) -> bool:
        """Advance by ``count`` bytes without touching them."""
        _check_count(count)
        if count > self._end - self._pos:
            return False
        self._pos += count
        return True

    def write_bytes(self, data: BufferLike) -> bool:
        """Copy ``data`` into the buffer."""
        view = _byte_view(data)
        count = len(view)
        if count > self._end - self._pos:
            return False
        self._buf[self._pos:self._pos + count] = view
        self._pos += count
        return True

    def _write(self, value: int, size: int, signed: bool) -> bool:
        _check_range(value, size, signed)
        if size > self._end - self._pos:
            return False
        write_big_endian(self._buf, value, size, self._pos)
        self._pos += size
        return True

    def write_u8(self, value: int) -> bool:
        return self._write(value, 1, False)

    def write_u16(self, value: int) -> bool:
        return self._write(value, 2, False)

    def write_u32(self, value: int) -> bool:
        return self._write(value, 4, False)

    def write_u64(self, value: int) -> bool:
        return self._write(value, 8, False)

    def write_i8(self, value: int) -> bool:
        return self._write(value, 1, True)

    def write_i16(self, value: int) -> bool:
        return self._write(value, 2, True)

    def write_i32(self, value: int) -> bool:
        return self._write(value, 4, True)

    def write_i64(self, value: int) -> bool:
        return self._write(value, 8, True)

    def write_double(self, value: float) -> bool:
        """Write the IEEE-754 bit pattern of ``value`` as a big-endian u64."""
        return self._write(double_to_bits(value), 8, False)

    def __repr__(self) -> str:
        return f"BigEndianWriter(position={self._pos}, remaining={self.remaining()})"


__all__ = [
    "read_big_endian",
    "write_big_endian",
    "double_to_bits",
    "bits_to_double",
    "BigEndianReader",
    "BigEndianWriter",
]
