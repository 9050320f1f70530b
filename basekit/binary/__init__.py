"""
Binary cursors.

Bounds-checked big-endian (network order) readers and writers over
caller-owned buffers.
"""
from .big_endian import (
    read_big_endian,
    write_big_endian,
    double_to_bits,
    bits_to_double,
    BigEndianReader,
    BigEndianWriter,
)

__all__ = [
    "read_big_endian",
    "write_big_endian",
    "double_to_bits",
    "bits_to_double",
    "BigEndianReader",
    "BigEndianWriter",
]
