"""
SHA-1 Engine Unit Tests
Tests for basekit/crypto/sha1.py

Tests:
- Published known-answer vectors
- Agreement with hashlib across padding boundaries
- Blocks assembled across many update() calls
- One-shot helpers
"""
import hashlib

import pytest

from basekit.crypto.sha1 import SHA1, sha1_hash_bytes, sha1_hex_string
from fixtures.vectors import SHA1_VECTORS, make_message


class TestKnownAnswers:
    """FIPS 180 example digests."""

    @pytest.mark.parametrize("message,expected", SHA1_VECTORS)
    def test_known_vector(self, message, expected):
        """FIPS 180 example digests."""
        sha = SHA1()
        sha.update(message)
        sha.final()

        assert sha.digest().hex() == expected

    def test_empty_string(self):
        """SHA-1 of the empty string matches the published digest."""
        assert sha1_hex_string("") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"

    def test_abc(self):
        """SHA-1 of "abc" matches the published digest."""
        assert sha1_hash_bytes(b"abc") == bytes.fromhex(
            "a9993e364706816aba3e25717850c26c9cd0d89d"
        )

    @pytest.mark.slow
    def test_million_a(self):
        """One million 'a' characters fed in 1000-byte chunks."""
        sha = SHA1()
        chunk = b"a" * 1000
        for _ in range(1000):
            sha.update(chunk)
        sha.final()

        assert sha.hex_digest() == "34aa973cd4c4daa4f61eeb2bdbad27316534016f"


class TestAgainstHashlib:
    """Cross-check against the platform implementation."""

    def test_padding_boundaries(self, message_lengths):
        """Lengths around 55/56/64 exercise one- and two-block padding."""
        for length in message_lengths:
            data = make_message(length)
            assert sha1_hash_bytes(data) == hashlib.sha1(data).digest(), length

    def test_byte_at_a_time(self):
        """Single-byte updates build blocks across calls."""
        data = make_message(150)
        sha = SHA1()
        for i in range(len(data)):
            sha.update(data[i:i + 1])
        sha.final()

        assert sha.digest() == hashlib.sha1(data).digest()

    def test_uneven_chunks(self):
        """Chunks that straddle block boundaries give the same digest."""
        data = make_message(500)
        sha = SHA1()
        for start, end in [(0, 7), (7, 70), (70, 200), (200, 201), (201, 500)]:
            sha.update(data[start:end])
        sha.final()

        assert sha.digest() == hashlib.sha1(data).digest()

    def test_accepts_bytearray_and_memoryview(self):
        """All bytes-like inputs hash the same."""
        data = make_message(100)
        sha = SHA1()
        sha.update(bytearray(data[:40]))
        sha.update(memoryview(data)[40:])
        sha.final()

        assert sha.digest() == hashlib.sha1(data).digest()


class TestEngineShape:
    """Contract constants and reuse."""

    def test_sizes(self):
        """20-byte digest over 64-byte blocks."""
        sha = SHA1()

        assert SHA1.DIGEST_SIZE == 20
        assert SHA1.BLOCK_SIZE == 64
        assert sha.digest_size == 20
        assert sha.block_size == 64

    def test_digest_length(self):
        """digest() is DIGEST_SIZE bytes."""
        assert len(sha1_hash_bytes(b"anything")) == 20

    def test_init_allows_reuse(self):
        """init() after final() starts a fresh message."""
        sha = SHA1()
        sha.update(b"first message")
        sha.final()

        sha.init()
        sha.update(b"abc")
        sha.final()

        assert sha.hex_digest() == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_hex_string_accepts_str(self):
        """sha1_hex_string encodes str as UTF-8."""
        assert sha1_hex_string("abc") == sha1_hex_string(b"abc")
