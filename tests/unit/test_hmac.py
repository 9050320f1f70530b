"""
HMAC Unit Tests
Tests for basekit/crypto/hmac.py

Tests:
- RFC 2202 / RFC 4231 and "quick brown fox" vectors
- Key length edge cases: empty, exactly block size, longer than block size
- Incremental vs one-shot equivalence
- Substituting a caller-supplied engine
- Lifecycle and digest comparison
"""
import hashlib
import hmac as std_hmac

import pytest

from basekit.config.runtime import HashConfig, RuntimeConfig, set_default_config
from basekit.crypto import MD5, SHA1, SHA256
from basekit.crypto.engine import HashEngine
from basekit.crypto.hmac import HMAC, sign_hmac, sign_hmac_hex_string
from basekit.schemas.errors import EngineStateException, UnsupportedAlgorithmException
from fixtures.vectors import FOX, HMAC_VECTORS, make_message

ENGINES = {"sha1": SHA1, "sha256": SHA256, "md5": MD5}


class TestKnownAnswers:
    """Published HMAC digests."""

    @pytest.mark.parametrize("algorithm,key,message,expected", HMAC_VECTORS)
    def test_vector(self, algorithm, key, message, expected):
        """Published HMAC digests for each engine."""
        mac = HMAC(ENGINES[algorithm], key)
        mac.update(message)
        mac.final()

        assert mac.hex_string() == expected

    def test_fox_sha1(self, fox):
        """HMAC-SHA1 of the fox sentence under "key"."""
        assert sign_hmac_hex_string(SHA1, "key", fox) == (
            "de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9"
        )

    def test_fox_sha256(self, fox):
        """HMAC-SHA256 of the fox sentence under "key"."""
        assert sign_hmac_hex_string(SHA256, "key", fox) == (
            "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"
        )


class TestKeyLengths:
    """Keys around the block size boundary."""

    @pytest.mark.parametrize("engine_cls", [SHA1, SHA256, MD5])
    @pytest.mark.parametrize("key_length", [0, 1, 20, 32, 63, 64, 65, 100, 200])
    def test_matches_stdlib(self, engine_cls, key_length):
        """Every key length matches the hmac module."""
        key = make_message(key_length)
        message = make_message(300)
        expected = std_hmac.new(key, message, engine_cls.NAME).digest()

        assert sign_hmac(engine_cls, key, message) == expected

    def test_long_key_is_prehashed(self):
        """A key over the block size behaves like its digest used as the key."""
        long_key = b"k" * 65
        hashed_key = hashlib.sha256(long_key).digest()

        assert sign_hmac(SHA256, long_key, FOX) == sign_hmac(SHA256, hashed_key, FOX)

    def test_block_size_key_not_prehashed(self):
        """A key of exactly BLOCK_SIZE bytes is used as-is."""
        key = b"k" * 64
        hashed_key = hashlib.sha256(key).digest()

        assert sign_hmac(SHA256, key, FOX) != sign_hmac(SHA256, hashed_key, FOX)
        assert sign_hmac(SHA256, key, FOX) == std_hmac.new(key, FOX, "sha256").digest()

    def test_empty_key_reproducible(self):
        """An empty key gives a stable full-size MAC."""
        first = sign_hmac(SHA1, b"", b"payload")
        second = sign_hmac(SHA1, b"", b"payload")

        assert first == second
        assert len(first) == SHA1.DIGEST_SIZE

    def test_str_key_is_utf8(self):
        """A str key is used as its UTF-8 bytes."""
        assert sign_hmac(SHA256, "clé", FOX) == sign_hmac(SHA256, "clé".encode("utf-8"), FOX)


class TestIncremental:
    """Incremental use matches the one-shot form."""

    def test_chunked_updates(self):
        """Chunked updates equal one update."""
        message = make_message(1000)
        mac = HMAC(SHA256, b"secret")
        for start in range(0, len(message), 37):
            mac.update(message[start:start + 37])
        mac.final()

        assert mac.digest() == sign_hmac(SHA256, b"secret", message)

    def test_init_resets_with_same_key(self):
        """init() without a key keeps the current key."""
        mac = HMAC(SHA1, b"key")
        mac.update(b"unrelated")
        mac.final()

        mac.init()
        mac.update(FOX)
        mac.final()

        assert mac.hex_string() == "de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9"

    def test_init_with_new_key(self):
        """init(key) switches keys."""
        mac = HMAC(SHA256, b"first")
        mac.init(b"key")
        mac.update(FOX)
        mac.final()

        assert mac.digest() == sign_hmac(SHA256, b"key", FOX)

    def test_init_with_long_key(self):
        """init() pre-hashes a long key."""
        mac = HMAC(SHA1, b"short")
        mac.init(b"\xaa" * 80)
        mac.update(b"Test Using Larger Than Block-Size Key - Hash Key First")
        mac.final()

        assert mac.hex_string() == "aa4ae5e15272d00e95705637ce8a3b55ed402112"


class TestLifecycle:
    """Ordering rules and accessors."""

    def test_update_after_final_raises(self):
        """update() after final() raises."""
        mac = HMAC(SHA256, b"key")
        mac.final()

        with pytest.raises(EngineStateException, match="hmac-sha256"):
            mac.update(b"late")

    def test_double_final_raises(self):
        """A second final() raises."""
        mac = HMAC(SHA256, b"key")
        mac.final()

        with pytest.raises(EngineStateException):
            mac.final()

    def test_digest_before_final_raises(self):
        """digest() before final() raises."""
        mac = HMAC(SHA1, b"key")
        mac.update(b"data")

        with pytest.raises(EngineStateException):
            mac.digest()

    def test_sizes(self):
        """Sizes and name come from the engine."""
        mac = HMAC(SHA1, b"key")

        assert mac.digest_size == 20
        assert mac.block_size == 64
        assert mac.name == "hmac-sha1"


class TestEqualDigest:
    """Digest comparison."""

    def test_equal(self):
        """A matching MAC compares equal."""
        mac = HMAC(SHA256, b"key")
        mac.update(FOX)
        mac.final()

        assert mac.equal_digest(std_hmac.new(b"key", FOX, "sha256").digest())

    def test_not_equal(self):
        """A single flipped bit is detected."""
        mac = HMAC(SHA256, b"key")
        mac.update(FOX)
        mac.final()
        tampered = bytearray(mac.digest())
        tampered[-1] ^= 0x01

        assert not mac.equal_digest(tampered)

    def test_length_mismatch(self):
        """A truncated MAC is not equal."""
        mac = HMAC(SHA256, b"key")
        mac.final()

        assert not mac.equal_digest(mac.digest()[:16])


class TestEngineSelection:
    """Engines by name, by default, and caller-supplied engines."""

    def test_algorithm_by_name(self):
        """sign_hmac accepts an algorithm name."""
        assert sign_hmac("sha1", b"key", FOX) == sign_hmac(SHA1, b"key", FOX)

    def test_default_algorithm(self):
        """None selects sha256 by default."""
        assert sign_hmac(None, b"key", FOX) == sign_hmac(SHA256, b"key", FOX)

    def test_configured_default_algorithm(self):
        """None follows the configured default."""
        set_default_config(RuntimeConfig(hash=HashConfig(default_algorithm="sha1")))

        assert sign_hmac(None, b"key", FOX) == sign_hmac(SHA1, b"key", FOX)

    def test_unknown_algorithm(self):
        """Unknown names raise."""
        with pytest.raises(UnsupportedAlgorithmException):
            sign_hmac("whirlpool", b"key", FOX)

    @pytest.mark.parametrize("name,engine_cls", [("sha256", SHA256), ("SHA-1", SHA1), ("md5", MD5)])
    def test_constructor_accepts_name(self, name, engine_cls):
        """HMAC() resolves algorithm names like sign_hmac does."""
        mac = HMAC(name, b"key")
        mac.update(FOX)
        mac.final()

        assert mac.name == f"hmac-{engine_cls.NAME}"
        assert mac.digest() == sign_hmac(engine_cls, b"key", FOX)

    def test_constructor_default_algorithm(self):
        """HMAC(None, key) uses the configured default engine."""
        set_default_config(RuntimeConfig(hash=HashConfig(default_algorithm="sha1")))
        mac = HMAC(None, b"key")
        mac.update(FOX)
        mac.final()

        assert mac.digest_size == SHA1.DIGEST_SIZE
        assert mac.hex_string() == "de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9"

    def test_constructor_unknown_name(self):
        """An unknown name raises UnsupportedAlgorithmException, not TypeError."""
        with pytest.raises(UnsupportedAlgorithmException) as exc_info:
            HMAC("whirlpool", b"key")

        assert exc_info.value.details["algorithm"] == "whirlpool"

    def test_custom_engine(self):
        """Any class honouring the engine contract composes with HMAC."""

        class SHA224(HashEngine):
            NAME = "sha224"
            DIGEST_SIZE = 28
            BLOCK_SIZE = 64

            def _reset(self):
                self._hasher = hashlib.sha224()

            def _absorb(self, view):
                self._hasher.update(view)

            def _finish(self):
                return self._hasher.digest()

        mac = HMAC(SHA224, b"key")
        mac.update(FOX)
        mac.final()

        assert mac.digest() == std_hmac.new(b"key", FOX, "sha224").digest()
