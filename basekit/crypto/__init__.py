"""
Cryptographic primitives.

Streaming hash engines (SHA-1, SHA-256, MD5), generic HMAC over any
engine, and one-shot hashing helpers. Importing this package registers
every engine by name.
"""
from .engine import (
    HashEngine,
    BlockHashEngine,
    register_engine,
    get_engine_class,
    new_engine,
    available_engines,
)
from .sha1 import SHA1, sha1_hash_bytes, sha1_hex_string
from .sha256 import SHA256, sha256_hash_bytes, sha256_hex_string
from .md5 import MD5, md5_hex_string
from .hmac import HMAC, sign_hmac, sign_hmac_hex_string
from .hashing import (
    base16_encode,
    hash_bytes,
    hex_digest,
    constant_time_equal,
)

__all__ = [
    # Engine contract
    "HashEngine",
    "BlockHashEngine",
    "register_engine",
    "get_engine_class",
    "new_engine",
    "available_engines",
    # Engines
    "SHA1",
    "SHA256",
    "MD5",
    "sha1_hash_bytes",
    "sha1_hex_string",
    "sha256_hash_bytes",
    "sha256_hex_string",
    "md5_hex_string",
    # HMAC
    "HMAC",
    "sign_hmac",
    "sign_hmac_hex_string",
    # Helpers
    "base16_encode",
    "hash_bytes",
    "hex_digest",
    "constant_time_equal",
]
