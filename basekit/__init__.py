"""
basekit - binary data primitives.

Sub-packages:
- basekit.crypto: SHA-1 / SHA-256 / MD5 engines and generic HMAC
- basekit.binary: bounds-checked big-endian reader and writer
- basekit.encoding: base64 codec
- basekit.schemas: error codes, error model and exceptions
- basekit.config: runtime configuration and logging setup
"""

__version__ = "0.1.0"
