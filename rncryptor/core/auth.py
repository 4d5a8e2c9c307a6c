"""
HMAC-SHA256 container authentication.

The tag covers every container byte except itself and is keyed with a
PBKDF2 key derived from the password and the container's hmac_salt.
"""

from __future__ import annotations

import hmac

from .formats import Container
from .kdf import derive_key
from .memory import secure_zero


def compute_hmac(key: bytes | bytearray, message: bytes) -> bytes:
    """HMAC-SHA256 of message (32 bytes)."""
    return hmac.new(bytes(key), message, "sha256").digest()


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without stopping at the first difference.

    Lengths are public, so a length mismatch returns straight away. Otherwise
    every byte pair is XORed into one accumulator and only the final value is
    tested.
    """
    if len(a) != len(b):
        return False
    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def verify_hmac(password: bytes | bytearray, container: Container) -> bool:
    """Check the container tag against a key derived from ``password``."""
    hmac_key = derive_key(password, container.hmac_salt)
    try:
        expected = compute_hmac(hmac_key, container.authenticated_data)
    finally:
        secure_zero(hmac_key)
    return constant_time_compare(expected, container.hmac)
