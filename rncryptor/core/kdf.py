"""
Key derivation for the RNCryptor format.

PBKDF2 with HMAC-SHA1, 10,000 iterations, 32-byte output. The parameters
are fixed by the format and are not stored in the container.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .formats import SALT_SIZE


class PBKDF2SHA1KDF:
    """PBKDF2-HMAC-SHA1 as used for both the encryption and the HMAC key."""

    name = "PBKDF2-HMAC-SHA1"
    iterations = 10_000
    key_length = 32
    salt_size = SALT_SIZE

    def derive(self, password: bytes | bytearray, salt: bytes) -> bytearray:
        """Derive a key from a password (as bytes/bytearray) and salt.

        Returns a mutable bytearray so callers can zero it after use.
        """
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA1(),
            length=self.key_length,
            salt=bytes(salt),
            iterations=self.iterations,
        )
        return bytearray(kdf.derive(bytes(password)))

    def generate_salt(self) -> bytes:
        return os.urandom(self.salt_size)


DEFAULT_KDF = PBKDF2SHA1KDF()


def derive_key(password: bytes | bytearray, salt: bytes) -> bytearray:
    return DEFAULT_KDF.derive(password, salt)
