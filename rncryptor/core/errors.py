"""Structured error types for rncryptor.

All errors inherit from both ``RNCryptorError`` and ``ValueError`` so that
code that catches ``ValueError`` continues to work unchanged.

Hierarchy::

    RNCryptorError (Exception)
    +-- UnsupportedVersion   - encrypt asked for a format version outside {2, 3}
    +-- MalformedInput       - container too short or unknown version byte
    +-- DecryptionError      - anything that stops plaintext from being released
        +-- AuthenticationFailed - HMAC mismatch (wrong password or tampering)
        +-- CorruptCiphertext    - HMAC verified but CBC/padding removal failed
"""

from __future__ import annotations


class RNCryptorError(Exception):
    """Base class for all rncryptor errors."""


class UnsupportedVersion(RNCryptorError, ValueError):
    """Requested container version is not 2 or 3."""


class MalformedInput(RNCryptorError, ValueError):
    """Container bytes cannot be parsed (too short, bad version byte)."""


class DecryptionError(RNCryptorError, ValueError):
    """Decryption did not produce verified plaintext."""


class AuthenticationFailed(DecryptionError):
    """HMAC could not be verified.

    Deliberately covers both a wrong password and corrupted data.
    """


class CorruptCiphertext(DecryptionError):
    """HMAC verified but the ciphertext would not decrypt/unpad."""
