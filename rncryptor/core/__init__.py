"""Core cryptographic modules."""

from .errors import (  # noqa: F401
    AuthenticationFailed,
    CorruptCiphertext,
    DecryptionError,
    MalformedInput,
    RNCryptorError,
    UnsupportedVersion,
)
