"""
rncryptor: password-based RNCryptor containers (format versions 2 and 3).

    >>> container = encrypt(b"hello world", "correct horse")
    >>> decrypt(container, "correct horse")
    b'hello world'
"""

from .core.errors import (  # noqa: F401
    AuthenticationFailed,
    CorruptCiphertext,
    DecryptionError,
    MalformedInput,
    RNCryptorError,
    UnsupportedVersion,
)
from .core.pipeline import decrypt, encrypt, inspect  # noqa: F401

__version__ = "1.0.0"
