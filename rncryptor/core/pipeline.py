"""
Encrypt/decrypt pipeline for RNCryptor containers.

Encryption: fresh salts and IV, AES-256-CBC under a PBKDF2 key, then an
HMAC-SHA256 tag under a second, independently salted PBKDF2 key.

Decryption verifies the tag before anything is decrypted. Version 2
containers get one extra verification attempt with the legacy-truncated
password; version 3 containers never do.
"""

from __future__ import annotations

from .auth import compute_hmac, verify_hmac
from .ciphers import AES256CBC
from .errors import AuthenticationFailed, CorruptCiphertext, UnsupportedVersion
from .formats import (
    DEFAULT_VERSION,
    FORMAT_VERSION_2,
    OPTION_USES_PASSWORD,
    SUPPORTED_VERSIONS,
    Container,
    build_header,
    describe,
    parse,
)
from .kdf import DEFAULT_KDF
from .legacy import truncate_multibyte_password
from .memory import secure_zero

_AUTH_FAILED_MESSAGE = (
    "Password may be incorrect, or the data has been corrupted "
    "(HMAC could not be verified)"
)


def _to_bytes(value: str | bytes | bytearray | memoryview, what: str) -> bytearray:
    """Encode str as UTF-8, copy bytes-likes into a mutable buffer."""
    if isinstance(value, str):
        return bytearray(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytearray(value)
    raise TypeError(f"{what} must be str or bytes, not {type(value).__name__}")


def _authenticate(password: bytearray, container: Container) -> bytearray:
    """Return the password variant that verifies the container's HMAC.

    Raises AuthenticationFailed when neither the password nor (version 2
    only) its legacy-truncated form verifies.
    """
    if verify_hmac(password, container):
        return password

    if container.version == FORMAT_VERSION_2:
        truncated = bytearray(truncate_multibyte_password(password))
        if truncated != password and verify_hmac(truncated, container):
            return truncated
        secure_zero(truncated)

    raise AuthenticationFailed(_AUTH_FAILED_MESSAGE)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def encrypt(plaintext: bytes | str, password: bytes | str,
            version: int = DEFAULT_VERSION) -> bytes:
    """
    Encrypt plaintext into a version 2 or 3 container.

    Raises UnsupportedVersion for any other version, before any crypto work.
    """
    if not isinstance(version, int) or version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(
            f"Can only encrypt format version 2 or 3 (got {version!r})"
        )

    data = bytes(_to_bytes(plaintext, "plaintext"))
    password_bytes = _to_bytes(password, "password")
    cipher = AES256CBC()

    encryption_key = hmac_key = None
    try:
        encryption_salt = DEFAULT_KDF.generate_salt()
        hmac_salt = DEFAULT_KDF.generate_salt()

        encryption_key = DEFAULT_KDF.derive(password_bytes, encryption_salt)
        iv, ciphertext = cipher.encrypt(encryption_key, data)

        message = build_header(version, OPTION_USES_PASSWORD, encryption_salt,
                               hmac_salt, iv) + ciphertext

        hmac_key = DEFAULT_KDF.derive(password_bytes, hmac_salt)
        return message + compute_hmac(hmac_key, message)
    finally:
        for key in (encryption_key, hmac_key):
            if key is not None:
                secure_zero(key)
        secure_zero(password_bytes)


def decrypt(container: bytes | bytearray | memoryview, password: bytes | str) -> bytes:
    """
    Verify and decrypt a container. Returns the plaintext bytes.

    Raises:
        MalformedInput: shorter than 66 bytes or unknown version byte
        AuthenticationFailed: wrong password or tampered data
        CorruptCiphertext: HMAC verified but the ciphertext did not decrypt
    """
    parsed = parse(container)
    password_bytes = _to_bytes(password, "password")

    verified_password = None
    encryption_key = None
    try:
        verified_password = _authenticate(password_bytes, parsed)
        encryption_key = DEFAULT_KDF.derive(verified_password, parsed.encryption_salt)
        try:
            return AES256CBC().decrypt(encryption_key, parsed.iv, parsed.ciphertext)
        except ValueError as exc:
            raise CorruptCiphertext(
                "HMAC verified but the ciphertext could not be decrypted"
            ) from exc
    finally:
        if encryption_key is not None:
            secure_zero(encryption_key)
        if verified_password is not None:
            secure_zero(verified_password)
        secure_zero(password_bytes)


def inspect(container: bytes | bytearray | memoryview) -> dict:
    """Describe a container's header without needing the password."""
    return describe(parse(container))
