"""
RNCryptor container binary format (versions 2 and 3).

Both versions share one layout:

    Byte 0:        version          (0x02 or 0x03)
    Byte 1:        options          (bit 0 = password-based)
    Bytes 2-9:     encryption_salt
    Bytes 10-17:   hmac_salt
    Bytes 18-33:   iv
    Bytes 34..-32: ciphertext       (AES-256-CBC, PKCS7 padded)
    Last 32 bytes: hmac             (HMAC-SHA256 over everything before it)

The version byte only changes how the password is verified on decrypt
(version 2 retries with a truncated multibyte password).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .errors import MalformedInput

FORMAT_VERSION_2 = 0x02
FORMAT_VERSION_3 = 0x03
SUPPORTED_VERSIONS = (FORMAT_VERSION_2, FORMAT_VERSION_3)
DEFAULT_VERSION = FORMAT_VERSION_3

OPTION_USES_PASSWORD = 0x01

SALT_SIZE = 8
IV_SIZE = 16
HMAC_SIZE = 32

HEADER_FORMAT = f"!BB{SALT_SIZE}s{SALT_SIZE}s{IV_SIZE}s"  # version, options, salts, iv
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 34 bytes

MIN_CONTAINER_SIZE = HEADER_SIZE + HMAC_SIZE  # 66 bytes

_OPTION_NAMES = {
    OPTION_USES_PASSWORD: "password",
}


@dataclass(frozen=True)
class Container:
    """A parsed container. Field order matches the wire layout."""

    version: int
    options: int
    encryption_salt: bytes
    hmac_salt: bytes
    iv: bytes
    ciphertext: bytes
    hmac: bytes

    @property
    def header(self) -> bytes:
        return build_header(self.version, self.options, self.encryption_salt,
                            self.hmac_salt, self.iv)

    @property
    def authenticated_data(self) -> bytes:
        """Every container byte covered by the HMAC (all but the tag)."""
        return self.header + self.ciphertext

    def to_bytes(self) -> bytes:
        return serialize(self)


def build_header(version: int, options: int, encryption_salt: bytes,
                 hmac_salt: bytes, iv: bytes) -> bytes:
    """Pack the fixed 34-byte header.

    ``struct`` silently pads or truncates ``s`` fields, so sizes are checked
    first.
    """
    for name, value, size in (
        ("encryption_salt", encryption_salt, SALT_SIZE),
        ("hmac_salt", hmac_salt, SALT_SIZE),
        ("iv", iv, IV_SIZE),
    ):
        if len(value) != size:
            raise MalformedInput(f"{name} must be {size} bytes (got {len(value)})")
    try:
        return struct.pack(HEADER_FORMAT, version, options,
                           bytes(encryption_salt), bytes(hmac_salt), bytes(iv))
    except struct.error as exc:
        raise MalformedInput(f"Invalid header field: {exc}") from exc


def serialize(container: Container) -> bytes:
    """Concatenate header, ciphertext and tag into the wire format."""
    if len(container.hmac) != HMAC_SIZE:
        raise MalformedInput(
            f"hmac must be {HMAC_SIZE} bytes (got {len(container.hmac)})"
        )
    return container.authenticated_data + bytes(container.hmac)


def parse(data: bytes | bytearray | memoryview) -> Container:
    """
    Slice raw container bytes into their seven fields.

    Raises MalformedInput when the data is shorter than the 66-byte minimum
    or the version byte is not 0x02/0x03. The options byte is not checked.
    """
    raw = bytes(data)

    if len(raw) < MIN_CONTAINER_SIZE:
        raise MalformedInput(
            f"Container too short ({len(raw)} bytes, need >= {MIN_CONTAINER_SIZE})"
        )

    version, options, encryption_salt, hmac_salt, iv = struct.unpack(
        HEADER_FORMAT, raw[:HEADER_SIZE]
    )

    if version not in SUPPORTED_VERSIONS:
        raise MalformedInput(
            f"Unsupported container version {version:#04x} "
            f"(supported: {FORMAT_VERSION_2:#04x}, {FORMAT_VERSION_3:#04x})"
        )

    return Container(
        version=version,
        options=options,
        encryption_salt=encryption_salt,
        hmac_salt=hmac_salt,
        iv=iv,
        ciphertext=raw[HEADER_SIZE:-HMAC_SIZE],
        hmac=raw[-HMAC_SIZE:],
    )


def describe(container: Container) -> dict:
    """Header summary for triage. Contains nothing secret."""
    flags = [name for bit, name in _OPTION_NAMES.items() if container.options & bit]
    unknown = container.options & ~sum(_OPTION_NAMES)
    if unknown:
        flags.append(f"unknown({unknown:#04x})")
    return {
        "version": container.version,
        "options": container.options,
        "flags": flags,
        "encryption_salt": container.encryption_salt.hex(),
        "hmac_salt": container.hmac_salt.hex(),
        "iv": container.iv.hex(),
        "ciphertext_size": len(container.ciphertext),
        "total_size": MIN_CONTAINER_SIZE + len(container.ciphertext),
    }
