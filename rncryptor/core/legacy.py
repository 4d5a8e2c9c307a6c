"""
Version 2 multibyte-password compatibility.

An early writer of version 2 containers cut the password down to its
*character* count measured in *bytes*, so any password with non-ASCII
characters lost its tail. Containers written that way only verify against
the same mangled password.
"""

from __future__ import annotations


def truncate_multibyte_password(password: bytes) -> bytes:
    """Reproduce the legacy truncation on a UTF-8 encoded password.

    ASCII passwords (one byte per character) come back unchanged. Otherwise
    the first N raw bytes are kept, N being the number of characters, which
    usually splits a multibyte sequence. Input that is not valid UTF-8 has no
    character count and is returned as-is.
    """
    password = bytes(password)
    try:
        char_count = len(password.decode("utf-8"))
    except UnicodeDecodeError:
        return password
    if char_count == len(password):
        return password
    return password[:char_count]
