"""
Best-effort wiping of sensitive buffers.

Python's immutable ``bytes`` and ``str`` cannot be reliably zeroed, so
derived keys and the internal password copy are kept in ``bytearray``s and
overwritten once a call is done with them.
"""

from __future__ import annotations


def secure_zero(buf: bytearray) -> None:
    """Overwrite a bytearray with zeros."""
    for i in range(len(buf)):
        buf[i] = 0
