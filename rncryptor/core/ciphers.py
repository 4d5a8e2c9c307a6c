"""
AES-256 in CBC mode with PKCS7 padding.

The only block cipher the RNCryptor format defines.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .formats import IV_SIZE


class AES256CBC:
    """AES-256-CBC with a random IV per encryption."""

    name = "AES-256-CBC"
    key_size = 32
    iv_size = IV_SIZE
    block_size = algorithms.AES.block_size  # bits

    def encrypt(self, key: bytes | bytearray, plaintext: bytes) -> tuple[bytes, bytes]:
        """Pad and encrypt plaintext, returning (iv, ciphertext)."""
        iv = os.urandom(self.iv_size)
        padder = padding.PKCS7(self.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()
        encryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(iv)).encryptor()
        return iv, encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, key: bytes | bytearray, iv: bytes, ciphertext: bytes) -> bytes:
        """Decrypt and unpad. Raises ValueError on bad length or padding."""
        decryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(self.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
