"""Tests for the version 2 multibyte-password truncation."""

from rncryptor.core.legacy import truncate_multibyte_password


class TestTruncateMultibytePassword:
    def test_ascii_unchanged(self):
        assert truncate_multibyte_password(b"correct horse") == b"correct horse"

    def test_empty_unchanged(self):
        assert truncate_multibyte_password(b"") == b""

    def test_two_byte_characters(self):
        # "päss": 4 characters, 5 bytes
        pw = "päss".encode("utf-8")
        assert truncate_multibyte_password(pw) == pw[:4]
        assert truncate_multibyte_password(pw) == b"p\xc3\xa4s"

    def test_truncation_can_split_a_character(self):
        # "ü" is 1 character but 2 bytes: only the lead byte survives
        assert truncate_multibyte_password("ü".encode("utf-8")) == b"\xc3"

    def test_four_byte_characters(self):
        pw = "ab\U0001f512".encode("utf-8")  # 3 characters, 6 bytes
        assert truncate_multibyte_password(pw) == b"ab\xf0"

    def test_invalid_utf8_unchanged(self):
        assert truncate_multibyte_password(b"\xff\xfe\xfd") == b"\xff\xfe\xfd"

    def test_accepts_bytearray(self):
        pw = bytearray("päss".encode("utf-8"))
        assert truncate_multibyte_password(pw) == b"p\xc3\xa4s"

    def test_returns_bytes(self):
        assert isinstance(truncate_multibyte_password(bytearray(b"abc")), bytes)
