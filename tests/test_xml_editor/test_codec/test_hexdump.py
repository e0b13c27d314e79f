"""Tests for the hex text view of binary artifacts."""

import pytest

from xml_editor.codec import CodecError, HexDecodeError, compress, decompress
from xml_editor.codec.hexdump import from_hex_string, to_hex_string


class TestHexString:
    """Test hex rendering and parsing."""

    def test_upper_case_space_separated(self):
        """Test the rendered form."""
        assert to_hex_string(b"\x0a\xff\x80") == "0A FF 80"

    def test_empty_bytes(self):
        """Test that empty input renders as empty text."""
        assert to_hex_string(b"") == ""

    def test_parse_ignores_whitespace_and_case(self):
        """Test that any whitespace layout and case is accepted."""
        assert from_hex_string("0a ff\n80  01") == b"\x0a\xff\x80\x01"

    def test_odd_digit_count(self):
        """Test that a dangling digit is rejected."""
        with pytest.raises(HexDecodeError):
            from_hex_string("0A F")

    def test_invalid_digit(self):
        """Test that non-hex characters are rejected."""
        with pytest.raises(HexDecodeError):
            from_hex_string("0G")

    def test_hex_error_is_codec_error(self):
        """Test the exception hierarchy."""
        assert issubclass(HexDecodeError, CodecError)

    def test_artifact_survives_hex_view(self):
        """Test that an artifact shown as hex decompresses after parsing."""
        data = b"<a><b>1</b><b>1</b></a>"
        hex_text = to_hex_string(compress(data))
        assert decompress(from_hex_string(hex_text)) == data
