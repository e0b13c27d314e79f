"""Hex text rendering of binary artifacts.

Binary output is shown to users as upper-case hex byte pairs separated by
single spaces (``"0A FF 80"``), and hex text pasted back in is decoded to the
original bytes.
"""

from .bpe import BytesLike, CodecError


class HexDecodeError(CodecError):
    """Raised when hex text cannot be decoded into bytes."""


def to_hex_string(data: BytesLike) -> str:
    """Render bytes as space-separated upper-case hex pairs."""
    return bytes(data).hex(" ").upper()


def from_hex_string(text: str) -> bytes:
    """Decode hex text, ignoring all whitespace between digits."""
    digits = "".join(text.split())
    if len(digits) % 2:
        raise HexDecodeError(f"Hex text has an odd number of digits ({len(digits)})")
    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise HexDecodeError(f"Invalid hex text: {e}") from e
