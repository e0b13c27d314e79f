"""Byte-pair-encoding codec for the XML editor.

Key Components:
    BPECodec: Configured compressor/decompressor
    BPEDictionary: Per-call pair table serialized into the artifact header
    compress / decompress: Module-level shortcuts
    to_hex_string / from_hex_string: Hex text view of binary artifacts
"""

from .bpe import (
    BPECodec,
    BPEDictionary,
    CodecError,
    CompressionOutcome,
    CompressionStats,
    DictionaryEntry,
    EmptyInputError,
    InvalidDictionaryError,
    TruncatedHeaderError,
    compress,
    decompress,
)
from .hexdump import HexDecodeError, from_hex_string, to_hex_string

__all__ = [
    "BPECodec",
    "BPEDictionary",
    "CodecError",
    "CompressionOutcome",
    "CompressionStats",
    "DictionaryEntry",
    "EmptyInputError",
    "HexDecodeError",
    "InvalidDictionaryError",
    "TruncatedHeaderError",
    "compress",
    "decompress",
    "from_hex_string",
    "to_hex_string",
]
