"""Byte-pair-encoding compressor and decompressor.

The codec repeatedly replaces the most frequent adjacent byte pair with an
unused byte value from the upper half of the byte range and records the pair
in a dictionary. The compressed artifact is laid out as::

    [entry count: 8-byte unsigned integer, native byte order]
    [entry count x (first byte, second byte)]
    [payload bytes up to the end]

Dictionary entry ``k`` is expanded by payload byte ``128 + k``; every payload
byte without a corresponding entry is a literal. Dictionaries are created per
call, so independent compress and decompress calls never share state.
"""

import struct
from collections import Counter
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Tuple, Union

from xml_editor.shared import (
    FIRST_REPLACEMENT_BYTE,
    MAX_DICTIONARY_ENTRIES,
    CodecConfig,
    get_logger,
)

HEADER_COUNT_SIZE = 8  # bytes used by the entry count
ENTRY_SIZE = 2
MAX_BYTE_VALUE = 255

BytesLike = Union[bytes, bytearray, memoryview]


class CodecError(Exception):
    """Base exception for compression and decompression failures."""


class EmptyInputError(CodecError):
    """Raised when compression is requested for a zero-length input."""


class TruncatedHeaderError(CodecError):
    """Raised when an artifact is too short for its declared header."""


class InvalidDictionaryError(CodecError):
    """Raised when an artifact declares a dictionary the codec cannot expand."""


@dataclass(frozen=True)
class DictionaryEntry:
    """A recorded byte pair."""

    first: int
    second: int

    def __post_init__(self) -> None:
        """Validate byte values."""
        for value in (self.first, self.second):
            if not (0 <= value <= MAX_BYTE_VALUE):
                raise ValueError(f"Dictionary bytes must be in 0..255, got {value}")

    def to_bytes(self) -> bytes:
        """Serialized form of the entry."""
        return bytes((self.first, self.second))


class BPEDictionary:
    """Ordered pair table; entry ``k`` belongs to replacement byte ``128 + k``."""

    def __init__(self, max_entries: int = MAX_DICTIONARY_ENTRIES) -> None:
        if not (0 <= max_entries <= MAX_DICTIONARY_ENTRIES):
            raise ValueError(
                f"max_entries must be between 0 and {MAX_DICTIONARY_ENTRIES}"
            )
        self.max_entries = max_entries
        self.entries: List[DictionaryEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> DictionaryEntry:
        return self.entries[index]

    @property
    def is_full(self) -> bool:
        """Whether no further pair can be recorded."""
        return len(self.entries) >= self.max_entries

    @property
    def next_symbol(self) -> int:
        """Replacement byte the next recorded pair would receive."""
        return FIRST_REPLACEMENT_BYTE + len(self.entries)

    def add(self, first: int, second: int) -> int:
        """Record a pair and return its replacement byte."""
        if self.is_full:
            raise CodecError("Dictionary is full")
        symbol = self.next_symbol
        self.entries.append(DictionaryEntry(first, second))
        return symbol

    def index_of(self, symbol: int) -> Optional[int]:
        """Entry index expanded by ``symbol``, or None for a literal byte."""
        index = symbol - FIRST_REPLACEMENT_BYTE
        if 0 <= index < len(self.entries):
            return index
        return None

    def expansion_table(self) -> List[bytes]:
        """Expanded byte string for every byte value 0..255.

        Entries may only reference replacement bytes of earlier entries, which
        bounds the expansion depth by the dictionary size.
        """
        table = [bytes((value,)) for value in range(MAX_BYTE_VALUE + 1)]
        for index, entry in enumerate(self.entries):
            for value in (entry.first, entry.second):
                referenced = self.index_of(value)
                if referenced is not None and referenced >= index:
                    raise InvalidDictionaryError(
                        f"Dictionary entry {index} references entry {referenced}, "
                        f"which is not defined before it"
                    )
            table[FIRST_REPLACEMENT_BYTE + index] = table[entry.first] + table[entry.second]
        return table

    def encode_header(self, byte_order_prefix: str = "=") -> bytes:
        """Serialize the entry count and the entries."""
        count = struct.pack(f"{byte_order_prefix}Q", len(self.entries))
        return count + b"".join(entry.to_bytes() for entry in self.entries)

    @classmethod
    def decode_header(
        cls, artifact: BytesLike, byte_order_prefix: str = "="
    ) -> Tuple["BPEDictionary", int]:
        """Read a dictionary from the start of ``artifact``.

        Returns:
            The dictionary and the offset at which the payload begins.
        """
        if len(artifact) < HEADER_COUNT_SIZE:
            raise TruncatedHeaderError(
                f"Artifact holds {len(artifact)} bytes, the entry count "
                f"alone needs {HEADER_COUNT_SIZE}"
            )
        (count,) = struct.unpack_from(f"{byte_order_prefix}Q", artifact, 0)
        if count > MAX_DICTIONARY_ENTRIES:
            raise InvalidDictionaryError(
                f"Artifact declares {count} dictionary entries, "
                f"at most {MAX_DICTIONARY_ENTRIES} are possible"
            )

        payload_start = HEADER_COUNT_SIZE + count * ENTRY_SIZE
        if payload_start > len(artifact):
            raise TruncatedHeaderError(
                f"Artifact declares {count} dictionary entries but only "
                f"{len(artifact) - HEADER_COUNT_SIZE} header bytes follow the count"
            )

        dictionary = cls()
        for offset in range(HEADER_COUNT_SIZE, payload_start, ENTRY_SIZE):
            dictionary.add(artifact[offset], artifact[offset + 1])
        return dictionary, payload_start


@dataclass
class CompressionStats:
    """Size accounting for one compression run."""

    original_size: int
    compressed_size: int
    dictionary_size: int
    iterations: int = 0

    @property
    def saved_bytes(self) -> int:
        """Bytes saved; negative when the artifact is larger than the input."""
        return self.original_size - self.compressed_size

    @property
    def ratio(self) -> float:
        """Compressed size relative to the original size."""
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


@dataclass
class CompressionOutcome:
    """Artifact plus the dictionary and statistics that produced it."""

    artifact: bytes
    dictionary: BPEDictionary
    stats: CompressionStats
    payload: bytes = field(repr=False, default=b"")


def count_pairs(buffer: BytesLike) -> Counter:
    """Count every adjacent byte pair, overlapping occurrences included."""
    return Counter(zip(buffer, buffer[1:]))


def select_pair(counts: Counter) -> Optional[Tuple[Tuple[int, int], int]]:
    """Most frequent pair; ties go to the smallest first, then second byte."""
    if not counts:
        return None
    pair, frequency = min(counts.items(), key=lambda item: (-item[1], item[0]))
    return pair, frequency


def replace_pair(buffer: bytes, pair: Tuple[int, int], symbol: int) -> bytes:
    """Replace non-overlapping occurrences of ``pair``, scanning left to right."""
    return buffer.replace(bytes(pair), bytes((symbol,)))


def run_iteration(
    buffer: bytes,
    dictionary: BPEDictionary,
    literals: FrozenSet[int] = frozenset(),
) -> Optional[bytes]:
    """Perform one BPE substitution.

    Args:
        buffer: Current (partially compressed) data
        dictionary: Dictionary receiving the selected pair
        literals: Byte values occurring in the original input; a replacement
            byte equal to one of them would be expanded by the decompressor

    Returns:
        The rewritten buffer, or None when no further iteration is possible.
    """
    if dictionary.is_full or len(buffer) < 2:
        return None
    symbol = dictionary.next_symbol
    if symbol > MAX_BYTE_VALUE or symbol in literals:
        return None

    selected = select_pair(count_pairs(buffer))
    if selected is None:
        return None
    pair, frequency = selected
    if frequency < 2:
        return None

    dictionary.add(*pair)
    return replace_pair(buffer, pair, symbol)


class BPECodec:
    """Byte-pair-encoding codec bound to a configuration.

    Examples:
        >>> codec = BPECodec()
        >>> artifact = codec.compress(b"aaaa")
        >>> artifact[8:]
        b'aa\\x80\\x80'
        >>> codec.decompress(artifact)
        b'aaaa'
    """

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or CodecConfig()
        self.logger = get_logger(__name__, correlation_id, "bpe_codec")

    def encode(
        self,
        data: BytesLike,
        dictionary: Optional[BPEDictionary] = None
    ) -> CompressionOutcome:
        """Compress ``data`` and report the dictionary and statistics."""
        if len(data) == 0:
            raise EmptyInputError("Cannot compress an empty input")
        if dictionary is None:
            dictionary = BPEDictionary(self.config.max_dictionary_entries)
        elif len(dictionary):
            raise ValueError("A caller-supplied dictionary must start empty")

        buffer = bytes(data)
        literals = frozenset(buffer)
        iterations = 0
        while True:
            rewritten = run_iteration(buffer, dictionary, literals)
            if rewritten is None:
                break
            buffer = rewritten
            iterations += 1

        artifact = dictionary.encode_header(self.config.struct_prefix) + buffer
        stats = CompressionStats(
            original_size=len(data),
            compressed_size=len(artifact),
            dictionary_size=len(dictionary),
            iterations=iterations,
        )
        self.logger.info(
            "Compression complete",
            extra={
                "original_size": stats.original_size,
                "compressed_size": stats.compressed_size,
                "saved_bytes": stats.saved_bytes,
                "dictionary_size": stats.dictionary_size,
            },
        )
        return CompressionOutcome(artifact, dictionary, stats, buffer)

    def compress(
        self,
        data: BytesLike,
        dictionary: Optional[BPEDictionary] = None
    ) -> bytes:
        """Compress ``data`` into an artifact."""
        return self.encode(data, dictionary).artifact

    def decompress(self, artifact: BytesLike) -> bytes:
        """Restore the original bytes from an artifact."""
        dictionary, payload_start = BPEDictionary.decode_header(
            artifact, self.config.struct_prefix
        )
        table = dictionary.expansion_table()
        payload = bytes(artifact[payload_start:])
        output = b"".join(table[value] for value in payload)

        self.logger.debug(
            "Decompression complete",
            extra={
                "artifact_size": len(artifact),
                "dictionary_size": len(dictionary),
                "payload_size": len(payload),
                "output_size": len(output),
            },
        )
        return output


def compress(
    data: BytesLike,
    dictionary: Optional[BPEDictionary] = None,
    config: Optional[CodecConfig] = None
) -> bytes:
    """Compress bytes with a fresh (or caller-supplied, empty) dictionary."""
    return BPECodec(config).compress(data, dictionary)


def decompress(artifact: BytesLike, config: Optional[CodecConfig] = None) -> bytes:
    """Decompress an artifact produced by :func:`compress`."""
    return BPECodec(config).decompress(artifact)
