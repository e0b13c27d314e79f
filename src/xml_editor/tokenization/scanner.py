"""Tag scanning primitives shared by every XML pipeline.

The scanner locates ``<...>`` spans in a character buffer, classifies them and
reports malformed brackets. It never modifies the buffer: read-only consumers
(verifier, formatter, tree builder) iterate over :class:`TagScanner` events,
while the fixer calls the module-level functions directly on the text it is
rewriting.
"""

import re
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Union

WHITESPACE = " \t\n\r"
# Characters ending the tag body the fixer closes when no later '>' exists
_OPEN_TAG_STOP = " \t\n\r<"
# Characters bounding the start of a tag whose '<' is missing
_ORPHAN_TAG_DELIMITERS = "\n\r<>/"

_BRACKET_PATTERN = re.compile(r"[<>]")


class TagKind(Enum):
    """Classification of a ``<...>`` span."""

    DECLARATION = auto()    # <?xml ... ?>
    COMMENT = auto()        # <!-- ... -->, <!DOCTYPE ...>, empty <>
    SELF_CLOSING = auto()   # <name ... />
    OPENING = auto()        # <name ...>
    CLOSING = auto()        # </name>


class FormatErrorKind(Enum):
    """Structural errors detected by the verifier and repaired by the fixer."""

    UNCLOSED_BRACKET = auto()        # '<' without a '>' before the next '<'
    ORPHAN_CLOSE_BRACKET = auto()    # '>' without a preceding '<'
    MALFORMED_DECLARATION = auto()   # <?... missing its trailing '?'
    ORPHAN_CLOSING_TAG = auto()      # </name> with nothing open
    MISMATCHED_TAG = auto()          # </name> not matching the open tag
    UNCLOSED_TAG = auto()            # tag still open at end of input


@dataclass(frozen=True)
class Tag:
    """A classified tag span; ``start`` is the '<' index, ``end`` the '>' index."""

    kind: TagKind
    name: str
    start: int
    end: int
    body: str
    malformed: bool = False

    @property
    def span_end(self) -> int:
        """Index just past the closing '>'."""
        return self.end + 1

    @property
    def text(self) -> str:
        """The tag as it appears in the source."""
        return f"<{self.body}>"

    @property
    def is_structural(self) -> bool:
        """Whether the tag changes the open-tag stack."""
        return self.kind in (TagKind.OPENING, TagKind.CLOSING)


@dataclass(frozen=True)
class TagEvent:
    tag: Tag


@dataclass(frozen=True)
class TextEvent:
    start: int
    end: int
    content: str

    @property
    def stripped(self) -> str:
        return self.content.strip(WHITESPACE)


@dataclass(frozen=True)
class MalformationEvent:
    kind: FormatErrorKind
    position: int
    tag: Optional[Tag] = None


ScanEvent = Union[TagEvent, TextEvent, MalformationEvent]


def leading_token(value: str) -> str:
    """Token at the start of ``value`` up to whitespace or '/'."""
    value = value.lstrip(WHITESPACE)
    for index, char in enumerate(value):
        if char in WHITESPACE or char == "/":
            return value[:index]
    return value


def find_tag_end(text: str, start: int) -> Optional[int]:
    """Index of the '>' closing the tag opened at ``start``.

    Returns None (an unclosed bracket) when no '>' follows or when another '<'
    appears before it.
    """
    end = text.find(">", start + 1)
    if end == -1:
        return None
    if text.find("<", start + 1, end) != -1:
        return None
    return end


def classify_tag(text: str, start: int, end: int) -> Tag:
    """Classify the span ``text[start:end + 1]`` by its body's first and last characters."""
    body = text[start + 1:end]
    stripped = body.strip(WHITESPACE)

    if not stripped:
        return Tag(TagKind.COMMENT, "", start, end, body)
    if stripped[0] == "?":
        return Tag(
            TagKind.DECLARATION,
            leading_token(stripped[1:].rstrip("?")),
            start,
            end,
            body,
            malformed=stripped[-1] != "?",
        )
    if stripped[0] == "!":
        return Tag(TagKind.COMMENT, "", start, end, body)
    if stripped[-1] == "/":
        return Tag(TagKind.SELF_CLOSING, leading_token(stripped), start, end, body)
    if stripped[0] == "/":
        return Tag(TagKind.CLOSING, leading_token(stripped[1:]), start, end, body)
    return Tag(TagKind.OPENING, leading_token(stripped), start, end, body)


def is_orphan_close_bracket(text: str, position: int) -> bool:
    """Whether the '>' at ``position`` has no unconsumed '<' before it.

    Scanning backward, the bracket is orphaned when another '>' or the start
    of the buffer is reached before any '<'.
    """
    return text.rfind("<", 0, position) <= text.rfind(">", 0, position)


def unclosed_bracket_boundary(text: str, start: int) -> int:
    """Insertion point for the '>' that closes the unclosed tag at ``start``."""
    length = len(text)
    position = start + 1

    if text.find(">", position) == -1:
        while position < length and text[position] not in _OPEN_TAG_STOP:
            position += 1
        return position

    limit = text.find("<", position)
    if limit == -1:
        limit = length
    while position < limit and text[position] not in "\n\r<":
        position += 1
    while position > start + 1 and text[position - 1] in " \t":
        position -= 1
    return position


def orphan_tag_start(text: str, position: int) -> int:
    """Insertion point for the '<' of the tag ending at the orphan '>' at ``position``.

    A '/' found before any other delimiter marks a closing tag and the '<' goes
    right before it; a '/' directly in front of the '>' belongs to a
    self-closing tag and is passed over.
    """
    index = position - 1
    if index >= 0 and text[index] == "/":
        index -= 1
    while index >= 0 and text[index] not in _ORPHAN_TAG_DELIMITERS:
        index -= 1
    if index >= 0 and text[index] == "/":
        return index

    start = index + 1
    while start < position and text[start] in " \t":
        start += 1
    return start


class LineIndex:
    """Maps character offsets to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._newlines: List[int] = [
            index for index, char in enumerate(text) if char == "\n"
        ]

    def line_of(self, position: int) -> int:
        return bisect_left(self._newlines, position) + 1


class TagScanner:
    """Read-only, forward scan of a buffer producing tag, text and error events.

    Examples:
        >>> [type(e).__name__ for e in TagScanner("<a>x</a>").events()]
        ['TagEvent', 'TextEvent', 'TagEvent']
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[ScanEvent]:
        return self.events()

    def events(self) -> Iterator[ScanEvent]:
        text = self.text
        position = 0
        text_start = 0

        while True:
            match = _BRACKET_PATTERN.search(text, position)
            if match is None:
                break
            position = match.start()

            if text[position] == ">":
                if is_orphan_close_bracket(text, position):
                    yield MalformationEvent(FormatErrorKind.ORPHAN_CLOSE_BRACKET, position)
                position += 1
                continue

            end = find_tag_end(text, position)
            if end is None:
                yield MalformationEvent(FormatErrorKind.UNCLOSED_BRACKET, position)
                position += 1
                continue

            if position > text_start:
                yield TextEvent(text_start, position, text[text_start:position])

            tag = classify_tag(text, position, end)
            if tag.malformed:
                yield MalformationEvent(FormatErrorKind.MALFORMED_DECLARATION, position, tag)
            yield TagEvent(tag)
            position = text_start = end + 1

        if text_start < len(text):
            yield TextEvent(text_start, len(text), text[text_start:])

    def tags(self) -> Iterator[Tag]:
        """Only the well-bracketed tags, in document order."""
        for event in self.events():
            if isinstance(event, TagEvent):
                yield event.tag
