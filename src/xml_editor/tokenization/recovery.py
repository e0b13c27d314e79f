"""Automatic structural repair ("fixation") of malformed XML.

The fixer runs the same open-tag state machine as the verifier, but every
error it meets is repaired in place instead of being reported:

* unclosed bracket: a '>' is synthesized after the tag name/attributes
* malformed declaration: a '?' is inserted before the closing '>'
* orphan closing tag: the tag is deleted
* mismatched closing tag: it is rewritten to close the innermost open tag
* orphan '>': a '<' is synthesized at the start of the tag and the tag is
  scanned again like any other
* tags still open at end of input: closing tags are appended, innermost first

Repairs only ever produce text the scanner accepts, so fixing already fixed
text changes nothing.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from xml_editor.shared import get_logger

from .scanner import (
    FormatErrorKind,
    TagKind,
    classify_tag,
    find_tag_end,
    is_orphan_close_bracket,
    orphan_tag_start,
    unclosed_bracket_boundary,
)

_BRACKET_PATTERN = re.compile(r"[<>]")


@dataclass(frozen=True)
class RepairRecord:
    """One edit applied by the fixer."""

    kind: FormatErrorKind
    position: int
    line: int
    original: str
    replacement: str

    @property
    def description(self) -> str:
        if self.kind is FormatErrorKind.UNCLOSED_BRACKET:
            return "Added missing '>'"
        if self.kind is FormatErrorKind.MALFORMED_DECLARATION:
            return "Added missing '?' to XML declaration"
        if self.kind is FormatErrorKind.ORPHAN_CLOSING_TAG:
            return f"Removed closing tag {self.original} without opening tag"
        if self.kind is FormatErrorKind.MISMATCHED_TAG:
            return f"Replaced {self.original} with {self.replacement}"
        if self.kind is FormatErrorKind.ORPHAN_CLOSE_BRACKET:
            return "Added missing '<'"
        return f"Added missing closing tag {self.replacement}"


@dataclass
class FixResult:
    """Repaired text and the edits that produced it."""

    text: str
    repairs: List[RepairRecord] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.repairs)

    @property
    def repair_count(self) -> int:
        return len(self.repairs)


class XMLFixer:
    """Best-effort structural repair; never raises on malformed input.

    Examples:
        >>> XMLFixer().fix("<a>text").text
        '<a>text</a>'
        >>> XMLFixer().fix("<a><b></a>").text
        '<a><b></b></a>'
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.logger = get_logger(__name__, correlation_id, "fixer")

    def fix(self, text: str) -> FixResult:
        fixed = text
        repairs: List[RepairRecord] = []
        stack: List[str] = []
        position = 0

        def record(kind: FormatErrorKind, at: int, original: str, replacement: str) -> None:
            repair = RepairRecord(
                kind, at, fixed.count("\n", 0, at) + 1, original, replacement
            )
            repairs.append(repair)
            self.logger.debug(
                repair.description,
                extra={"line": repair.line, "position": at, "error_kind": kind.name},
            )

        while True:
            match = _BRACKET_PATTERN.search(fixed, position)
            if match is None:
                break
            position = match.start()

            if fixed[position] == ">":
                if not is_orphan_close_bracket(fixed, position):
                    position += 1
                    continue
                start = orphan_tag_start(fixed, position)
                fixed = fixed[:start] + "<" + fixed[start:]
                record(FormatErrorKind.ORPHAN_CLOSE_BRACKET, start, "", "<")
                # Scan the completed tag like any other
                position = start
                continue

            end = find_tag_end(fixed, position)
            if end is None:
                end = unclosed_bracket_boundary(fixed, position)
                fixed = fixed[:end] + ">" + fixed[end:]
                record(FormatErrorKind.UNCLOSED_BRACKET, end, "", ">")

            tag = classify_tag(fixed, position, end)

            if tag.kind is TagKind.DECLARATION:
                if tag.malformed:
                    fixed = fixed[:end] + "?" + fixed[end:]
                    record(FormatErrorKind.MALFORMED_DECLARATION, end, "", "?")
                    end += 1
                position = end + 1
                continue

            if tag.kind in (TagKind.COMMENT, TagKind.SELF_CLOSING):
                position = end + 1
                continue

            if tag.kind is TagKind.OPENING:
                stack.append(tag.name)
                position = end + 1
                continue

            # Closing tag
            if not stack:
                record(FormatErrorKind.ORPHAN_CLOSING_TAG, position, tag.text, "")
                fixed = fixed[:position] + fixed[end + 1:]
                continue

            expected = stack.pop()
            if expected != tag.name:
                replacement = f"</{expected}>"
                record(FormatErrorKind.MISMATCHED_TAG, position, tag.text, replacement)
                fixed = fixed[:position] + replacement + fixed[end + 1:]
                end = position + len(replacement) - 1
            position = end + 1

        while stack:
            closing = f"</{stack.pop()}>"
            record(FormatErrorKind.UNCLOSED_TAG, len(fixed), "", closing)
            fixed += closing

        if repairs:
            self.logger.info("Fixing complete", extra={"repair_count": len(repairs)})
        else:
            self.logger.info("No fixes were necessary")
        return FixResult(fixed, repairs)


def fix(text: str) -> str:
    """Repair ``text`` and return the result (the input itself when nothing is wrong)."""
    return XMLFixer().fix(text).text
