"""Structural verification of XML documents.

The verifier runs the open-tag stack over :class:`TagScanner` events and turns
every structural problem into a :class:`FormatError`. It only reports: the
text it is given is never modified.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from xml_editor.shared import VerifierConfig, get_logger

from .scanner import (
    FormatErrorKind,
    LineIndex,
    MalformationEvent,
    TagEvent,
    TagKind,
    TagScanner,
)

VALID_MESSAGE = "Valid"
INVALID_MESSAGE = "Invalid"


@dataclass(frozen=True)
class FormatError:
    """A structural error located in the source text."""

    kind: FormatErrorKind
    position: Optional[int] = None
    line: Optional[int] = None
    name: Optional[str] = None
    expected: Optional[str] = None
    found: Optional[str] = None

    @property
    def message(self) -> str:
        """Human-readable description without location."""
        if self.kind is FormatErrorKind.UNCLOSED_BRACKET:
            return "Unclosed tag bracket"
        if self.kind is FormatErrorKind.ORPHAN_CLOSE_BRACKET:
            return "Missing '<' for '>'"
        if self.kind is FormatErrorKind.MALFORMED_DECLARATION:
            return "Malformed XML declaration"
        if self.kind is FormatErrorKind.ORPHAN_CLOSING_TAG:
            return f"No matching opening tag for </{self.name}>"
        if self.kind is FormatErrorKind.MISMATCHED_TAG:
            return f"Mismatched tags: expected </{self.expected}> but found </{self.found}>"
        return f"Unclosed tag <{self.name}>"

    def describe(self) -> str:
        """Message prefixed with its line number when known."""
        if self.line is None:
            return f"Error: {self.message}"
        return f"Error at line {self.line}: {self.message}"


@dataclass
class VerificationReport:
    """Outcome of a verification run."""

    errors: List[FormatError] = field(default_factory=list)
    fail_fast: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def unclosed_tags(self) -> List[str]:
        """Names left open at end of input, topmost first."""
        return [
            error.name or ""
            for error in self.errors
            if error.kind is FormatErrorKind.UNCLOSED_TAG
        ]

    def render(self) -> str:
        """Single-line confirmation or multi-line diagnostic report."""
        if self.is_valid:
            return VALID_MESSAGE

        lines = [INVALID_MESSAGE, f"Total Errors: {self.error_count}"]
        lines.extend(
            error.describe()
            for error in self.errors
            if error.kind is not FormatErrorKind.UNCLOSED_TAG
        )
        unclosed = self.unclosed_tags
        if unclosed:
            lines.append("Error: Unclosed tags found:")
            lines.extend(f"  - <{name}>" for name in unclosed)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


class _FailFast(Exception):
    """Internal signal ending a fail-fast scan at its first error."""


class XMLVerifier:
    """Open-tag stack state machine reporting structural errors.

    Examples:
        >>> XMLVerifier().verify("<a><b></b></a>").is_valid
        True
        >>> XMLVerifier().verify("<a><b></a>").error_count
        2
    """

    def __init__(
        self,
        config: Optional[VerifierConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or VerifierConfig()
        self.logger = get_logger(__name__, correlation_id, "verifier")

    def verify(self, text: str) -> VerificationReport:
        """Scan ``text`` and collect every structural error."""
        report = VerificationReport(fail_fast=self.config.fail_fast)
        lines = LineIndex(text)
        stack: List[str] = []

        def record(error: FormatError) -> None:
            report.errors.append(error)
            if self.config.fail_fast:
                raise _FailFast

        try:
            for event in TagScanner(text).events():
                if isinstance(event, MalformationEvent):
                    record(FormatError(
                        event.kind, event.position, lines.line_of(event.position)
                    ))
                    continue
                if not isinstance(event, TagEvent):
                    continue

                tag = event.tag
                if tag.kind is TagKind.OPENING:
                    stack.append(tag.name)
                elif tag.kind is TagKind.CLOSING:
                    line = lines.line_of(tag.start)
                    if not stack:
                        record(FormatError(
                            FormatErrorKind.ORPHAN_CLOSING_TAG, tag.start, line,
                            name=tag.name,
                        ))
                        continue
                    expected = stack.pop()
                    if expected != tag.name:
                        record(FormatError(
                            FormatErrorKind.MISMATCHED_TAG, tag.start, line,
                            name=tag.name, expected=expected, found=tag.name,
                        ))

            while stack:
                record(FormatError(FormatErrorKind.UNCLOSED_TAG, name=stack.pop()))
        except _FailFast:
            pass

        self.logger.info(
            "Verification complete",
            extra={"valid": report.is_valid, "error_count": report.error_count},
        )
        return report


def verify(text: str, config: Optional[VerifierConfig] = None) -> VerificationReport:
    """Verify ``text`` with a fresh verifier."""
    return XMLVerifier(config).verify(text)
