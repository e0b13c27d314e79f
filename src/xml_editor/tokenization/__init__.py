"""Tag scanning, verification and repair.

Key Components:
    TagScanner: Read-only scan producing tag, text and malformation events
    XMLVerifier: Open-tag stack verification with a diagnostic report
    XMLFixer: In-place repair of the error classes the verifier reports
"""

from .recovery import FixResult, RepairRecord, XMLFixer, fix
from .scanner import (
    FormatErrorKind,
    LineIndex,
    MalformationEvent,
    ScanEvent,
    Tag,
    TagEvent,
    TagKind,
    TagScanner,
    TextEvent,
    classify_tag,
    find_tag_end,
    is_orphan_close_bracket,
    leading_token,
    orphan_tag_start,
    unclosed_bracket_boundary,
)
from .verification import (
    INVALID_MESSAGE,
    VALID_MESSAGE,
    FormatError,
    VerificationReport,
    XMLVerifier,
    verify,
)

__all__ = [
    "INVALID_MESSAGE",
    "VALID_MESSAGE",
    "FixResult",
    "FormatError",
    "FormatErrorKind",
    "LineIndex",
    "MalformationEvent",
    "RepairRecord",
    "ScanEvent",
    "Tag",
    "TagEvent",
    "TagKind",
    "TagScanner",
    "TextEvent",
    "VerificationReport",
    "XMLFixer",
    "XMLVerifier",
    "classify_tag",
    "find_tag_end",
    "fix",
    "is_orphan_close_bracket",
    "leading_token",
    "orphan_tag_start",
    "unclosed_bracket_boundary",
    "verify",
]
