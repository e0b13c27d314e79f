"""Tests for structural verification."""

from xml_editor.shared import VerifierConfig
from xml_editor.tokenization import (
    FormatErrorKind,
    VerificationReport,
    XMLVerifier,
    verify,
)
from xml_editor.tokenization.verification import FormatError


class TestValidDocuments:
    """Test documents without structural errors."""

    def test_nested_document(self):
        """Test that a well-nested document is valid."""
        report = verify("<a><b>1</b><c/></a>")
        assert report.is_valid
        assert report.render() == "Valid"
        assert str(report) == "Valid"

    def test_declaration_and_comment_ignored(self):
        """Test that declarations and comments do not touch the stack."""
        text = '<?xml version="1.0"?>\n<!-- users -->\n<users></users>'
        assert verify(text).is_valid

    def test_empty_input(self):
        """Test that empty text is valid."""
        assert verify("").is_valid


class TestStructuralErrors:
    """Test detection of each error kind."""

    def test_mismatched_tags(self):
        """Test '<a><b></a>' reports a mismatch and the unclosed root."""
        report = verify("<a><b></a>")
        kinds = [error.kind for error in report.errors]
        assert kinds == [FormatErrorKind.MISMATCHED_TAG, FormatErrorKind.UNCLOSED_TAG]
        mismatch = report.errors[0]
        assert mismatch.expected == "b"
        assert mismatch.found == "a"
        assert report.unclosed_tags == ["a"]

    def test_unclosed_tag(self):
        """Test that a tag left open is reported by name."""
        report = verify("<a>text")
        assert report.error_count == 1
        assert report.unclosed_tags == ["a"]

    def test_unclosed_tags_topmost_first(self):
        """Test the order of unclosed tags."""
        report = verify("<a><b><c>")
        assert report.unclosed_tags == ["c", "b", "a"]

    def test_orphan_closing_tag(self):
        """Test a closing tag with nothing open."""
        report = verify("</a>")
        assert [e.kind for e in report.errors] == [FormatErrorKind.ORPHAN_CLOSING_TAG]
        assert report.errors[0].message == "No matching opening tag for </a>"

    def test_orphan_close_bracket_line(self):
        """Test the line number of a stray '>'."""
        report = verify("<a>\nb>\n</a>")
        assert report.errors[0].kind is FormatErrorKind.ORPHAN_CLOSE_BRACKET
        assert report.errors[0].line == 2
        assert report.errors[0].describe() == "Error at line 2: Missing '<' for '>'"

    def test_unclosed_bracket(self):
        """Test a '<' without its '>'."""
        report = verify("<a>\n<b\n</a>")
        assert report.errors[0].kind is FormatErrorKind.UNCLOSED_BRACKET
        assert report.errors[0].describe() == "Error at line 2: Unclosed tag bracket"

    def test_malformed_declaration(self):
        """Test a declaration missing its trailing '?'."""
        report = verify('<?xml version="1.0"><a></a>')
        assert [e.kind for e in report.errors] == [FormatErrorKind.MALFORMED_DECLARATION]

    def test_input_not_modified(self):
        """Test that verification leaves its input untouched."""
        text = "<a><b></a>"
        verify(text)
        assert text == "<a><b></a>"


class TestReportRendering:
    """Test report text."""

    def test_invalid_report(self):
        """Test the full multi-line report."""
        report = verify("<a><b></a>")
        assert report.render() == (
            "Invalid\n"
            "Total Errors: 2\n"
            "Error at line 1: Mismatched tags: expected </b> but found </a>\n"
            "Error: Unclosed tags found:\n"
            "  - <a>\n"
        )

    def test_unlocated_error_description(self):
        """Test errors without a line."""
        error = FormatError(FormatErrorKind.UNCLOSED_TAG, name="x")
        assert error.describe() == "Error: Unclosed tag <x>"

    def test_empty_report_is_valid(self):
        """Test report defaults."""
        assert VerificationReport().is_valid


class TestFailFast:
    """Test the fail-fast configuration."""

    def test_stops_at_first_error(self):
        """Test that only the first error is kept."""
        verifier = XMLVerifier(VerifierConfig(fail_fast=True))
        report = verifier.verify("</x><a><b></a>")
        assert report.error_count == 1
        assert report.fail_fast
        assert report.errors[0].kind is FormatErrorKind.ORPHAN_CLOSING_TAG
