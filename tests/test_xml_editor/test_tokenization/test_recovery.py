"""Tests for structural repair."""

import pytest

from xml_editor.tokenization import FormatErrorKind, XMLFixer, fix, verify


BROKEN_DOCUMENTS = [
    "<a><b></a>",
    "<a>text",
    "</x><a></a>",
    "<a><b</a>",
    "<r>b>text</r>",
    '<?xml version="1.0"><a></a>',
    "<users>\n  <user>\n    <id>1\n  </user>\n",
    "<a><b><c></a>",
]


class TestFixer:
    """Test individual repairs."""

    def test_mismatched_tag_replaced(self) -> None:
        """Test that '<a><b></a>' becomes well nested."""
        assert fix("<a><b></a>") == "<a><b></b></a>"

    def test_unclosed_tag_closed(self) -> None:
        """Test that open tags are closed at the end."""
        assert fix("<a>text") == "<a>text</a>"

    def test_unclosed_tags_closed_innermost_first(self) -> None:
        """Test the order of appended closing tags."""
        assert fix("<a><b>") == "<a><b></b></a>"

    def test_orphan_closing_tag_removed(self) -> None:
        """Test that a closing tag with nothing open is dropped."""
        assert fix("</x><a></a>") == "<a></a>"

    def test_unclosed_bracket_completed(self) -> None:
        """Test that a '>' is inserted before the next tag."""
        assert fix("<a><b</a>") == "<a><b></b></a>"

    def test_orphan_close_bracket_completed(self) -> None:
        """Test that the missing '<' is inserted."""
        assert fix("<r>b>text</r>") == "<r><b>text</b></r>"

    def test_orphan_closing_bracket_of_closing_tag(self) -> None:
        """Test a closing tag missing its '<'."""
        assert fix("<a>x/a>") == "<a>x</a>"

    def test_malformed_declaration_completed(self) -> None:
        """Test that a '?' is added to the declaration."""
        assert fix('<?xml version="1.0"><a></a>') == '<?xml version="1.0"?><a></a>'

    def test_valid_document_untouched(self) -> None:
        """Test that valid input is returned unchanged."""
        text = '<?xml version="1.0"?>\n<a>\n  <b/>\n  <c>1</c>\n</a>\n'
        result = XMLFixer().fix(text)
        assert result.text == text
        assert not result.changed
        assert result.repair_count == 0


class TestRepairRecords:
    """Test the repair log."""

    def test_records_describe_edits(self) -> None:
        """Test kinds and descriptions for a mismatch fix."""
        result = XMLFixer().fix("<a><b></a>")
        kinds = [repair.kind for repair in result.repairs]
        assert kinds == [FormatErrorKind.MISMATCHED_TAG, FormatErrorKind.UNCLOSED_TAG]
        assert result.repairs[0].description == "Replaced </a> with </b>"
        assert result.repairs[1].description == "Added missing closing tag </a>"

    def test_record_line_numbers(self) -> None:
        """Test that repairs are located by line."""
        result = XMLFixer().fix("<a>\n</x>\n</a>")
        assert result.repairs[0].line == 2


class TestFixerProperties:
    """Test properties every repair must satisfy."""

    @pytest.mark.parametrize("text", BROKEN_DOCUMENTS)
    def test_fixed_output_verifies(self, text: str) -> None:
        """Test that fixed output has no structural errors."""
        assert verify(fix(text)).is_valid

    @pytest.mark.parametrize("text", BROKEN_DOCUMENTS)
    def test_fix_is_idempotent(self, text: str) -> None:
        """Test that fixing twice changes nothing more."""
        once = fix(text)
        assert fix(once) == once
