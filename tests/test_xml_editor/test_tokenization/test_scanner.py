"""Tests for tag scanning primitives."""

from xml_editor.tokenization.scanner import (
    FormatErrorKind,
    LineIndex,
    MalformationEvent,
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


def classify(source: str):
    return classify_tag(source, 0, len(source) - 1)


class TestClassifyTag:
    """Test tag classification by first and last body characters."""

    def test_opening_tag_with_attributes(self) -> None:
        """Test that the name stops at whitespace."""
        tag = classify('<user id="1">')
        assert tag.kind is TagKind.OPENING
        assert tag.name == "user"
        assert tag.text == '<user id="1">'

    def test_closing_tag(self) -> None:
        """Test closing tag names."""
        tag = classify("</user >")
        assert tag.kind is TagKind.CLOSING
        assert tag.name == "user"

    def test_self_closing_tag(self) -> None:
        """Test that a trailing slash makes a self-closing tag."""
        tag = classify("<br/>")
        assert tag.kind is TagKind.SELF_CLOSING
        assert tag.name == "br"
        assert classify('<img src="x" />').kind is TagKind.SELF_CLOSING

    def test_declaration(self) -> None:
        """Test well-formed and malformed declarations."""
        tag = classify('<?xml version="1.0"?>')
        assert tag.kind is TagKind.DECLARATION
        assert tag.name == "xml"
        assert not tag.malformed
        assert classify('<?xml version="1.0">').malformed

    def test_comment_and_doctype(self) -> None:
        """Test that '!' bodies are comments."""
        assert classify("<!-- note -->").kind is TagKind.COMMENT
        assert classify("<!DOCTYPE users>").kind is TagKind.COMMENT

    def test_empty_body_is_comment(self) -> None:
        """Test that '<>' and '< >' are ignored as comments."""
        assert classify("<>").kind is TagKind.COMMENT
        assert classify("< >").kind is TagKind.COMMENT

    def test_structural_kinds(self) -> None:
        """Test which kinds affect the open-tag stack."""
        assert classify("<a>").is_structural
        assert classify("</a>").is_structural
        assert not classify("<a/>").is_structural


class TestBracketHelpers:
    """Test bracket matching helpers used by the fixer."""

    def test_leading_token(self) -> None:
        """Test token extraction."""
        assert leading_token("  name attr") == "name"
        assert leading_token("name/") == "name"

    def test_find_tag_end(self) -> None:
        """Test closing bracket lookup."""
        assert find_tag_end("<a>", 0) == 2
        assert find_tag_end("<a", 0) is None
        assert find_tag_end("<a<b>", 0) is None

    def test_orphan_close_bracket(self) -> None:
        """Test orphan detection."""
        assert is_orphan_close_bracket("a>", 1)
        assert is_orphan_close_bracket("<a>b>", 4)
        assert not is_orphan_close_bracket("<a>", 2)

    def test_orphan_tag_start_for_opening_tag(self) -> None:
        """Test that the '<' goes after the previous '>'."""
        assert orphan_tag_start("<r>b>", 4) == 3

    def test_orphan_tag_start_for_closing_tag(self) -> None:
        """Test that the '<' goes before the '/' of a closing tag."""
        text = "<a>x/a>"
        assert orphan_tag_start(text, text.index(">", 3)) == 4

    def test_orphan_tag_start_for_self_closing_tag(self) -> None:
        """Test that a '/' right before '>' is passed over."""
        text = "<a>\n  br/>"
        assert orphan_tag_start(text, len(text) - 1) == 6

    def test_unclosed_bracket_boundary_before_next_tag(self) -> None:
        """Test that the '>' goes before the next '<'."""
        assert unclosed_bracket_boundary("<a><b</a>", 3) == 5

    def test_unclosed_bracket_boundary_trims_spaces(self) -> None:
        """Test that trailing spaces stay outside the repaired tag."""
        assert unclosed_bracket_boundary("<a><b  </a>", 3) == 5

    def test_unclosed_bracket_boundary_at_end(self) -> None:
        """Test the boundary when no '>' follows at all."""
        assert unclosed_bracket_boundary("<a text", 0) == 2


class TestLineIndex:
    """Test offset to line mapping."""

    def test_line_numbers(self) -> None:
        """Test 1-based lines with positions on and after newlines."""
        index = LineIndex("ab\ncd\n\nef")
        assert index.line_of(0) == 1
        assert index.line_of(2) == 1
        assert index.line_of(3) == 2
        assert index.line_of(7) == 4


class TestTagScanner:
    """Test scanner events."""

    def test_simple_document(self) -> None:
        """Test tags and text in order."""
        events = list(TagScanner("<a>x</a>").events())
        assert [type(event) for event in events] == [TagEvent, TextEvent, TagEvent]
        assert events[1].content == "x"

    def test_tags_only(self) -> None:
        """Test the tags() shortcut."""
        names = [tag.name for tag in TagScanner("<a><b/></a>").tags()]
        assert names == ["a", "b", "a"]

    def test_unclosed_bracket_event(self) -> None:
        """Test that '<' without '>' before the next '<' is reported."""
        events = list(TagScanner("<a><b</a>").events())
        errors = [e for e in events if isinstance(e, MalformationEvent)]
        assert [e.kind for e in errors] == [FormatErrorKind.UNCLOSED_BRACKET]
        assert errors[0].position == 3

    def test_orphan_close_bracket_event(self) -> None:
        """Test that a stray '>' is reported."""
        events = list(TagScanner("<a>b></a>").events())
        errors = [e for e in events if isinstance(e, MalformationEvent)]
        assert [e.kind for e in errors] == [FormatErrorKind.ORPHAN_CLOSE_BRACKET]

    def test_malformed_declaration_event(self) -> None:
        """Test that a declaration without trailing '?' is reported and still yielded."""
        events = list(TagScanner('<?xml version="1.0"><a/>').events())
        assert isinstance(events[0], MalformationEvent)
        assert events[0].kind is FormatErrorKind.MALFORMED_DECLARATION
        assert isinstance(events[1], TagEvent)
        assert events[1].tag.kind is TagKind.DECLARATION

    def test_trailing_text(self) -> None:
        """Test that text after the last tag is yielded."""
        events = list(TagScanner("<a>tail").events())
        assert isinstance(events[-1], TextEvent)
        assert events[-1].stripped == "tail"

    def test_scanner_is_iterable(self) -> None:
        """Test iteration protocol."""
        assert len(list(TagScanner("<a></a>"))) == 2
