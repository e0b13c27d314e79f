"""Tests for tag tree construction."""

import pytest

from xml_editor.tree import XMLNode, XMLTreeBuilder, build_tree


class TestXMLNode:
    """Test node helpers."""

    def test_empty_name_rejected(self) -> None:
        """Test node validation."""
        with pytest.raises(ValueError):
            XMLNode("")

    def test_add_child_type_checked(self) -> None:
        """Test that only nodes can be children."""
        with pytest.raises(TypeError):
            XMLNode("a").add_child("b")  # type: ignore[arg-type]

    def test_lookup_helpers(self) -> None:
        """Test child and descendant lookups."""
        root = build_tree("<a><b>1</b><c><b>2</b></c><b>3</b></a>")
        assert root.find_child("b").content == "1"
        assert [n.content for n in root.find_children("b")] == ["1", "3"]
        assert [n.content for n in root.find_all("b")] == ["1", "2", "3"]
        assert root.child_text("c") == ""
        assert root.child_text("missing", "none") == "none"
        assert root.full_text == "1 2 3"


class TestTreeBuilder:
    """Test tree building rules."""

    def test_root_is_first_opening_tag(self) -> None:
        """Test that declarations and comments are skipped."""
        root = build_tree('<?xml version="1.0"?>\n<!-- c -->\n<users><user/></users>')
        assert root.name == "users"
        assert [child.name for child in root.children] == ["user"]

    def test_text_is_trimmed(self) -> None:
        """Test content trimming."""
        root = build_tree("<a>\n   hello  \n</a>")
        assert root.content == "hello"
        assert root.is_leaf

    def test_text_segments_joined(self) -> None:
        """Test mixed content around a child."""
        root = build_tree("<a> one <b>x</b> two </a>")
        assert root.content == "one two"
        assert root.children[0].content == "x"

    def test_self_closing_child(self) -> None:
        """Test that self-closing tags become empty leaves."""
        root = build_tree("<a><b/><c>1</c></a>")
        assert root.children[0].name == "b"
        assert root.children[0].content == ""
        assert root.children[0].is_leaf

    def test_nameless_tag_skipped(self) -> None:
        """Test that tags without a name produce no node."""
        root = build_tree("<a></><b/></a>")
        assert [child.name for child in root.children] == ["b"]
        assert build_tree("</>") is None

    def test_closing_tag_closes_matching_ancestor(self) -> None:
        """Test that a closing tag pops back to the matching element."""
        root = build_tree("<a><b><c>1</a><d/>")
        assert [child.name for child in root.children] == ["b"]
        assert root.children[0].children[0].name == "c"

    def test_stray_closing_tag_ignored(self) -> None:
        """Test that unmatched closing tags do not disturb the tree."""
        root = build_tree("<a><b>1</x></b></a>")
        assert root.children[0].content == "1"

    def test_later_top_level_elements_ignored(self) -> None:
        """Test that only the first root is kept."""
        root = build_tree("<a>1</a><b>2</b>")
        assert root.name == "a"
        assert root.is_leaf

    def test_unclosed_elements_kept(self) -> None:
        """Test that missing closing tags still produce a tree."""
        root = build_tree("<a><b>1")
        assert root.children[0].content == "1"

    def test_no_element(self) -> None:
        """Test that text without tags has no root."""
        assert build_tree("") is None
        assert build_tree("just text") is None
        assert XMLTreeBuilder().build("<!-- only -->") is None

    def test_iteration_order(self) -> None:
        """Test pre-order traversal."""
        root = build_tree("<a><b><c/></b><d/></a>")
        assert [node.name for node in root.iter()] == ["a", "b", "c", "d"]
