"""In-memory tag tree built from a single scanner pass.

The tree is deliberately small: a node has a name, the trimmed text found
directly inside it and its children. Attributes are not parsed. Each node is
owned by exactly one parent and carries no back reference.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from xml_editor.shared import get_logger
from xml_editor.tokenization import TagEvent, TagKind, TagScanner, TextEvent


@dataclass(eq=False)
class XMLNode:
    """A single element of the tag tree."""

    name: str
    content: str = ""
    children: List["XMLNode"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.name:
            raise ValueError("Node name cannot be empty")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: "XMLNode") -> None:
        """Append a child element."""
        if not isinstance(child, XMLNode):
            raise TypeError("Child must be an XMLNode instance")
        self.children.append(child)

    def append_text(self, text: str) -> None:
        """Add a trimmed text segment to the node's content."""
        if not text:
            return
        self.content = f"{self.content} {text}" if self.content else text

    def find_child(self, name: str) -> Optional["XMLNode"]:
        """First direct child with a matching name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find_children(self, name: str) -> List["XMLNode"]:
        """All direct children with a matching name."""
        return [child for child in self.children if child.name == name]

    def child_text(self, name: str, default: str = "") -> str:
        """Content of the first direct child named ``name``."""
        child = self.find_child(name)
        return child.content if child is not None else default

    def find_all(self, name: str) -> List["XMLNode"]:
        """All descendants with a matching name, in document order."""
        return [node for node in self.iter() if node is not self and node.name == name]

    def iter(self) -> Iterator["XMLNode"]:
        """Pre-order traversal starting with this node."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    @property
    def full_text(self) -> str:
        """Content of this node and all descendants, space separated."""
        return " ".join(node.content for node in self.iter() if node.content)


class XMLTreeBuilder:
    """Builds a tree rooted at the first opening tag of a document.

    Declarations and comments are skipped, self-closing tags become empty
    children, a closing tag closes the nearest open element with the same
    name, and closing tags matching nothing open are ignored. Elements after
    the root has been closed are ignored.

    Examples:
        >>> root = XMLTreeBuilder().build("<a><b>1</b><b>2</b></a>")
        >>> [child.content for child in root.children]
        ['1', '2']
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, text: str) -> Optional[XMLNode]:
        root: Optional[XMLNode] = None
        stack: List[XMLNode] = []
        node_count = 0

        for event in TagScanner(text).events():
            if isinstance(event, TextEvent):
                if stack:
                    stack[-1].append_text(event.stripped)
                continue
            if not isinstance(event, TagEvent):
                continue

            tag = event.tag
            if tag.kind in (TagKind.OPENING, TagKind.SELF_CLOSING):
                # Nameless tags such as "</>" are dropped like comments
                if not tag.name:
                    continue
                node = XMLNode(tag.name)
                if stack:
                    stack[-1].add_child(node)
                elif root is None:
                    root = node
                else:
                    continue
                node_count += 1
                if tag.kind is TagKind.OPENING:
                    stack.append(node)
            elif tag.kind is TagKind.CLOSING:
                for depth in range(len(stack) - 1, -1, -1):
                    if stack[depth].name == tag.name:
                        del stack[depth:]
                        break

        self.logger.debug(
            "Tree built",
            extra={"root": root.name if root else None, "node_count": node_count},
        )
        return root


def build_tree(text: str) -> Optional[XMLNode]:
    """Build the tag tree of ``text``; None when it has no opening tag."""
    return XMLTreeBuilder().build(text)
