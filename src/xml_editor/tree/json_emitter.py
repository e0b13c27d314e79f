"""XML to JSON conversion.

A leaf element becomes its text; an element with children becomes an object
keyed by child name in first-seen order, where repeated names collect their
values into an array in document order. The root is wrapped in a one-key
object named after it.
"""

import json
from typing import Any, Dict, List, Optional, Union

from xml_editor.shared import JsonConfig, get_logger

from .builder import XMLNode, build_tree

JSONValue = Union[str, Dict[str, Any], List[Any]]

EMPTY_DOCUMENT = "{}"


def node_to_python(node: XMLNode) -> JSONValue:
    """Plain Python value mirroring the JSON form of ``node``."""
    if node.is_leaf:
        return node.content

    groups: Dict[str, List[XMLNode]] = {}
    for child in node.children:
        groups.setdefault(child.name, []).append(child)

    return {
        name: (
            [node_to_python(child) for child in members]
            if len(members) > 1
            else node_to_python(members[0])
        )
        for name, members in groups.items()
    }


class JSONEmitter:
    """Serializes tag trees to JSON text.

    Examples:
        >>> JSONEmitter(JsonConfig(indent=None)).emit_text("<a><b>1</b><b>2</b></a>")
        '{"a": {"b": ["1", "2"]}}'
    """

    def __init__(
        self,
        config: Optional[JsonConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or JsonConfig()
        self.logger = get_logger(__name__, correlation_id, "json_emitter")

    def emit(self, root: Optional[XMLNode]) -> str:
        if root is None:
            self.logger.warning("No root element found, emitting empty document")
            return EMPTY_DOCUMENT
        return json.dumps(
            {root.name: node_to_python(root)},
            indent=self.config.indent,
            ensure_ascii=self.config.ensure_ascii,
        )

    def emit_text(self, text: str) -> str:
        return self.emit(build_tree(text))


def to_json(text: str, config: Optional[JsonConfig] = None) -> str:
    """Convert XML text to JSON text; ``{}`` when no element is found."""
    return JSONEmitter(config).emit_text(text)
