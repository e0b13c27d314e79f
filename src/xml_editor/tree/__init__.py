"""Tag tree construction and JSON conversion.

Key Components:
    XMLTreeBuilder: Builds an XMLNode tree from one scanner pass
    XMLNode: Element with name, trimmed text content and children
    JSONEmitter: Serializes trees to JSON with array grouping of repeated tags
"""

from .builder import XMLNode, XMLTreeBuilder, build_tree
from .json_emitter import JSONEmitter, node_to_python, to_json

__all__ = [
    "JSONEmitter",
    "XMLNode",
    "XMLTreeBuilder",
    "build_tree",
    "node_to_python",
    "to_json",
]
