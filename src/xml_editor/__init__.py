"""XML Editor.

Text-processing toolkit for XML social-network documents: structural
verification and repair, pretty-printing, minification, JSON conversion,
byte-pair-encoding compression and follower-network analytics.

Progressive API Disclosure:
- Level 1: Simple functions - verify(), fix(), format_xml(), minify(),
  to_json(), compress(), decompress()
- Level 2: Configured editor - XMLEditor class with named operations
"""

__version__ = "0.1.0"
__author__ = "XML Editor Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Advanced configuration
from .api import XMLEditor
from .codec import compress, decompress, from_hex_string, to_hex_string
from .formatting import format_xml, minify

# Configuration classes for advanced usage
from .shared.config import EditorConfig

# Core result objects for all API levels
from .shared.result import OperationResult, ResultKind
from .social import build_network
from .tokenization import FixResult, VerificationReport, fix, verify
from .tree import XMLNode, build_tree, to_json

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "verify",
    "fix",
    "format_xml",
    "minify",
    "to_json",
    "compress",
    "decompress",
    "to_hex_string",
    "from_hex_string",
    "build_tree",
    "build_network",

    # Level 2: Configured editor
    "XMLEditor",

    # Result objects and data structures
    "FixResult",
    "OperationResult",
    "ResultKind",
    "VerificationReport",
    "XMLNode",

    # Configuration classes for advanced usage
    "EditorConfig",
]
