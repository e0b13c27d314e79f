"""Layout transformations: pretty-printing and minification."""

from .formatter import XMLFormatter, format_xml
from .minifier import XMLMinifier, minify

__all__ = [
    "XMLFormatter",
    "XMLMinifier",
    "format_xml",
    "minify",
]
