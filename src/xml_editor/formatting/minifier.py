"""Whitespace minification of XML documents."""

from typing import List, Optional

from xml_editor.shared import MinifierConfig, get_logger
from xml_editor.tokenization.scanner import WHITESPACE


class XMLMinifier:
    """Single-pass whitespace stripper.

    Whitespace inside tags is removed (or collapsed to single spaces when
    ``preserve_tag_spacing`` is set). Outside tags every whitespace run becomes
    one space, and no space follows another space, a '>' or the start of the
    output.

    Examples:
        >>> XMLMinifier().minify("<a>\\n  <b> hello   world </b>\\n</a>")
        '<a><b>hello world </b></a>'
    """

    def __init__(
        self,
        config: Optional[MinifierConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or MinifierConfig()
        self.logger = get_logger(__name__, correlation_id, "minifier")

    def minify(self, text: str) -> str:
        output: List[str] = []
        in_tag = False
        preserve = self.config.preserve_tag_spacing

        for char in text:
            if char == "<":
                in_tag = True
                output.append(char)
            elif char == ">":
                if in_tag and output and output[-1] == " ":
                    output.pop()
                in_tag = False
                output.append(char)
            elif in_tag:
                if char not in WHITESPACE:
                    output.append(char)
                elif preserve and output[-1] not in (" ", "<"):
                    output.append(" ")
            else:
                if char in WHITESPACE:
                    if not output or output[-1] in (" ", ">"):
                        continue
                    char = " "
                output.append(char)

        result = "".join(output)
        self.logger.debug(
            "Minification complete",
            extra={"input_size": len(text), "output_size": len(result)},
        )
        return result


def minify(text: str, config: Optional[MinifierConfig] = None) -> str:
    """Strip insignificant whitespace from ``text``."""
    return XMLMinifier(config).minify(text)
