"""Pretty-printing of XML documents.

A single forward pass over scanner events: every tag goes on its own line,
indented by the current open-tag depth. An opening tag directly followed by
text and its own closing tag stays on one line. The formatter does not
validate; malformed input is laid out on a best-effort basis.
"""

from typing import List, Optional

from xml_editor.shared import FormatterConfig, get_logger
from xml_editor.tokenization import (
    MalformationEvent,
    ScanEvent,
    TagEvent,
    TagKind,
    TagScanner,
    TextEvent,
)


class XMLFormatter:
    """Indenting formatter.

    Examples:
        >>> print(XMLFormatter().format("<a><b>1</b></a>"), end="")
        <a>
          <b>1</b>
        </a>
    """

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or FormatterConfig()
        self.logger = get_logger(__name__, correlation_id, "formatter")

    def format(self, text: str) -> str:
        events = [
            event for event in TagScanner(text).events()
            if not isinstance(event, MalformationEvent)
        ]
        lines: List[str] = []
        depth = 0
        index = 0

        def emit(line: str) -> None:
            lines.append(f"{self.config.indent * depth}{line}\n")

        while index < len(events):
            event = events[index]
            index += 1

            if isinstance(event, TextEvent):
                content = event.stripped
                if content:
                    emit(content)
                continue

            tag = event.tag
            if tag.kind is TagKind.OPENING:
                inline = self._inline_content(events, index, tag.name)
                if inline is not None:
                    emit(f"{tag.text}{inline}</{tag.name}>")
                    index += 2
                    continue
                emit(tag.text)
                depth += 1
            elif tag.kind is TagKind.CLOSING:
                depth = max(depth - 1, 0)
                emit(tag.text)
            else:
                emit(tag.text)

        self.logger.debug("Formatting complete", extra={"line_count": len(lines)})
        return "".join(lines)

    @staticmethod
    def _inline_content(events: List[ScanEvent], index: int, name: str) -> Optional[str]:
        """Text of an opening tag followed directly by text and its closing tag."""
        if index + 1 >= len(events):
            return None
        text_event, closing_event = events[index], events[index + 1]
        if not isinstance(text_event, TextEvent) or not isinstance(closing_event, TagEvent):
            return None
        closing = closing_event.tag
        content = text_event.stripped
        if content and closing.kind is TagKind.CLOSING and closing.name == name:
            return content
        return None


def format_xml(text: str, config: Optional[FormatterConfig] = None) -> str:
    """Pretty-print ``text``."""
    return XMLFormatter(config).format(text)
