"""Serialization of documents back to XML text.

The tree is rendered with a fixed indentation regardless of the source
formatting. Elements holding mixed content are written inline so that their
text is reproduced exactly.
"""

from typing import List, Optional

from xml_table_engine.shared import OutputConfig, get_logger
from xml_table_engine.tree.builder import NodeKind, XMLDocument, XMLElement


def escape_text(text: str) -> str:
    """Escape character data."""
    return (text
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;"))


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return (escape_text(value)
            .replace('"', "&quot;")
            .replace("\t", "&#9;")
            .replace("\n", "&#10;")
            .replace("\r", "&#13;"))


class OutputFormatter:
    """Render an ``XMLDocument`` as indented XML."""

    def __init__(self,
                 config: Optional[OutputConfig] = None,
                 correlation_id: Optional[str] = None) -> None:
        """Initialize output formatter.

        Args:
            config: Output settings (indent width, encoding, declaration mode)
            correlation_id: Optional correlation ID for session tracking
        """
        self.config = config or OutputConfig()
        self.logger = get_logger(__name__, correlation_id, "output_formatter")

    def format(self, document: XMLDocument) -> str:
        """Render ``document`` as a string ending with a newline."""
        lines: List[str] = []

        if self._should_write_declaration(document):
            lines.append(self._declaration(document))
        if document.doctype:
            lines.append(document.doctype)
        for node in document.prolog:
            self._format_node(node, 0, lines)
        if document.root is not None:
            self._format_node(document.root, 0, lines)
        for node in document.epilog:
            self._format_node(node, 0, lines)

        output = "\n".join(lines) + "\n"
        self.logger.debug(
            "Document formatted",
            extra={"line_count": len(lines), "output_length": len(output)}
        )
        return output

    def to_bytes(self, document: XMLDocument) -> bytes:
        """Render ``document`` encoded with the configured encoding."""
        return self.format(document).encode(self.config.encoding, "xmlcharrefreplace")

    def _should_write_declaration(self, document: XMLDocument) -> bool:
        if self.config.xml_declaration == "always":
            return True
        if self.config.xml_declaration == "never":
            return False
        return document.has_declaration

    def _declaration(self, document: XMLDocument) -> str:
        declaration = f'<?xml version="{document.version}" encoding="{self.config.encoding.upper()}"'
        if document.standalone is not None:
            declaration += f' standalone="{"yes" if document.standalone else "no"}"'
        return declaration + "?>"

    def _format_node(self, node: XMLElement, level: int, lines: List[str]) -> None:
        indent = " " * (self.config.indent_width * level)

        if not node.is_element or not node.children or _has_mixed_content(node):
            lines.append(indent + self._format_inline(node))
            return

        lines.append(f"{indent}<{_open_tag(node)}>")
        for child in node.children:
            self._format_node(child, level + 1, lines)
        lines.append(f"{indent}</{node.tag}>")

    def _format_inline(self, node: XMLElement) -> str:
        """Render a node and its subtree on one line, without added whitespace."""
        if node.kind is NodeKind.COMMENT:
            return f"<!--{node.text or ''}-->"
        if node.kind is NodeKind.PROCESSING_INSTRUCTION:
            data = f" {node.text}" if node.text else ""
            return f"<?{node.tag}{data}?>"

        if not node.text and not node.children:
            return f"<{_open_tag(node)}/>"

        parts = [f"<{_open_tag(node)}>", escape_text(node.text or "")]
        for child in node.children:
            parts.append(self._format_inline(child))
            parts.append(escape_text(child.tail or ""))
        parts.append(f"</{node.tag}>")
        return "".join(parts)


def _open_tag(element: XMLElement) -> str:
    parts = [element.tag]
    parts.extend(
        f'{name}="{escape_attribute(value)}"'
        for name, value in element.attributes.items()
    )
    return " ".join(parts)


def _has_mixed_content(element: XMLElement) -> bool:
    """Check whether non-blank text sits next to child nodes."""
    return bool(element.text) or any(child.tail for child in element.children)
