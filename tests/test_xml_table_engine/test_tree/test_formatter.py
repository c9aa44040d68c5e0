"""Tests for XML serialization."""

import pytest

from xml_table_engine.shared import OutputConfig
from xml_table_engine.tree import DocumentBuilder, OutputFormatter, XMLDocument, XMLElement
from xml_table_engine.tree.formatter import escape_attribute, escape_text


def build(data: bytes) -> XMLDocument:
    return DocumentBuilder().build_from_bytes(data)


class TestOutputFormatter:
    """Test fixed-indentation rendering."""

    def test_four_space_indentation(self) -> None:
        """Test nested elements are indented four spaces per level."""
        document = build(
            b'<database><table name="Users"><row><cell name="ID">1</cell>'
            b'<cell name="Name">Ann</cell></row></table></database>'
        )

        assert OutputFormatter().format(document) == (
            "<database>\n"
            '    <table name="Users">\n'
            "        <row>\n"
            '            <cell name="ID">1</cell>\n'
            '            <cell name="Name">Ann</cell>\n'
            "        </row>\n"
            "    </table>\n"
            "</database>\n"
        )

    def test_reformats_original_whitespace(self) -> None:
        """Test source indentation is replaced by the fixed convention."""
        document = build(b"<root>\n\t<a>1</a>\n  <b/>\n</root>")

        assert OutputFormatter().format(document) == "<root>\n    <a>1</a>\n    <b/>\n</root>\n"

    def test_custom_indent_width(self) -> None:
        """Test indent width comes from the configuration."""
        document = build(b"<root><a>1</a></root>")

        output = OutputFormatter(OutputConfig(indent_width=2)).format(document)

        assert output == "<root>\n  <a>1</a>\n</root>\n"

    @pytest.mark.parametrize("mode,source,expected_first_line", [
        ("preserve", b'<?xml version="1.0"?><r/>', '<?xml version="1.0" encoding="UTF-8"?>'),
        ("preserve", b"<r/>", "<r/>"),
        ("preserve", b'<?xml version="1.0" standalone="yes"?><r/>',
         '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'),
        ("always", b"<r/>", '<?xml version="1.0" encoding="UTF-8"?>'),
        ("never", b'<?xml version="1.0"?><r/>', "<r/>"),
    ])
    def test_declaration_modes(self, mode: str, source: bytes, expected_first_line: str) -> None:
        """Test the declaration is written according to the configured mode."""
        output = OutputFormatter(OutputConfig(xml_declaration=mode)).format(build(source))

        assert output.splitlines()[0] == expected_first_line

    def test_mixed_content_is_written_inline(self) -> None:
        """Test mixed content is not re-indented."""
        document = build(b"<root><p>Hello <b>big</b> world</p></root>")

        assert OutputFormatter().format(document) == (
            "<root>\n    <p>Hello <b>big</b> world</p>\n</root>\n"
        )

    def test_comments_and_processing_instructions(self) -> None:
        """Test comments and PIs are rendered in place."""
        document = build(b'<?xml-stylesheet href="a.xsl"?><root><!--note--><a>1</a></root>')

        assert OutputFormatter().format(document) == (
            '<?xml-stylesheet href="a.xsl"?>\n'
            "<root>\n"
            "    <!--note-->\n"
            "    <a>1</a>\n"
            "</root>\n"
        )

    def test_escaping(self) -> None:
        """Test special characters in text and attributes are escaped."""
        root = XMLElement(tag="cell", attributes={"name": 'say "hi"\n'}, text="a<b & c>")

        output = OutputFormatter().format(XMLDocument(root=root))

        assert output == '<cell name="say &quot;hi&quot;&#10;">a&lt;b &amp; c&gt;</cell>\n'

    def test_empty_text_self_closes(self) -> None:
        """Test an element with empty text is written as an empty element."""
        root = XMLElement(tag="cell", attributes={"name": "A"}, text="")

        assert OutputFormatter().format(XMLDocument(root=root)) == '<cell name="A"/>\n'

    def test_to_bytes_uses_configured_encoding(self) -> None:
        """Test characters outside the encoding become character references."""
        document = XMLDocument(root=XMLElement(tag="r", text="café"))

        assert OutputFormatter().to_bytes(document) == "<r>café</r>\n".encode("utf-8")
        assert OutputFormatter(OutputConfig(encoding="ascii")).to_bytes(document) == b"<r>caf&#233;</r>\n"

    def test_escape_helpers(self) -> None:
        """Test the module-level escape helpers."""
        assert escape_text("1 < 2 & 3 > 2") == "1 &lt; 2 &amp; 3 &gt; 2"
        assert escape_attribute("a\tb") == "a&#9;b"
