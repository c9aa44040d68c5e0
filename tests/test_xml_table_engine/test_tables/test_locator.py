"""Tests for table section lookup."""

import pytest

from xml_table_engine.shared import LayoutConfig
from xml_table_engine.tables import find_table, iter_table_sections, list_table_names
from xml_table_engine.tree import DocumentBuilder, XMLDocument

SOURCE = b"""<database>
    <table name="Users"/>
    <table/>
    <table name=""/>
    <group>
        <table name="Orders"/>
    </group>
    <table name="Users" id="second"/>
</database>
"""


@pytest.fixture
def document() -> XMLDocument:
    return DocumentBuilder().build_from_bytes(SOURCE)


@pytest.fixture
def layout() -> LayoutConfig:
    return LayoutConfig()


class TestLocator:
    """Test table enumeration and lookup by name."""

    def test_iterates_all_sections(self, document: XMLDocument, layout: LayoutConfig) -> None:
        """Test every table element is visited, nested ones included."""
        assert len(list(iter_table_sections(document, layout))) == 5

    def test_list_skips_unnamed_and_keeps_duplicates(
        self, document: XMLDocument, layout: LayoutConfig
    ) -> None:
        """Test names are listed in document order."""
        assert list_table_names(document, layout) == ["Users", "Orders", "Users"]

    def test_find_returns_first_match(self, document: XMLDocument, layout: LayoutConfig) -> None:
        """Test duplicate names resolve to the first section."""
        section = find_table(document, "Users", layout)

        assert section is not None
        assert "id" not in section.attributes

    def test_find_nested(self, document: XMLDocument, layout: LayoutConfig) -> None:
        """Test a table inside a wrapper element is found."""
        section = find_table(document, "Orders", layout)

        assert section is not None
        assert section.parent.tag == "group"

    def test_lookup_is_exact(self, document: XMLDocument, layout: LayoutConfig) -> None:
        """Test matching is case-sensitive."""
        assert find_table(document, "users", layout) is None
        assert find_table(document, "Missing", layout) is None

    def test_empty_name_never_matches(self, document: XMLDocument, layout: LayoutConfig) -> None:
        """Test unnamed sections cannot be looked up with an empty name."""
        assert find_table(document, "", layout) is None

    def test_root_can_be_a_table(self, layout: LayoutConfig) -> None:
        """Test a table element at the root is also considered."""
        document = DocumentBuilder().build_from_bytes(b'<table name="Solo"><row/></table>')

        assert list_table_names(document, layout) == ["Solo"]
        assert find_table(document, "Solo", layout) is document.root
