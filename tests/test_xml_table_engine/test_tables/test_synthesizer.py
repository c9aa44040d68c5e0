"""Tests for rebuilding table sections from grids."""

import pytest

from xml_table_engine.shared import LayoutConfig
from xml_table_engine.tables import (
    Grid,
    build_row,
    extract_grid,
    remove_rows,
    resolve_headers,
    synthesize_table,
)
from xml_table_engine.tree import DocumentBuilder, XMLElement


@pytest.fixture
def layout() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def table() -> XMLElement:
    return DocumentBuilder().build_from_bytes(
        b'<table name="Users" id="t1"><caption>People</caption>'
        b'<row><cell name="ID">1</cell><cell name="Name">Ann</cell></row>'
        b'<row><cell name="ID">2</cell><cell name="Name">Bob</cell></row></table>'
    ).root


class TestSynthesizer:
    """Test full-replace write-back of grids."""

    def test_resolve_headers(self, layout: LayoutConfig) -> None:
        """Test blank headers become placeholders."""
        assert resolve_headers(["A", "", "C"], layout) == ["A", "Column_2", "C"]

    def test_build_row_pads_missing_values(self, layout: LayoutConfig) -> None:
        """Test a short value list is padded with empty cells."""
        row = build_row(["1"], ["ID", "Name"], layout)

        assert [cell.get_attribute("name") for cell in row.children] == ["ID", "Name"]
        assert [cell.text for cell in row.children] == ["1", ""]

    def test_build_row_writes_none_as_empty(self, layout: LayoutConfig) -> None:
        """Test missing grid values are written as empty cells."""
        row = build_row([None, "x"], ["A", "B"], layout)

        assert [cell.text for cell in row.children] == ["", "x"]

    def test_build_row_drops_extra_values(self, layout: LayoutConfig) -> None:
        """Test values beyond the header count are not written."""
        row = build_row(["1", "2", "3"], ["A"], layout)

        assert len(row.children) == 1

    def test_replace_keeps_section_attributes_and_other_children(
        self, table: XMLElement, layout: LayoutConfig
    ) -> None:
        """Test only rows are replaced."""
        grid = Grid(headers=["ID", "Name"], rows=[["7", "Cy"]])

        removed = synthesize_table(table, grid, layout)

        assert removed == 2
        assert table.attributes == {"name": "Users", "id": "t1"}
        assert table.children[0].tag == "caption"
        assert extract_grid(table, layout) == grid

    def test_shape_change(self, table: XMLElement, layout: LayoutConfig) -> None:
        """Test columns and rows can both change."""
        grid = Grid(headers=["Email"], rows=[["a@x"], ["b@x"], ["c@x"]])

        synthesize_table(table, grid, layout)

        assert extract_grid(table, layout) == grid

    def test_empty_grid_removes_all_rows(self, table: XMLElement, layout: LayoutConfig) -> None:
        """Test writing an empty grid leaves a table without rows."""
        synthesize_table(table, Grid(), layout)

        assert table.find_all("row") == []
        assert extract_grid(table, layout) == Grid()

    def test_headers_without_rows_are_not_kept(self, table: XMLElement, layout: LayoutConfig) -> None:
        """Test headers only survive through a first row."""
        synthesize_table(table, Grid(headers=["A", "B"], rows=[]), layout)

        assert extract_grid(table, layout) == Grid()

    def test_remove_nested_rows(self, layout: LayoutConfig) -> None:
        """Test rows inside wrapper elements are removed as well."""
        section = DocumentBuilder().build_from_bytes(
            b"<table><body><row/><row/></body><row/></table>"
        ).root

        assert remove_rows(section, layout) == 3
        assert section.find_all("row") == []
        assert section.find("body") is not None
