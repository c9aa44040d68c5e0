"""Rebuild a table section's rows from a Grid.

Write-back is a full replace: every existing row is discarded and new row
and cell elements are created from the grid. The section element itself,
with its tag and attributes, is kept.
"""

from typing import List, Optional, Sequence

from xml_table_engine.shared import LayoutConfig
from xml_table_engine.tables.extractor import placeholder_header
from xml_table_engine.tables.grid import Grid
from xml_table_engine.tree.builder import XMLElement


def resolve_headers(headers: Sequence[str], layout: LayoutConfig) -> List[str]:
    """Replace blank headers with ``Column_<position>`` placeholders."""
    return [
        header if header else placeholder_header(position, layout)
        for position, header in enumerate(headers, 1)
    ]


def remove_rows(section: XMLElement, layout: LayoutConfig) -> int:
    """Detach every row element below ``section``; returns how many were removed."""
    rows = section.find_all(layout.row_tag)
    for row in rows:
        row.detach()
    return len(rows)


def build_row(values: Sequence[Optional[str]], headers: Sequence[str], layout: LayoutConfig) -> XMLElement:
    """Create one row with a named cell per header, padding with ``""``."""
    row = XMLElement(tag=layout.row_tag)
    for column, header in enumerate(headers):
        value = values[column] if column < len(values) else ""
        row.add_child(XMLElement(
            tag=layout.cell_tag,
            attributes={layout.name_attribute: header},
            text="" if value is None else str(value),
        ))
    return row


def synthesize_table(section: XMLElement, grid: Grid, layout: LayoutConfig) -> int:
    """Replace the rows of ``section`` with the content of ``grid``.

    Returns:
        Number of rows removed
    """
    headers = resolve_headers(grid.headers, layout)
    removed = remove_rows(section, layout)
    for values in grid.rows:
        section.add_child(build_row(values, headers, layout))
    return removed
