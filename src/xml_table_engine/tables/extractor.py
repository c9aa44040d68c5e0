"""Project a table section into a Grid.

Headers come from the first row only. Every row, the first included,
contributes its cell texts up to the header count; short rows are not padded.
"""

from typing import List, Optional

from xml_table_engine.shared import LayoutConfig
from xml_table_engine.tables.grid import Grid
from xml_table_engine.tree.builder import XMLElement


def placeholder_header(position: int, layout: LayoutConfig) -> str:
    """Generated header for a 1-based column position."""
    return f"{layout.placeholder_prefix}{position}"


def extract_headers(section: XMLElement, layout: LayoutConfig) -> List[str]:
    """Column headers defined by the first row of ``section``."""
    first_row = section.find(layout.row_tag)
    if first_row is None:
        return []

    headers = []
    for position, cell in enumerate(first_row.find_all(layout.cell_tag), 1):
        name = cell.get_attribute(layout.name_attribute)
        headers.append(name if name else placeholder_header(position, layout))
    return headers


def extract_rows(
    section: XMLElement,
    layout: LayoutConfig,
    column_count: Optional[int] = None
) -> List[List[str]]:
    """Cell texts of every row, truncated to ``column_count`` cells."""
    rows = []
    for row in section.find_all(layout.row_tag):
        values = [cell.direct_text for cell in row.find_all(layout.cell_tag)]
        if column_count is not None:
            values = values[:column_count]
        rows.append(values)
    return rows


def extract_grid(section: XMLElement, layout: LayoutConfig) -> Grid:
    """Build a grid snapshot of ``section`` without modifying it."""
    headers = extract_headers(section, layout)
    return Grid(headers=headers, rows=extract_rows(section, layout, len(headers)))
