"""Table mapping between document sections and grids."""

from .extractor import extract_grid, extract_headers, extract_rows, placeholder_header
from .grid import Grid
from .locator import find_table, iter_table_sections, list_table_names
from .synthesizer import build_row, remove_rows, resolve_headers, synthesize_table

__all__ = [
    "Grid",
    "build_row",
    "extract_grid",
    "extract_headers",
    "extract_rows",
    "find_table",
    "iter_table_sections",
    "list_table_names",
    "placeholder_header",
    "remove_rows",
    "resolve_headers",
    "synthesize_table",
]
