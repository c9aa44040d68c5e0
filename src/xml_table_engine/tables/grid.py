"""Grid: the caller-facing tabular projection of a table section.

A grid is a snapshot. Editing it has no effect on the document until it is
written back with ``DocumentEngine.replace_table``.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass
class Grid:
    """Column headers plus ordered rows of cell strings.

    Rows may be shorter than the header list; missing positions read as
    empty strings.
    """

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def cell(self, row: int, column: int) -> str:
        """Value at ``(row, column)``, or ``""`` if the row is short."""
        values = self.rows[row]
        return values[column] if column < len(values) else ""

    def set_cell(self, row: int, column: int, value: str) -> None:
        """Set a cell value, padding a short row with empty strings."""
        if not (0 <= column < self.column_count):
            raise IndexError(f"Column index {column} out of range")
        values = self.rows[row]
        if len(values) <= column:
            values.extend([""] * (column + 1 - len(values)))
        values[column] = value

    def column_index(self, header: str) -> int:
        """Position of the first column named ``header``."""
        try:
            return self.headers.index(header)
        except ValueError:
            raise KeyError(f"No column named '{header}'") from None

    def append_row(self, values: Optional[Iterable[Optional[str]]] = None) -> None:
        """Append a row; an omitted row is all empty strings."""
        self.rows.append(self._new_row(values))

    def insert_row(self, index: int, values: Optional[Iterable[Optional[str]]] = None) -> None:
        """Insert a row before ``index``."""
        self.rows.insert(index, self._new_row(values))

    def delete_row(self, index: int) -> List[str]:
        """Remove and return the row at ``index``."""
        return self.rows.pop(index)

    def _new_row(self, values: Optional[Iterable[Optional[str]]]) -> List[str]:
        if values is None:
            return [""] * self.column_count
        return ["" if value is None else str(value) for value in values]

    def copy(self) -> "Grid":
        """Deep copy of headers and rows."""
        return Grid(headers=list(self.headers), rows=[list(row) for row in self.rows])

    def to_records(self) -> List[Dict[str, str]]:
        """Rows as header-keyed dictionaries; short rows fill with ``""``."""
        return [
            {header: self.cell(index, column) for column, header in enumerate(self.headers)}
            for index in range(self.row_count)
        ]

    def to_dict(self) -> Dict[str, List]:
        """Convert grid to a JSON-friendly dictionary."""
        return {"headers": list(self.headers), "rows": [list(row) for row in self.rows]}
