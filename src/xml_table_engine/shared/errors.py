"""Error taxonomy for the XML table engine.

Engine operations report these through ``OperationResult.error`` rather than
raising them; ``OperationResult.unwrap()`` re-raises for callers that prefer
exceptions.
"""

from typing import Optional


class EngineError(Exception):
    """Base exception for all engine failures."""


class DocumentIOError(EngineError):
    """The document file could not be read or written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot access '{path}'{detail}")
        self.path = path
        self.cause = cause


class DocumentParseError(EngineError):
    """The document is not well-formed XML."""

    def __init__(self, line: int, column: int, message: str) -> None:
        super().__init__(f"Parse error at line {line}, column {column}: {message}")
        self.line = line
        self.column = column
        self.message = message


class StructureError(EngineError):
    """The document has no root element."""


class TableNotFoundError(EngineError):
    """No table section carries the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Table '{name}' not found")
        self.name = name


class NoDocumentError(EngineError):
    """An operation that needs a loaded document was called without one."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: no document is loaded")
        self.operation = operation


class RowIndexError(EngineError):
    """A row index is outside the rows of a table."""

    def __init__(self, name: str, index: int, row_count: int) -> None:
        super().__init__(
            f"Row index {index} is out of range for table '{name}' "
            f"({row_count} rows)"
        )
        self.name = name
        self.index = index
        self.row_count = row_count
