"""Document engine: the single entry point callers drive.

The engine owns at most one document at a time and moves between two
states, no document and loaded. Every operation returns an
``OperationResult``; failures never leave partial changes behind.
"""

import os
import shutil
import tempfile
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Union

from xml_table_engine.shared import (
    DiagnosticSeverity,
    DocumentIOError,
    DocumentParseError,
    EngineConfig,
    EngineError,
    NoDocumentError,
    OperationResult,
    RowIndexError,
    StructureError,
    TableNotFoundError,
    get_logger,
)
from xml_table_engine.tables import (
    Grid,
    build_row,
    extract_grid,
    extract_headers,
    find_table,
    list_table_names,
    synthesize_table,
)
from xml_table_engine.tree import (
    DocumentBuilder,
    OutputFormatter,
    StructureValidator,
    XMLDocument,
    XMLElement,
)

PathType = Union[str, Path]

MS_PER_SECOND = 1000


class DocumentEngine:
    """Load a table document, expose its tables as grids and write edits back.

    Example:
        >>> engine = DocumentEngine()
        >>> engine.load("inventory.xml").success
        True
        >>> grid = engine.get_table("Users").unwrap()
        >>> grid.append_row(["3", "Cy"])
        >>> engine.replace_table("Users", grid).success
        True
        >>> engine.save().success
        True
    """

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 correlation_id: Optional[str] = None) -> None:
        """Initialize document engine.

        Args:
            config: Engine configuration (defaults to ``EngineConfig()``)
            correlation_id: Optional correlation ID for session tracking
        """
        self.config = config or EngineConfig()
        self.correlation_id = correlation_id or uuid.uuid4().hex[:12]
        self.logger = get_logger(__name__, self.correlation_id, "document_engine")

        self._builder = DocumentBuilder(self.correlation_id)
        self._validator = StructureValidator(self.config.layout, self.correlation_id)
        self._formatter = OutputFormatter(self.config.output, self.correlation_id)

        self._document: Optional[XMLDocument] = None
        self._path: Optional[str] = None
        self._table_names: List[str] = []

    @property
    def is_loaded(self) -> bool:
        """True while a document is open."""
        return self._document is not None

    @property
    def current_path(self) -> Optional[str]:
        """Path of the open document, or None."""
        return self._path

    @property
    def document(self) -> Optional[XMLDocument]:
        """The open document tree, or None."""
        return self._document

    def load(self, path: PathType) -> OperationResult[None]:
        """Open the document at ``path``, replacing any open document.

        Unsaved edits to the previous document are discarded on success. On
        failure the previous document, if any, stays open unchanged.

        Args:
            path: File to open

        Returns:
            OperationResult; the error is a DocumentIOError,
            DocumentParseError or StructureError on failure
        """
        start_time = time.time()
        path_str = os.fspath(path) if path else ""

        self.logger.info("Loading document", extra={"path": path_str})

        if not path_str:
            return self._fail("load", DocumentIOError(path_str, ValueError("Empty file path")), start_time)

        try:
            data = Path(path_str).read_bytes()
        except OSError as e:
            return self._fail("load", DocumentIOError(path_str, e), start_time)

        try:
            document = self._builder.build_from_bytes(data)
        except DocumentParseError as e:
            return self._fail("load", e, start_time)

        validation = self._validator.validate(document)
        if not validation.success:
            message = "; ".join(issue.message for issue in validation.issues)
            error = StructureError(message or "Invalid document structure")
            return self._fail("load", error, start_time)

        self._document = document
        self._path = path_str
        self._refresh_table_names()

        result: OperationResult[None] = OperationResult.ok()
        for issue in validation.issues:
            result.add_diagnostic(
                issue.severity,
                issue.message,
                "structure_validator",
                correlation_id=self.correlation_id
            )
            self.logger.warning(issue.message, extra={"path": path_str})

        self.logger.info(
            "Document loaded",
            extra={
                "path": path_str,
                "root_tag": validation.root_tag,
                "table_count": len(self._table_names),
            }
        )
        return self._finish(result, start_time)

    def close(self) -> None:
        """Discard the open document without saving."""
        if self._document is not None:
            self.logger.info("Document closed", extra={"path": self._path})
        self._document = None
        self._path = None
        self._table_names = []

    def list_tables(self) -> List[str]:
        """Names of the tables in document order, duplicates included.

        Returns an empty list when no document is loaded.
        """
        if self._document is None:
            self.logger.warning("list_tables called with no document loaded")
            return []
        return list(self._table_names)

    def get_table(self, name: str) -> OperationResult[Grid]:
        """Snapshot of table ``name`` as a grid."""
        start_time = time.time()
        section = self._locate("read table", name)
        if isinstance(section, EngineError):
            return self._fail("get_table", section, start_time)

        grid = extract_grid(section, self.config.layout)
        self.logger.debug(
            "Table extracted",
            extra={"table": name, "columns": grid.column_count, "rows": grid.row_count}
        )
        return self._finish(OperationResult.ok(grid), start_time)

    def replace_table(self, name: str, grid: Grid) -> OperationResult[None]:
        """Rebuild the rows of table ``name`` from ``grid``, in memory only."""
        start_time = time.time()
        section = self._locate("replace table", name)
        if isinstance(section, EngineError):
            return self._fail("replace_table", section, start_time)

        removed = synthesize_table(section, grid, self.config.layout)
        self._refresh_table_names()

        self.logger.info(
            "Table replaced",
            extra={
                "table": name,
                "rows_removed": removed,
                "rows_written": grid.row_count,
                "columns": grid.column_count,
            }
        )
        return self._finish(OperationResult.ok(), start_time)

    def add_row(self, name: str, values: Iterable[str]) -> OperationResult[None]:
        """Append one row to table ``name``.

        Cells follow the headers of the table's current first row; missing
        values are written as empty strings and extra values are ignored.
        """
        start_time = time.time()
        section = self._locate("add row", name)
        if isinstance(section, EngineError):
            return self._fail("add_row", section, start_time)

        headers = extract_headers(section, self.config.layout)
        section.add_child(build_row(list(values), headers, self.config.layout))

        self.logger.info("Row added", extra={"table": name, "columns": len(headers)})
        return self._finish(OperationResult.ok(), start_time)

    def delete_row(self, name: str, index: int) -> OperationResult[None]:
        """Remove the row at 0-based ``index`` from table ``name``."""
        start_time = time.time()
        section = self._locate("delete row", name)
        if isinstance(section, EngineError):
            return self._fail("delete_row", section, start_time)

        rows = section.find_all(self.config.layout.row_tag)
        if not (0 <= index < len(rows)):
            return self._fail("delete_row", RowIndexError(name, index, len(rows)), start_time)

        rows[index].detach()
        self._refresh_table_names()

        self.logger.info("Row deleted", extra={"table": name, "index": index})
        return self._finish(OperationResult.ok(), start_time)

    def save(self) -> OperationResult[None]:
        """Write the open document back to the path it was loaded from."""
        start_time = time.time()
        if self._document is None or not self._path:
            return self._fail("save", NoDocumentError("save"), start_time)

        data = self._formatter.to_bytes(self._document)
        try:
            if self.config.output.atomic_save:
                _write_atomic(self._path, data)
            else:
                Path(self._path).write_bytes(data)
        except OSError as e:
            return self._fail("save", DocumentIOError(self._path, e), start_time)

        self.logger.info(
            "Document saved",
            extra={"path": self._path, "bytes_written": len(data)}
        )
        return self._finish(OperationResult.ok(), start_time)

    def _locate(self, operation: str, name: str) -> Union[XMLElement, EngineError]:
        """Find table ``name``, or the error explaining why it cannot be used."""
        if self._document is None:
            return NoDocumentError(operation)

        section = find_table(self._document, name, self.config.layout)
        if section is None:
            return TableNotFoundError(name)
        return section

    def _refresh_table_names(self) -> None:
        if self._document is None:
            self._table_names = []
        else:
            self._table_names = list_table_names(self._document, self.config.layout)

    def _fail(self, operation: str, error: EngineError, start_time: float) -> OperationResult:
        self.logger.warning(
            f"{operation} failed: {error}",
            extra={"operation": operation, "error_type": type(error).__name__}
        )
        result: OperationResult = OperationResult.fail(error)
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            str(error) or type(error).__name__,
            "document_engine",
            details={"operation": operation},
            correlation_id=self.correlation_id
        )
        return self._finish(result, start_time)

    @staticmethod
    def _finish(result: OperationResult, start_time: float) -> OperationResult:
        result.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        return result


def _write_atomic(path: str, data: bytes) -> None:
    """Write ``data`` to a temporary sibling file, then move it over ``path``."""
    target = Path(os.path.realpath(path))
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        if target.exists():
            shutil.copymode(str(target), tmp_name)
        os.replace(tmp_name, str(target))
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
