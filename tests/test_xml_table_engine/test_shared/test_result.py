"""Tests for operation results, diagnostics and the error taxonomy."""

import pytest

from xml_table_engine.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    DocumentIOError,
    DocumentParseError,
    EngineError,
    NoDocumentError,
    OperationResult,
    RowIndexError,
    TableNotFoundError,
)


class TestDiagnosticEntry:
    """Test diagnostic entry validation."""

    def test_empty_message_rejected(self) -> None:
        """Test that an empty message raises."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "engine")

    def test_empty_component_rejected(self) -> None:
        """Test that an empty component raises."""
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "message", "")


class TestOperationResult:
    """Test operation result construction and access."""

    def test_ok_result(self) -> None:
        """Test successful results are truthy and unwrap to their value."""
        result = OperationResult.ok(["Users"])

        assert result
        assert result.error is None
        assert result.unwrap() == ["Users"]

    def test_failed_result_unwrap_raises(self) -> None:
        """Test unwrap re-raises the carried error."""
        error = TableNotFoundError("Missing")
        result: OperationResult[None] = OperationResult.fail(error)

        assert not result
        with pytest.raises(TableNotFoundError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_failure_without_error(self) -> None:
        """Test unwrap of a bare failure raises the base error."""
        with pytest.raises(EngineError):
            OperationResult(success=False).unwrap()

    def test_diagnostics_by_severity(self) -> None:
        """Test diagnostics can be filtered by severity."""
        result: OperationResult[None] = OperationResult.ok()
        result.add_diagnostic(DiagnosticSeverity.WARNING, "No tables", "validator")
        result.add_diagnostic(DiagnosticSeverity.INFO, "Loaded", "engine", {"tables": 0})

        assert len(result.diagnostics) == 2
        assert [d.message for d in result.warnings] == ["No tables"]
        info = result.get_diagnostics_by_severity(DiagnosticSeverity.INFO)
        assert info[0].details == {"tables": 0}


class TestErrors:
    """Test error messages and attributes."""

    def test_error_hierarchy(self) -> None:
        """Test all engine errors share a base class."""
        for error in (
            DocumentIOError("a.xml"),
            DocumentParseError(1, 1, "bad"),
            TableNotFoundError("T"),
            NoDocumentError("save"),
            RowIndexError("T", 3, 2),
        ):
            assert isinstance(error, EngineError)

    def test_io_error_message(self) -> None:
        """Test the path and cause appear in the message."""
        cause = FileNotFoundError("missing")
        error = DocumentIOError("data.xml", cause)

        assert str(error) == "Cannot access 'data.xml': missing"
        assert error.cause is cause

    def test_parse_error_position(self) -> None:
        """Test the parse error keeps line and column."""
        error = DocumentParseError(3, 7, "Opening and ending tag mismatch")

        assert (error.line, error.column) == (3, 7)
        assert str(error).startswith("Parse error at line 3, column 7")

    def test_lookup_error_messages(self) -> None:
        """Test table and state error messages."""
        assert str(TableNotFoundError("Users")) == "Table 'Users' not found"
        assert str(NoDocumentError("save")) == "Cannot save: no document is loaded"
        assert RowIndexError("Users", 5, 2).row_count == 2
