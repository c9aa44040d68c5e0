"""Tests for correlation-aware logging."""

import logging

import pytest

from xml_table_engine.shared import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test structured fields attached to log records."""

    def test_records_carry_component_and_correlation(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test records include the component and correlation ID."""
        logger = get_logger("xml_table_engine.test", "abc123", "document_engine")

        with caplog.at_level(logging.INFO, logger="xml_table_engine.test"):
            logger.info("Document loaded", extra={"table_count": 2})

        record = caplog.records[0]
        assert record.getMessage() == "Document loaded"
        assert record.component == "document_engine"
        assert record.correlation_id == "abc123"
        assert record.table_count == 2

    def test_component_defaults_to_module_name(self) -> None:
        """Test the component falls back to the last name segment."""
        logger = CorrelationLogger("xml_table_engine.tables.locator")

        assert logger.component == "locator"

    def test_child_shares_correlation(self) -> None:
        """Test child loggers keep the correlation ID."""
        parent = get_logger("xml_table_engine.test", "session-1", "engine")

        child = parent.child("formatter")

        assert child.correlation_id == "session-1"
        assert child.component == "formatter"
        assert child.logger is parent.logger
