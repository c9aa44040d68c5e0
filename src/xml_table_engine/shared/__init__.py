"""Shared utilities for the XML table engine.

This module provides the error taxonomy, configuration objects, result types
and logging helpers used across all engine layers.
"""

from .errors import (
    DocumentIOError,
    DocumentParseError,
    EngineError,
    NoDocumentError,
    RowIndexError,
    StructureError,
    TableNotFoundError,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    OperationResult,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    EngineConfig,
    LayoutConfig,
    OutputConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DocumentIOError",
    "DocumentParseError",
    "EngineError",
    "NoDocumentError",
    "RowIndexError",
    "StructureError",
    "TableNotFoundError",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "OperationResult",
    "ConfigError",
    "ConfigValidationError",
    "EngineConfig",
    "LayoutConfig",
    "OutputConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
