"""Result objects and diagnostic types for engine operations.

Every public engine operation returns an ``OperationResult`` so that callers
(a GUI shell, the CLI) can branch on success without try/except, while still
having access to the typed error and any non-fatal diagnostics.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Generic, List, Optional, TypeVar

from xml_table_engine.shared.errors import EngineError

T = TypeVar("T")


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a single engine operation."""

    success: bool = True
    value: Optional[T] = None
    error: Optional[EngineError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    processing_time_ms: float = 0.0

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "OperationResult[T]":
        """Build a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: EngineError) -> "OperationResult[T]":
        """Build a failed result carrying ``error``."""
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the carried error on failure."""
        if not self.success:
            if self.error is not None:
                raise self.error
            raise EngineError("Operation failed without an error")
        return self.value

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            details=details,
            correlation_id=correlation_id
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    @property
    def warnings(self) -> List[DiagnosticEntry]:
        """Warning-level diagnostics."""
        return self.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
