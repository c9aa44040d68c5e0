"""Minimal structural validation for loaded documents.

Only root presence is a hard requirement. A document without any table
sections is accepted and reported with a warning, so callers can still open
it.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from xml_table_engine.shared import DiagnosticSeverity, LayoutConfig, get_logger
from xml_table_engine.tree.builder import XMLDocument


class ValidationIssueType(Enum):
    """Types of validation issues that can be detected."""

    MISSING_ROOT = "missing_root"
    NO_TABLES = "no_tables"


@dataclass
class ValidationIssue:
    """Single validation issue with detailed information."""

    issue_type: ValidationIssueType
    severity: DiagnosticSeverity
    message: str
    suggested_fix: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate issue data."""
        if not self.message:
            raise ValueError("Validation issue message cannot be empty")


@dataclass
class ValidationResult:
    """Outcome of structural validation."""

    success: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    root_tag: Optional[str] = None
    table_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def error_count(self) -> int:
        """Get number of error-level issues."""
        return len([
            issue for issue in self.issues
            if issue.severity is DiagnosticSeverity.ERROR
        ])

    @property
    def warning_count(self) -> int:
        """Get number of warning-level issues."""
        return len([
            issue for issue in self.issues
            if issue.severity is DiagnosticSeverity.WARNING
        ])


class StructureValidator:
    """Check that a document can be opened as a table document."""

    def __init__(self,
                 layout: Optional[LayoutConfig] = None,
                 correlation_id: Optional[str] = None) -> None:
        """Initialize structure validator.

        Args:
            layout: Element names identifying table sections
            correlation_id: Optional correlation ID for session tracking
        """
        self.layout = layout or LayoutConfig()
        self.logger = get_logger(__name__, correlation_id, "structure_validator")

    def validate(self, document: XMLDocument) -> ValidationResult:
        """Validate ``document``.

        Args:
            document: Document to check

        Returns:
            ValidationResult; ``success`` is False only if there is no root
        """
        start_time = time.time()
        result = ValidationResult()

        if document.root is None:
            result.success = False
            result.issues.append(ValidationIssue(
                issue_type=ValidationIssueType.MISSING_ROOT,
                severity=DiagnosticSeverity.ERROR,
                message="Document has no root element",
                suggested_fix="Ensure the document contains a single root element"
            ))
            self.logger.warning("Structure validation failed: no root element")
        else:
            result.root_tag = document.root.tag
            result.table_count = len(document.find_all(self.layout.table_tag))
            if result.table_count == 0:
                result.issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.NO_TABLES,
                    severity=DiagnosticSeverity.WARNING,
                    message=f"No <{self.layout.table_tag}> elements found"
                ))

        result.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Structure validation completed",
            extra={
                "success": result.success,
                "root_tag": result.root_tag,
                "table_count": result.table_count,
            }
        )
        return result
