"""Document tree layer for the XML table engine.

Key Components:
    XMLElement: Single node with tag, attributes, text, tail and children
    XMLDocument: Root container with declaration, doctype, prolog and epilog
    DocumentBuilder: Strict lxml-backed parse into the engine's tree
    StructureValidator: Root-presence check with a no-tables warning
    OutputFormatter: Fixed-indentation serializer
"""

from .builder import (
    DocumentBuilder,
    NodeKind,
    XMLDocument,
    XMLElement,
)
from .formatter import OutputFormatter
from .validation import (
    StructureValidator,
    ValidationIssue,
    ValidationIssueType,
    ValidationResult,
)

__all__ = [
    "DocumentBuilder",
    "NodeKind",
    "XMLDocument",
    "XMLElement",
    "OutputFormatter",
    "StructureValidator",
    "ValidationIssue",
    "ValidationIssueType",
    "ValidationResult",
]
