"""XML Table Engine.

Edit tables embedded in XML documents and write them back without
disturbing the rest of the document.

Progressive API Disclosure:
- Level 1: DocumentEngine - load, list/get/replace tables, save
- Level 2: Table functions - locate, extract and synthesize table sections
- Level 3: Document tree - DocumentBuilder, XMLDocument, OutputFormatter
"""

__version__ = "0.1.0"
__author__ = "XML Table Engine Team"

from .api import DocumentEngine
from .shared import (
    DocumentIOError,
    DocumentParseError,
    EngineConfig,
    EngineError,
    NoDocumentError,
    OperationResult,
    RowIndexError,
    StructureError,
    TableNotFoundError,
)
from .tables import Grid
from .tree import XMLDocument, XMLElement

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Engine and its value types
    "DocumentEngine",
    "Grid",
    "OperationResult",
    "EngineConfig",

    # Errors
    "EngineError",
    "DocumentIOError",
    "DocumentParseError",
    "StructureError",
    "TableNotFoundError",
    "NoDocumentError",
    "RowIndexError",

    # Document tree
    "XMLDocument",
    "XMLElement",
]
