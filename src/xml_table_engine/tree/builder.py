"""Document model and strict document building for the XML table engine.

This module defines the in-memory tree the engine edits and the builder that
produces it from raw bytes. Parsing is strict: a document that is not
well-formed is rejected with the position of the first syntax error.
"""

import codecs
import re
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional, Tuple

from lxml import etree

from xml_table_engine.shared import DocumentParseError, get_logger

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
COMMENT_TAG = "#comment"
_DECLARATION_PATTERN = re.compile(r"<\?xml\s(?P<body>[^>]*?)\?>")
_STANDALONE_PATTERN = re.compile(r"""standalone\s*=\s*["'](yes|no)["']""")

_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


class NodeKind(Enum):
    """Kinds of node kept in the document tree."""

    ELEMENT = auto()
    COMMENT = auto()
    PROCESSING_INSTRUCTION = auto()


@dataclass(eq=False)
class XMLElement:
    """A single node of the document tree.

    Element nodes carry a tag, attributes, leading ``text`` and ordered
    children. ``tail`` holds the text that follows the node inside its parent,
    which keeps mixed content intact across edits. Comments and processing
    instructions use the same class with a different ``kind``.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["XMLElement"] = field(default_factory=list)
    tail: Optional[str] = None
    kind: NodeKind = NodeKind.ELEMENT
    parent: Optional["XMLElement"] = None

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")

        for child in self.children:
            child.parent = self

    def __repr__(self) -> str:
        return f"XMLElement(tag={self.tag!r}, attributes={self.attributes!r})"

    @classmethod
    def comment(cls, text: str) -> "XMLElement":
        """Create a comment node."""
        return cls(tag=COMMENT_TAG, text=text, kind=NodeKind.COMMENT)

    @classmethod
    def processing_instruction(cls, target: str, data: Optional[str] = None) -> "XMLElement":
        """Create a processing instruction node."""
        return cls(tag=target, text=data, kind=NodeKind.PROCESSING_INSTRUCTION)

    @property
    def is_element(self) -> bool:
        """Check whether this node is an element (not a comment or PI)."""
        return self.kind is NodeKind.ELEMENT

    @property
    def direct_text(self) -> str:
        """Concatenation of this element's own text children.

        Text nested inside child elements is not included.
        """
        parts = [self.text or ""]
        parts.extend(child.tail or "" for child in self.children)
        return "".join(parts)

    def add_child(self, child: "XMLElement") -> None:
        """Add a child element and establish parent relationship."""
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")

        child.parent = self
        self.children.append(child)

    def remove_child(self, child: "XMLElement") -> bool:
        """Detach a child element and clear its parent relationship.

        The child's tail stays in this element: it is appended to the tail of
        the previous sibling, or to this element's text.
        """
        for index, candidate in enumerate(self.children):
            if candidate is child:
                break
        else:
            return False

        if child.tail:
            if index > 0:
                previous = self.children[index - 1]
                previous.tail = (previous.tail or "") + child.tail
            else:
                self.text = (self.text or "") + child.tail
            child.tail = None

        del self.children[index]
        child.parent = None
        return True

    def detach(self) -> bool:
        """Remove this node from its parent, if any."""
        if self.parent is None:
            return False
        return self.parent.remove_child(self)

    def iter(self) -> Iterator["XMLElement"]:
        """Iterate over this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, tag: str) -> List["XMLElement"]:
        """Find all descendant elements with matching tag name, in document order."""
        results = []

        for child in self.children:
            if child.is_element and child.tag == tag:
                results.append(child)
            results.extend(child.find_all(tag))

        return results

    def find(self, tag: str) -> Optional["XMLElement"]:
        """Find first descendant element with matching tag name."""
        for child in self.children:
            if child.is_element and child.tag == tag:
                return child
            found = child.find(tag)
            if found is not None:
                return found
        return None

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)


@dataclass
class XMLDocument:
    """Root document container with declaration metadata.

    ``prolog`` and ``epilog`` hold the comments and processing instructions
    that appear before and after the root element.
    """

    root: Optional[XMLElement] = None
    version: str = "1.0"
    encoding: str = "utf-8"
    standalone: Optional[bool] = None
    has_declaration: bool = False
    doctype: Optional[str] = None
    prolog: List[XMLElement] = field(default_factory=list)
    epilog: List[XMLElement] = field(default_factory=list)

    def iter_elements(self) -> Iterator[XMLElement]:
        """Iterate over all element nodes in document order."""
        if self.root is None:
            return
        for node in self.root.iter():
            if node.is_element:
                yield node

    def find_all(self, tag: str) -> List[XMLElement]:
        """Find all elements with matching tag name, the root included."""
        return [element for element in self.iter_elements() if element.tag == tag]

    @property
    def element_count(self) -> int:
        """Total number of elements in the document."""
        return sum(1 for _ in self.iter_elements())


class DocumentBuilder:
    """Build an ``XMLDocument`` from raw bytes.

    lxml performs the well-formedness check; the resulting tree is converted
    into engine nodes so that no lxml objects outlive the load.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize document builder.

        Args:
            correlation_id: Optional correlation ID for session tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "document_builder")

    def _create_parser(self) -> etree.XMLParser:
        return etree.XMLParser(
            remove_blank_text=True,
            remove_comments=False,
            remove_pis=False,
            strip_cdata=True,
            no_network=True,
            load_dtd=False,
        )

    def build_from_bytes(self, data: bytes) -> XMLDocument:
        """Parse ``data`` into a document.

        Args:
            data: Raw document content

        Returns:
            XMLDocument with a root element

        Raises:
            DocumentParseError: If the content is not well-formed
        """
        start_time = time.time()

        if not data.strip():
            raise DocumentParseError(1, 1, "Document is empty")

        try:
            lxml_root = etree.fromstring(data, self._create_parser())
        except etree.XMLSyntaxError as e:
            line, column = e.position
            self.logger.debug(
                "Document is not well-formed",
                extra={"line": line, "column": column, "reason": e.msg}
            )
            raise DocumentParseError(line, column, e.msg) from e

        docinfo = lxml_root.getroottree().docinfo
        has_declaration, declared_standalone = _read_declaration(data)
        document = XMLDocument(
            root=self._convert_element(lxml_root, {}),
            version=docinfo.xml_version or "1.0",
            encoding=(docinfo.encoding or "utf-8").lower(),
            standalone=declared_standalone,
            has_declaration=has_declaration,
            doctype=docinfo.doctype or None,
        )

        for sibling in reversed(list(lxml_root.itersiblings(preceding=True))):
            node = self._convert_node(sibling, {})
            if node is not None:
                node.tail = None
                document.prolog.append(node)
        for sibling in lxml_root.itersiblings():
            node = self._convert_node(sibling, {})
            if node is not None:
                node.tail = None
                document.epilog.append(node)

        self.logger.debug(
            "Document built",
            extra={
                "root_tag": document.root.tag,
                "element_count": document.element_count,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return document

    def _convert_node(self, node: Any, parent_nsmap: Dict[Optional[str], str]) -> Optional[XMLElement]:
        """Convert one lxml node; unsupported node types are skipped."""
        if node.tag is etree.Comment:
            converted = XMLElement.comment(node.text or "")
        elif node.tag is etree.PI:
            converted = XMLElement.processing_instruction(node.target, node.text)
        elif isinstance(node.tag, str):
            converted = self._convert_element(node, parent_nsmap)
        else:
            self.logger.debug("Skipping unsupported node", extra={"node_type": type(node).__name__})
            return None

        converted.tail = _keep_text(node.tail)
        return converted

    def _convert_element(self, node: Any, parent_nsmap: Dict[Optional[str], str]) -> XMLElement:
        nsmap = dict(node.nsmap)
        attributes: Dict[str, str] = {}

        # Namespace declarations introduced on this element
        for prefix, uri in nsmap.items():
            if parent_nsmap.get(prefix) != uri:
                attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri

        for key, value in node.attrib.items():
            attributes[_qualified_attribute_name(key, nsmap)] = value

        element = XMLElement(
            tag=_qualified_tag(node),
            attributes=attributes,
            text=_keep_text(node.text),
        )

        for child in node:
            converted = self._convert_node(child, nsmap)
            if converted is not None:
                element.add_child(converted)

        return element


def _keep_text(text: Optional[str]) -> Optional[str]:
    """Drop whitespace-only text, as a DOM loader does by default."""
    if text is None or not text.strip():
        return None
    return text


def _qualified_tag(node: Any) -> str:
    local_name = etree.QName(node).localname
    return f"{node.prefix}:{local_name}" if node.prefix else local_name


def _qualified_attribute_name(key: str, nsmap: Dict[Optional[str], str]) -> str:
    if not key.startswith("{"):
        return key

    qname = etree.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"

    for prefix, uri in nsmap.items():
        if prefix is not None and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"

    return qname.localname


def _read_declaration(data: bytes) -> Tuple[bool, Optional[bool]]:
    """Check the raw content for an XML declaration and its standalone flag.

    The flag is None when the declaration omits it.
    """
    head = data[:256]
    for bom, encoding in _BYTE_ORDER_MARKS:
        if head.startswith(bom):
            text = head[len(bom):].decode(encoding, errors="ignore")
            break
    else:
        text = head.decode("latin-1")

    match = _DECLARATION_PATTERN.match(text)
    if match is None:
        return False, None

    standalone = _STANDALONE_PATTERN.search(match.group("body"))
    if standalone is None:
        return True, None
    return True, standalone.group(1) == "yes"
