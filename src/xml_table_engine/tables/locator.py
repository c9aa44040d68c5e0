"""Locate table sections by name."""

from typing import Iterator, List, Optional

from xml_table_engine.shared import LayoutConfig
from xml_table_engine.tree.builder import XMLDocument, XMLElement


def iter_table_sections(document: XMLDocument, layout: LayoutConfig) -> Iterator[XMLElement]:
    """Yield every table element in document order.

    The whole tree is scanned, so nested table sections are found too.
    """
    for element in document.iter_elements():
        if element.tag == layout.table_tag:
            yield element


def table_name(section: XMLElement, layout: LayoutConfig) -> str:
    return section.get_attribute(layout.name_attribute, "") or ""


def find_table(document: XMLDocument, name: str, layout: LayoutConfig) -> Optional[XMLElement]:
    """Return the first table section whose name matches exactly, or None.

    An empty name never matches, so unnamed sections cannot be addressed.
    """
    if not name:
        return None
    for section in iter_table_sections(document, layout):
        if table_name(section, layout) == name:
            return section
    return None


def list_table_names(document: XMLDocument, layout: LayoutConfig) -> List[str]:
    """Names of all named table sections, duplicates included.

    Sections without a name (or with an empty one) are skipped.
    """
    names = []
    for section in iter_table_sections(document, layout):
        name = table_name(section, layout)
        if name:
            names.append(name)
    return names
