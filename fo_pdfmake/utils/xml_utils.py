"""Helpers to parse XSL-FO markup into the immutable element tree."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union
from xml.etree import ElementTree as ET

from fo_pdfmake.model.elements import Element, Node, TextRun


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` or ``prefix:`` qualifier from a tag or attribute name."""
    name = tag.split("}", 1)[-1]
    return name.split(":", 1)[-1]


def parse_xml(data: Union[str, bytes]) -> Element:
    """Parse XSL-FO markup from text or raw bytes into an element tree."""
    return from_etree(ET.fromstring(data))


def load_document(path: Path) -> Element:
    """Read and parse an XSL-FO file from disk."""
    return from_etree(ET.parse(path).getroot())


def from_etree(node: ET.Element) -> Element:
    """Convert an ElementTree node, keeping text and tails as ordered text runs."""
    children: List[Node] = []
    if node.text:
        children.append(TextRun(node.text))
    for child in node:
        if not isinstance(child.tag, str):
            # Comments and processing instructions only contribute their tail text.
            if child.tail:
                children.append(TextRun(child.tail))
            continue
        children.append(from_etree(child))
        if child.tail:
            children.append(TextRun(child.tail))
    attributes = {local_name(key): value for key, value in node.attrib.items()}
    return Element(tag=local_name(node.tag), attributes=attributes, children=tuple(children))


def find_first(root: Element, tag: str) -> Optional[Element]:
    """Return the first descendant (or the root itself) with the given tag."""
    return next(root.iter(tag), None)
