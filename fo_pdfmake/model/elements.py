"""Read-only element tree consumed by the transducer and structure resolver."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class TextRun:
    """Character data appearing between element children."""

    text: str


@dataclass(frozen=True, slots=True)
class Element:
    """A markup element with its local tag name, attributes and ordered children."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attributes

    def elements(self, tag: Optional[str] = None) -> List["Element"]:
        """Return element children, optionally restricted to one tag."""
        return [
            child
            for child in self.children
            if isinstance(child, Element) and (tag is None or child.tag == tag)
        ]

    def find(self, tag: str) -> Optional["Element"]:
        for child in self.children:
            if isinstance(child, Element) and child.tag == tag:
                return child
        return None

    def iter(self, tag: Optional[str] = None) -> Iterator["Element"]:
        """Depth-first iteration over this element and its descendants."""
        stack: List[Element] = [self]
        while stack:
            current = stack.pop()
            if tag is None or current.tag == tag:
                yield current
            stack.extend(reversed(current.elements()))

    def text_content(self) -> str:
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, TextRun):
                parts.append(child.text)
            else:
                parts.append(child.text_content())
        return "".join(parts)

    @property
    def is_empty(self) -> bool:
        return not self.children


Node = Union[Element, TextRun]
