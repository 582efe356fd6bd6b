"""Convert ``list-block`` elements into list content nodes."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Optional

from fo_pdfmake.model.content import ContentNode, ListBlock, ResolvedStyle, is_empty_literal
from fo_pdfmake.model.elements import Element
from fo_pdfmake.parser.attribute_parser import parse_placement
from fo_pdfmake.utils.logger import get_logger

if TYPE_CHECKING:
    from fo_pdfmake.parser.transducer import Transducer

LOGGER = get_logger(__name__)

NUMBERED_LABEL_PATTERN = re.compile(r"^\d+[.)]")
NUMBERED = "numbered"
BULLET = "bullet"


def list_kind(list_block: Element) -> str:
    """Numbered when the first label reads like ``1.`` or ``1)``, bullets otherwise."""
    first_item = list_block.find("list-item")
    label = first_item.find("list-item-label") if first_item is not None else None
    if label is None:
        return BULLET
    text = label.text_content().strip()
    return NUMBERED if NUMBERED_LABEL_PATTERN.match(text) else BULLET


class ListConverter:
    """Build a :class:`ListBlock` from the bodies of a list's items."""

    def convert(self, element: Element, inherited: ResolvedStyle, transducer: "Transducer") -> Optional[ListBlock]:
        list_style = transducer.styles.resolve(element, inherited)
        own = list_style.difference(inherited)
        items = element.elements("list-item")
        if not items:
            LOGGER.debug("Dropping empty list-block")
            return None

        converted: List[ContentNode] = []
        config = transducer.config
        for item in items:
            item_style = transducer.styles.resolve(item, config.inherited_for("list-block", "list-item", list_style))
            body = item.find("list-item-body")
            if body is None:
                continue
            body_style = transducer.styles.resolve(body, config.inherited_for("list-item", "list-item-body", item_style))
            nodes = transducer.transduce_children(body, body_style)
            if not nodes:
                continue
            node = transducer.wrap_region(nodes, body_style.difference(list_style))
            if is_empty_literal(node):
                continue
            converted.append(node)

        if not converted:
            return None
        return ListBlock(kind=list_kind(element), items=tuple(converted), style=own, placement=parse_placement(element))
