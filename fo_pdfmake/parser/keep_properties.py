"""Keep-together and keep-with-previous handling for block-level content."""
from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from fo_pdfmake.model.content import ContentNode, Placement, StackBlock, placement_of, with_placement
from fo_pdfmake.model.elements import Element

ALWAYS = "always"


def has_keep_together(element: Element) -> bool:
    return ALWAYS in (element.get("keep-together.within-page"), element.get("keep-together"))


def has_keep_with_previous(element: Element) -> bool:
    return ALWAYS in (element.get("keep-with-previous.within-page"), element.get("keep-with-previous"))


def _unmarked(node: ContentNode) -> ContentNode:
    placement = placement_of(node)
    if not placement.keep_with_previous:
        return node
    return with_placement(node, replace(placement, keep_with_previous=False))


def process_keep_with_previous(nodes: Sequence[ContentNode]) -> List[ContentNode]:
    """Group every node marked keep-with-previous with its predecessor.

    The group becomes an unbreakable stack; consecutive marked nodes extend
    the same stack. A marked node without predecessor is left alone.
    """
    result: List[ContentNode] = []
    extendable = False
    for node in nodes:
        if not placement_of(node).keep_with_previous:
            result.append(node)
            extendable = False
            continue
        current = _unmarked(node)
        if not result:
            result.append(current)
            continue
        previous = result.pop()
        if extendable and isinstance(previous, StackBlock):
            items = (*previous.items, current)
        else:
            items = (previous, current)
        result.append(StackBlock(items=items, placement=Placement(unbreakable=True)))
        extendable = True
    return result
