"""Attribute-inheritance tree transducer from XSL-FO elements to content nodes."""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Union

from fo_pdfmake.model.content import (
    EMPTY_STYLE,
    NO_PLACEMENT,
    ContentNode,
    Placement,
    ResolvedStyle,
    StackBlock,
    StyledRun,
    TextLiteral,
    apply_style,
    is_block_level,
    is_empty_literal,
    placement_of,
    with_placement,
)
from fo_pdfmake.model.elements import Element, TextRun
from fo_pdfmake.model.inheritance import DEFAULT_INHERITANCE, InheritanceConfig
from fo_pdfmake.parser.attribute_parser import parse_placement, parse_side_borders
from fo_pdfmake.parser.keep_properties import process_keep_with_previous
from fo_pdfmake.parser.list_converter import ListConverter
from fo_pdfmake.parser.style_resolver import StyleResolver
from fo_pdfmake.parser.table_converter import TableConverter
from fo_pdfmake.utils.logger import get_logger
from fo_pdfmake.utils.whitespace import is_blank, is_line_break, merge_adjacent_strings, normalize_children, normalize_whitespace

LOGGER = get_logger(__name__)

LINE_BREAK = "\n"

# Tags converted with the rules of the tag they stand in for.
TAG_ALIASES = {
    "wrapper": "inline",
    "basic-link": "inline",
    "block-container": "block",
}

SKIPPED_TAGS = frozenset(
    {
        "page-number",
        "page-number-citation",
        "page-number-citation-last",
        "external-graphic",
        "instream-foreign-object",
        "leader",
        "footnote",
        "marker",
        "retrieve-marker",
        "float",
    }
)

Item = Union[str, ContentNode]


def canonical_tag(tag: str) -> str:
    return TAG_ALIASES.get(tag, tag)


def _is_inline_run(item: object) -> bool:
    return isinstance(item, StyledRun)


def _preserves_linefeeds(element: Element) -> bool:
    return element.get("linefeed-treatment") == "preserve" or element.get("white-space") == "pre"


class Transducer:
    """Walk an element subtree and emit one content node.

    Each node resolves its effective style from the inherited style and its
    own attributes, emits only the properties that differ from what it
    inherited, and hands the effective style to the children that the
    inheritance configuration lists as inheriters.
    """

    def __init__(
        self,
        config: InheritanceConfig = DEFAULT_INHERITANCE,
        style_resolver: Optional[StyleResolver] = None,
        list_converter: Optional[ListConverter] = None,
        table_converter: Optional[TableConverter] = None,
    ) -> None:
        self.config = config
        self.styles = style_resolver or StyleResolver()
        self._lists = list_converter or ListConverter()
        self._tables = table_converter or TableConverter()

    def transduce(self, element: Optional[Element], inherited: Optional[ResolvedStyle] = None) -> Optional[ContentNode]:
        """Convert ``element`` given the style inherited from its ancestors."""
        if element is None:
            return None
        return self._convert_element(element, inherited or EMPTY_STYLE)

    def transduce_children(self, parent: Element, effective: ResolvedStyle = EMPTY_STYLE) -> List[ContentNode]:
        """Convert every child of a region (flow, cell, list body) as a separate block."""
        nodes: List[ContentNode] = []
        parent_tag = canonical_tag(parent.tag)
        for child in parent.children:
            if isinstance(child, TextRun):
                text = normalize_whitespace(child.text).strip()
                if text:
                    nodes.append(TextLiteral(text))
                continue
            if canonical_tag(child.tag) == "block" and child.is_empty:
                nodes.append(TextLiteral(LINE_BREAK))
                continue
            inherited = self.config.inherited_for(parent_tag, canonical_tag(child.tag), effective)
            node = self._convert_element(child, inherited)
            if node is None or is_empty_literal(node):
                continue
            nodes.append(node)
        return process_keep_with_previous(nodes)

    def transduce_flow(self, flow: Element) -> List[ContentNode]:
        """Convert a flow or static-content; its own style is folded into each top-level node."""
        effective = self.styles.resolve(flow, EMPTY_STYLE)
        return [apply_style(node, effective) for node in self.transduce_children(flow, effective)]

    def wrap_region(self, nodes: Sequence[ContentNode], own: ResolvedStyle = EMPTY_STYLE) -> ContentNode:
        """Single node for a region: its only child, a stack, or an empty string."""
        if not nodes:
            return TextLiteral("") if own.is_empty else StyledRun(text="", style=own)
        if len(nodes) == 1:
            return apply_style(nodes[0], own)
        return StackBlock(items=tuple(nodes), style=own)

    def _convert_element(self, element: Element, inherited: ResolvedStyle) -> Optional[ContentNode]:
        tag = canonical_tag(element.tag)
        if tag in ("block", "inline"):
            return self._convert_container(element, inherited)
        if tag == "list-block":
            return self._lists.convert(element, inherited, self)
        if tag == "table":
            return self._tables.convert(element, inherited, self)
        if tag == "table-and-caption":
            table = element.find("table")
            return self._tables.convert(table, inherited, self) if table is not None else None
        if tag in SKIPPED_TAGS:
            LOGGER.debug("Skipping unsupported element: %s", element.tag)
            return None
        LOGGER.debug("Converting unknown element as a block: %s", element.tag)
        return self._convert_container(element, inherited)

    def _convert_container(self, element: Element, inherited: ResolvedStyle) -> ContentNode:
        effective = self.styles.resolve(element, inherited)
        own = effective.difference(inherited)
        placement = parse_placement(element) if canonical_tag(element.tag) == "block" else NO_PLACEMENT
        items = self._collect_children(element, effective)

        borders = parse_side_borders(element) if canonical_tag(element.tag) == "block" else None
        if borders is not None:
            fill = own.background
            inner = self.assemble(items, replace(own, background=None))
            return self._tables.bordered_block(inner, borders, fill, placement)
        return self.assemble(items, own, placement)

    def _collect_children(self, element: Element, effective: ResolvedStyle) -> List[Item]:
        preserve = _preserves_linefeeds(element)
        parent_tag = canonical_tag(element.tag)
        raw: List[object] = []
        for child in element.children:
            if isinstance(child, TextRun):
                if preserve or not is_blank(child.text):
                    raw.append(child.text)
                continue
            child_tag = canonical_tag(child.tag)
            if child_tag == "block" and child.is_empty:
                raw.append(LINE_BREAK)
                continue
            node = self._convert_element(child, self.config.inherited_for(parent_tag, child_tag, effective))
            if node is None:
                continue
            raw.append(node.text if isinstance(node, TextLiteral) else node)
        normalized = normalize_children(raw, _is_inline_run, preserve=preserve)
        return merge_adjacent_strings(normalized)  # type: ignore[return-value]

    def assemble(
        self,
        items: Sequence[Item],
        own: ResolvedStyle = EMPTY_STYLE,
        placement: Placement = NO_PLACEMENT,
    ) -> ContentNode:
        """Build the node for a merged child sequence.

        Text arrays never hold lists, tables or stacks: mixed content becomes
        a stack, and content made only of one list or table is returned as
        that node with the wrapper's style and placement folded in.
        """
        plain = own.is_empty and placement.is_empty
        if not items:
            return TextLiteral("") if plain else StyledRun(text="", style=own, placement=placement)

        if any(is_block_level(item) for item in items):
            if len(items) == 1:
                node = apply_style(items[0], own)  # type: ignore[arg-type]
                return with_placement(node, placement_of(node).fill_from(placement))
            return StackBlock(items=tuple(self._stack_items(items)), style=own, placement=placement)

        if len(items) == 1:
            item = items[0]
            if isinstance(item, str):
                return TextLiteral(item) if plain else StyledRun(text=item, style=own, placement=placement)
            if plain:
                return item
            return StyledRun(text=(item,), style=own, placement=placement)
        return StyledRun(text=tuple(_as_node(item) for item in items), style=own, placement=placement)

    def _stack_items(self, items: Sequence[Item]) -> List[ContentNode]:
        """Group runs of inline items into one text node each, keeping blocks apart."""
        stacked: List[ContentNode] = []
        group: List[Item] = []

        def flush() -> None:
            if group:
                if isinstance(group[0], str) and not is_line_break(group[0]):
                    group[0] = group[0].lstrip()
                if isinstance(group[-1], str) and not is_line_break(group[-1]):
                    group[-1] = group[-1].rstrip()
                parts = [part for part in group if part != ""]
                if len(parts) == 1:
                    stacked.append(_as_node(parts[0]))
                elif parts:
                    stacked.append(StyledRun(text=tuple(_as_node(part) for part in parts)))
                group.clear()

        for item in items:
            if is_block_level(item):
                flush()
                stacked.append(item)  # type: ignore[arg-type]
            else:
                group.append(item)
        flush()
        return process_keep_with_previous(stacked)


def _as_node(item: Item) -> ContentNode:
    return TextLiteral(item) if isinstance(item, str) else item
