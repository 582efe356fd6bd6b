"""Resolve layout masters, page sequences and static header/footer regions."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence

from fo_pdfmake.model.content import content_to_definition
from fo_pdfmake.model.elements import Element
from fo_pdfmake.model.page_model import (
    ALL,
    FIRST,
    ONCE,
    REPEATABLE,
    REST,
    ZERO_MARGINS,
    DocumentStructure,
    HeaderFooterEntry,
    HeaderFooterFlags,
    HeaderFooterInfo,
    HeaderRegion,
    Margins,
    PageMaster,
    PageMasterReference,
    PageSequenceMaster,
    PageSize,
    Region,
)
from fo_pdfmake.parser.attribute_parser import parse_margin
from fo_pdfmake.parser.margin_calculator import FOOTER, HEADER, calculate_margins, calculate_region_margins
from fo_pdfmake.parser.transducer import Transducer
from fo_pdfmake.utils.logger import get_logger
from fo_pdfmake.utils.units import PAGE_SIZES, convert_to_points
from fo_pdfmake.utils.xml_utils import find_first

LOGGER = get_logger(__name__)

DEFAULT_BODY_REGION = "xsl-region-body"
DEFAULT_BEFORE_REGION = "xsl-region-before"
DEFAULT_AFTER_REGION = "xsl-region-after"
DEFAULT_PAGE_SIZE = "A4"

EMPTY_CONTENT = ""


def is_should_run(applicability: Optional[str], current_page: int, page_count: int = 0) -> bool:
    """Whether content classified as ``applicability`` renders on ``current_page``."""
    if applicability == ALL:
        return True
    if applicability == FIRST:
        return current_page == 1
    if applicability == REST:
        return current_page > 1
    return False


def find_flows(root: Element, flow_name: Optional[str] = None) -> List[Element]:
    """Body flows of the document, or every flow/static-content named ``flow_name``."""
    if flow_name is None:
        return list(root.iter("flow"))
    return [
        node
        for node in root.iter()
        if node.tag in ("flow", "static-content") and node.get("flow-name") == flow_name
    ]


@dataclass(frozen=True, slots=True)
class StaticContentLayout:
    """Page callback returning converted static content on the pages it applies to."""

    applicability: str
    content: Any

    def __call__(self, current_page: int, page_count: int = 0) -> Any:
        if is_should_run(self.applicability, current_page, page_count):
            return deepcopy(self.content)
        return EMPTY_CONTENT


@dataclass(frozen=True, slots=True)
class SuperHeaderFooter:
    """Dispatch over several header/footer entries; the first non-empty result wins."""

    entries: Sequence[HeaderFooterEntry]

    def __call__(self, current_page: int, page_count: int = 0) -> Any:
        for entry in self.entries:
            result = entry.structure(current_page, page_count)
            if result:
                return result
        return EMPTY_CONTENT


def super_header_footer(entries: Sequence[HeaderFooterEntry]) -> SuperHeaderFooter:
    return SuperHeaderFooter(entries=tuple(entries))


def _explicit_length(element: Element, name: str, fallback: float) -> float:
    raw = element.get(name)
    return convert_to_points(raw) if raw else fallback


class StructureResolver:
    """Build the :class:`DocumentStructure` of an XSL-FO document."""

    def __init__(self, transducer: Optional[Transducer] = None) -> None:
        self._transducer = transducer or Transducer()

    def resolve_structure(self, root: Element) -> DocumentStructure:
        structure = DocumentStructure()
        layout = find_first(root, "layout-master-set")
        if layout is None:
            LOGGER.warning("Document has no layout-master-set")
            return structure

        for node in layout.iter("simple-page-master"):
            name = node.get("master-name")
            if name:
                structure.page_masters[name] = self.parse_simple_page_master(node)
        for node in layout.iter("page-sequence-master"):
            name = node.get("master-name")
            if name:
                structure.sequences[name] = self.parse_page_sequence_master(node, structure)

        for sequence in root.iter("page-sequence"):
            reference = sequence.get("master-reference")
            if not reference:
                continue
            structure.sequence_references.append(reference)
            for static in sequence.elements("static-content"):
                self._register_static_content(structure, reference, static)
        return structure

    def _register_static_content(self, structure: DocumentStructure, reference: str, static: Element) -> None:
        flow_name = static.get("flow-name")
        information = self.get_header_footer_information(structure, reference, flow_name)
        if information is None:
            LOGGER.debug("Static content %s is not placed by %s", flow_name, reference)
            return
        flags = self.is_header_or_footer(structure, information.page_master_reference, information.region_name)
        if not flags.is_header and not flags.is_footer:
            return
        content = content_to_definition(self._transducer.transduce_flow(static))
        entry = HeaderFooterEntry(information=information, structure=self.static_content_layout(information, content))
        if flags.is_header:
            structure.headers.append(entry)
        if flags.is_footer:
            structure.footers.append(entry)

    # ------------------------------------------------------------------
    def parse_simple_page_master(self, node: Element) -> PageMaster:
        raw_width = node.get("page-width")
        raw_height = node.get("page-height")
        if raw_width and raw_height:
            page_size = PageSize(convert_to_points(raw_width), convert_to_points(raw_height), raw_width, raw_height)
        else:
            default = PAGE_SIZES[DEFAULT_PAGE_SIZE]
            page_size = PageSize(default["width"], default["height"], raw_width, raw_height)

        page_margin: Margins = parse_margin(node) or ZERO_MARGINS
        region_body = node.find("region-body")
        body_margin: Margins = ZERO_MARGINS
        body = None
        if region_body is not None:
            body_margin = parse_margin(region_body) or ZERO_MARGINS
            body = Region(
                name=region_body.get("region-name") or DEFAULT_BODY_REGION,
                margins=(body_margin[0], 0, body_margin[2], 0),
            )

        master = PageMaster(
            name=node.get("master-name") or "",
            page_size=page_size,
            page_margin=page_margin,
            body=body,
            header=self._parse_region(node.find("region-before"), HEADER, page_margin, body_margin),
            footer=self._parse_region(node.find("region-after"), FOOTER, page_margin, body_margin),
            margin_string=node.get("margin"),
        )
        return replace(master, calculated_page_margins=calculate_margins(master))

    def _parse_region(
        self,
        region: Optional[Element],
        region_type: str,
        page_margin: Margins,
        body_margin: Margins,
    ) -> Optional[HeaderRegion]:
        if region is None:
            return None
        defaults = calculate_region_margins(region_type, page_margin, body_margin)
        margins = tuple(
            _explicit_length(region, name, fallback)
            for name, fallback in zip(("margin-left", "margin-top", "margin-right", "margin-bottom"), defaults)
        )
        default_name = DEFAULT_BEFORE_REGION if region_type == HEADER else DEFAULT_AFTER_REGION
        return HeaderRegion(
            name=region.get("region-name") or default_name,
            height=_explicit_length(region, "extent", 0),
            margins=margins,  # type: ignore[arg-type]
        )

    def parse_page_sequence_master(self, node: Element, structure: DocumentStructure) -> PageSequenceMaster:
        """Collect the sequence's references in document order.

        The first ``single-page-master-reference`` governs the first page; a
        conditional reference with ``page-position="first"`` does the same
        inside alternatives. Every other repeatable or conditional reference
        governs the remaining pages.
        """
        references: List[PageMasterReference] = []
        has_first = False
        for child in node.iter():
            master_name = child.get("master-reference")
            if child is node or not master_name:
                continue
            if child.tag == "single-page-master-reference":
                repetition = ONCE if has_first else FIRST
            elif child.tag == "conditional-page-master-reference" and child.get("page-position") == "first":
                repetition = ONCE if has_first else FIRST
            elif child.tag in ("repeatable-page-master-reference", "conditional-page-master-reference"):
                repetition = REPEATABLE
            else:
                continue
            has_first = has_first or repetition == FIRST
            master = structure.page_masters.get(master_name)
            if master is None:
                LOGGER.warning("Page sequence %s references unknown master %s", node.get("master-name"), master_name)
            references.append(PageMasterReference(master_name=master_name, repetition=repetition, master=master))
        return PageSequenceMaster(name=node.get("master-name") or "", references=tuple(references))

    def governing_master(self, structure: DocumentStructure, reference: Optional[str], page: int = 1) -> Optional[PageMaster]:
        return structure.master_for(reference, page)

    # ------------------------------------------------------------------
    def get_header_footer_information(
        self,
        structure: DocumentStructure,
        master_reference: Optional[str],
        flow_name: Optional[str],
    ) -> Optional[HeaderFooterInfo]:
        """Classify on which pages the region named ``flow_name`` renders."""
        if not master_reference or not flow_name:
            return None
        simple = structure.page_masters.get(master_reference)
        if simple is not None:
            if not simple.has_region(flow_name):
                return None
            return HeaderFooterInfo(None, master_reference, flow_name, ALL)

        sequence = structure.sequences.get(master_reference)
        if sequence is None:
            return None
        first = sequence.first_reference()
        matches = []
        if first is not None and first.master is not None and first.master.has_region(flow_name):
            matches.append((first.master_name, True))
        for reference in sequence.repeatable_references():
            if reference.master is not None and reference.master.has_region(flow_name):
                matches.append((reference.master_name, False))
        if not matches:
            return None

        has_first = any(is_first for _, is_first in matches)
        has_repeatable = any(not is_first for _, is_first in matches)
        if has_first and not has_repeatable:
            applicability = FIRST
        elif has_repeatable and not has_first:
            applicability = REST if first is not None else ALL
        else:
            applicability = ALL
        return HeaderFooterInfo(master_reference, matches[0][0], flow_name, applicability)

    def is_header_or_footer(
        self,
        structure: DocumentStructure,
        master_reference: Optional[str],
        flow_name: Optional[str],
    ) -> HeaderFooterFlags:
        if not master_reference or not flow_name:
            return HeaderFooterFlags()
        master = structure.page_masters.get(master_reference)
        if master is None:
            return HeaderFooterFlags()
        if master.header is not None and master.header.name == flow_name:
            return HeaderFooterFlags(is_header=True)
        if master.footer is not None and master.footer.name == flow_name:
            return HeaderFooterFlags(is_footer=True)
        return HeaderFooterFlags()

    def static_content_layout(self, information: Optional[HeaderFooterInfo], content: Any) -> StaticContentLayout:
        if information is None:
            return StaticContentLayout(applicability="", content=EMPTY_CONTENT)
        return StaticContentLayout(applicability=information.applicability, content=content)
