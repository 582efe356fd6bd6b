"""Assemble the renderer-facing document definition."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fo_pdfmake.model.content import ContentNode, content_to_definition
from fo_pdfmake.model.elements import Element
from fo_pdfmake.model.page_model import ZERO_MARGINS, DocumentStructure, PageMaster
from fo_pdfmake.parser.keep_properties import process_keep_with_previous
from fo_pdfmake.parser.margin_calculator import effective_page_margins
from fo_pdfmake.parser.structure_parser import DEFAULT_PAGE_SIZE, StructureResolver, find_flows, super_header_footer
from fo_pdfmake.parser.transducer import Transducer
from fo_pdfmake.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_STYLES: Dict[str, Any] = {
    "lineHeight": 1.2,
    "fontSize": 10,
    "color": "#000000",
}


def merge_default_styles(default_style: Optional[Dict[str, Any]], defaults: Dict[str, Any] = DEFAULT_STYLES) -> Dict[str, Any]:
    """Fill missing keys of ``default_style`` from ``defaults`` without overriding."""
    merged = dict(default_style or {})
    for key, value in defaults.items():
        merged.setdefault(key, value)
    return merged


def page_master_metadata(master: PageMaster) -> Dict[str, Any]:
    return {
        "masterName": master.name,
        "pageWidth": master.page_size.raw_width,
        "pageHeight": master.page_size.raw_height,
        "widthInPoints": master.page_size.width,
        "heightInPoints": master.page_size.height,
        "marginString": master.margin_string,
        "margins": list(master.page_margin),
        "calculatedPageMargins": list(effective_page_margins(master)),
    }


class DefinitionBuilder:
    """Turn a parsed XSL-FO tree into a document definition mapping."""

    def __init__(
        self,
        transducer: Optional[Transducer] = None,
        resolver: Optional[StructureResolver] = None,
        default_styles: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._transducer = transducer or Transducer()
        self._resolver = resolver or StructureResolver(self._transducer)
        self._default_styles = default_styles if default_styles is not None else DEFAULT_STYLES

    def extract_content(self, root: Element, flow_name: Optional[str] = None) -> List[ContentNode]:
        nodes: List[ContentNode] = []
        for flow in find_flows(root, flow_name):
            nodes.extend(self._transducer.transduce_flow(flow))
        if not nodes and flow_name is not None:
            LOGGER.warning("No flow named %s found", flow_name)
        return process_keep_with_previous(nodes)

    def convert_flow(self, root: Element, flow_name: Optional[str] = None) -> List[Any]:
        """Content of the body flows, or of the flow/static-content named ``flow_name``."""
        return content_to_definition(self.extract_content(root, flow_name))

    def primary_master(self, structure: DocumentStructure) -> Optional[PageMaster]:
        """Master governing the first page of the first page sequence."""
        for reference in structure.sequence_references:
            master = structure.master_for(reference, 1)
            if master is not None:
                return master
        return next(iter(structure.page_masters.values()), None)

    def convert_to_definition(
        self,
        root: Element,
        flow_name: Optional[str] = None,
        default_style: Optional[Dict[str, Any]] = None,
        structure: Optional[DocumentStructure] = None,
    ) -> Dict[str, Any]:
        structure = structure or self._resolver.resolve_structure(root)
        primary = self.primary_master(structure)
        if primary is None:
            LOGGER.warning("No page master found; using %s without margins", DEFAULT_PAGE_SIZE)

        definition: Dict[str, Any] = {
            "pageSize": primary.page_size.definition if primary is not None else DEFAULT_PAGE_SIZE,
            "pageMargins": list(effective_page_margins(primary)) if primary is not None else list(ZERO_MARGINS),
            "content": self.convert_flow(root, flow_name),
        }
        if structure.headers:
            definition["header"] = super_header_footer(structure.headers)
        if structure.footers:
            definition["footer"] = super_header_footer(structure.footers)
        definition["defaultStyle"] = merge_default_styles(default_style, self._default_styles)
        definition["_metadata"] = {
            "pageMasters": [page_master_metadata(master) for master in structure.page_masters.values()],
            "primaryMaster": primary.name if primary is not None else None,
        }
        return definition
