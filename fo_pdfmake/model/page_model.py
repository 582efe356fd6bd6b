"""Page masters, page-sequence masters and header/footer descriptors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from fo_pdfmake.utils.units import determine_page_size

Margins = Tuple[float, float, float, float]
ZERO_MARGINS: Margins = (0.0, 0.0, 0.0, 0.0)

# Repetition kinds of a page-sequence-master reference.
ONCE = "once"
FIRST = "first"
REPEATABLE = "repeatable"

# Header/footer applicability.
ALL = "all"
REST = "rest"

StaticContent = Callable[[int, int], Any]


@dataclass(frozen=True, slots=True)
class PageSize:
    """Page dimensions in points plus the raw attribute strings they came from."""

    width: float
    height: float
    raw_width: Optional[str] = None
    raw_height: Optional[str] = None

    @property
    def definition(self) -> Union[str, Dict[str, float]]:
        return determine_page_size(self.width, self.height)


@dataclass(frozen=True, slots=True)
class Region:
    name: str
    margins: Margins = ZERO_MARGINS


@dataclass(frozen=True, slots=True)
class HeaderRegion:
    """A region-before or region-after with its extent."""

    name: str
    height: float = 0.0
    margins: Margins = ZERO_MARGINS


@dataclass(frozen=True, slots=True)
class PageMaster:
    """A parsed ``simple-page-master``."""

    name: str
    page_size: PageSize
    page_margin: Margins = ZERO_MARGINS
    body: Optional[Region] = None
    header: Optional[HeaderRegion] = None
    footer: Optional[HeaderRegion] = None
    calculated_page_margins: Optional[Margins] = None
    margin_string: Optional[str] = None

    def region_names(self) -> Tuple[str, ...]:
        return tuple(region.name for region in (self.header, self.footer) if region is not None)

    def has_region(self, region_name: str) -> bool:
        return region_name in self.region_names()


@dataclass(frozen=True, slots=True)
class PageMasterReference:
    master_name: str
    repetition: str
    master: Optional[PageMaster] = None


@dataclass(frozen=True, slots=True)
class PageSequenceMaster:
    """A parsed ``page-sequence-master`` with its ordered references."""

    name: str
    references: Tuple[PageMasterReference, ...] = ()

    def first_reference(self) -> Optional[PageMasterReference]:
        return next((ref for ref in self.references if ref.repetition == FIRST), None)

    def repeatable_references(self) -> List[PageMasterReference]:
        return [ref for ref in self.references if ref.repetition == REPEATABLE]

    def governing_master(self, page: int) -> Optional[PageMaster]:
        """Page master used for a 1-based page number."""
        first = self.first_reference()
        if page <= 1 and first is not None:
            return first.master
        repeatable = self.repeatable_references()
        if repeatable:
            return repeatable[0].master
        return first.master if first is not None else None


@dataclass(frozen=True, slots=True)
class HeaderFooterInfo:
    """Where a static region lives and on which pages it renders."""

    sequence_master_name: Optional[str]
    page_master_reference: str
    region_name: str
    applicability: str

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "page-sequence-master": self.sequence_master_name,
            "page-master-reference": self.page_master_reference,
            "region-name": self.region_name,
            "type": self.applicability,
        }


@dataclass(frozen=True, slots=True)
class HeaderFooterFlags:
    is_header: bool = False
    is_footer: bool = False


@dataclass(frozen=True, slots=True)
class HeaderFooterEntry:
    information: HeaderFooterInfo
    structure: StaticContent


@dataclass(slots=True)
class DocumentStructure:
    """Result of resolving a document's layout masters and static content."""

    page_masters: Dict[str, PageMaster] = field(default_factory=dict)
    sequences: Dict[str, PageSequenceMaster] = field(default_factory=dict)
    headers: List[HeaderFooterEntry] = field(default_factory=list)
    footers: List[HeaderFooterEntry] = field(default_factory=list)
    sequence_references: List[str] = field(default_factory=list)

    def master_for(self, reference: Optional[str], page: int = 1) -> Optional[PageMaster]:
        """Resolve a page-sequence ``master-reference`` to the master used on ``page``."""
        if reference is None:
            return None
        if reference in self.page_masters:
            return self.page_masters[reference]
        sequence = self.sequences.get(reference)
        return sequence.governing_master(page) if sequence is not None else None
