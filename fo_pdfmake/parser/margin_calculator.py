"""Compute renderer page margins from a page master's regions."""
from __future__ import annotations

from typing import Sequence

from fo_pdfmake.model.page_model import ZERO_MARGINS, Margins, PageMaster

HEADER = "header"
BODY = "body"
FOOTER = "footer"


def calculate_margins(page_master: PageMaster) -> Margins:
    """Return ``(left, top, right, bottom)`` for the body content of ``page_master``.

    Left and right add the body-region margins to the page margins. The top
    is the header extent alone; the bottom adds the footer extent and its gap
    to the body when a footer with a height exists.
    """
    page = page_master.page_margin
    body = page_master.body.margins if page_master.body is not None else ZERO_MARGINS
    left = page[0] + body[0]
    right = page[2] + body[2]
    top = page_master.header.height if page_master.header is not None and page_master.header.height else 0
    bottom = page[3]
    footer = page_master.footer
    if footer is not None and footer.height > 0:
        bottom += footer.height + footer.margins[1]
    return (left, top, right, bottom)


def calculate_region_margins(region_type: str, page_margin: Sequence[float], body_margin: Sequence[float]) -> Margins:
    """Default margins of a region when it does not set its own."""
    if region_type == HEADER:
        return (page_margin[0], page_margin[1], page_margin[2], body_margin[1])
    if region_type == BODY:
        return (page_margin[0], 0, page_margin[2], 0)
    if region_type == FOOTER:
        return (page_margin[0], body_margin[3], page_margin[2], page_margin[3])
    return ZERO_MARGINS


def effective_page_margins(page_master: PageMaster) -> Margins:
    if page_master.calculated_page_margins is not None:
        return page_master.calculated_page_margins
    return page_master.page_margin
