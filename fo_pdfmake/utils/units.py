"""Length conversion helpers for XSL-FO measurements."""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Union

from fo_pdfmake.utils.logger import get_logger

LOGGER = get_logger(__name__)

POINTS_PER_INCH = 72
POINTS_PER_CM = 28.35
POINTS_PER_MM = 2.835
PX_TO_PT = 0.75
PAGE_SIZE_TOLERANCE = 2

PAGE_SIZES: Dict[str, Dict[str, float]] = {
    "LETTER": {"width": 612, "height": 792},
    "LEGAL": {"width": 612, "height": 1008},
    "A4": {"width": 595.28, "height": 841.89},
    "A3": {"width": 841.89, "height": 1190.55},
    "A5": {"width": 419.53, "height": 595.28},
}

_LENGTH_PATTERN = re.compile(r"^([\d.]+)(in|cm|mm|pt|px)?$", re.IGNORECASE)
_UNIT_FACTORS = {
    "in": POINTS_PER_INCH,
    "cm": POINTS_PER_CM,
    "mm": POINTS_PER_MM,
    "pt": 1,
    "px": PX_TO_PT,
}


def parse_length(value: Optional[str]) -> Optional[float]:
    """Return the length in points, or ``None`` when the value cannot be parsed."""
    if not value or not isinstance(value, str):
        return None
    match = _LENGTH_PATTERN.match(value.strip())
    if not match:
        return None
    try:
        number = float(match.group(1))
    except ValueError:
        return None
    unit = (match.group(2) or "pt").lower()
    return number * _UNIT_FACTORS[unit]


def convert_to_points(value: Optional[str]) -> float:
    """Convert an XSL-FO length (``1in``, ``2.5cm``, ``16px``) to points; invalid input is 0."""
    points = parse_length(value)
    if points is None:
        if value:
            LOGGER.debug("Could not parse length value: %s", value)
        return 0
    return points


def parse_margins(value: Optional[str]) -> List[float]:
    """Expand a CSS-style margin shorthand into ``[left, top, right, bottom]``."""
    if not value or not isinstance(value, str):
        return [0, 0, 0, 0]
    margins = [convert_to_points(part) for part in value.split()]
    if len(margins) == 1:
        return [margins[0]] * 4
    if len(margins) == 2:
        vertical, horizontal = margins
        return [horizontal, vertical, horizontal, vertical]
    if len(margins) == 4:
        top, right, bottom, left = margins
        return [left, top, right, bottom]
    LOGGER.warning("Invalid margin format: %s", value)
    return [0, 0, 0, 0]


def determine_page_size(width: float, height: float) -> Union[str, Dict[str, float]]:
    """Return a named page size when the dimensions match one, otherwise explicit points."""
    for name, size in PAGE_SIZES.items():
        if abs(size["width"] - width) < PAGE_SIZE_TOLERANCE and abs(size["height"] - height) < PAGE_SIZE_TOLERANCE:
            return name
    return {"width": round(width, 2), "height": round(height, 2)}
