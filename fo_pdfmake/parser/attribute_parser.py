"""Parsers mapping single XSL-FO attribute strings to typed values.

Every parser returns ``None`` for absent or malformed input so that callers
can drop the property silently. Explicit resets (``font-weight="normal"``)
are reported with the :data:`OFF` marker.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from fo_pdfmake.model.content import OFF, ExplicitOff, Placement
from fo_pdfmake.model.elements import Element
from fo_pdfmake.parser.keep_properties import has_keep_together, has_keep_with_previous
from fo_pdfmake.utils.logger import get_logger
from fo_pdfmake.utils.units import PX_TO_PT, parse_length, parse_margins

LOGGER = get_logger(__name__)

EM_FONT_SIZE = 12
BOLD_WEIGHT_THRESHOLD = 600
ALIGNMENTS = {"left": "left", "center": "center", "right": "right", "justify": "justify", "start": "left", "end": "right"}
BORDER_STYLES = {"none", "hidden", "dotted", "dashed", "solid", "double", "groove", "ridge", "inset", "outset"}
BORDER_WIDTH_KEYWORDS = {"thin": 0.5, "medium": 1.0, "thick": 2.0}
DEFAULT_BORDER_WIDTH = 1.0

_FONT_SIZE_PATTERN = re.compile(r"^([\d.]+)(pt|px|em|rem)?$")
_NUMBER_PATTERN = re.compile(r"^[\d.]+$")
_PROPORTIONAL_PATTERN = re.compile(r"proportional-column-width\((\d+(?:\.\d+)?)\)")
_PERCENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*%")

Toggle = Optional[Union[bool, ExplicitOff]]


@dataclass(frozen=True, slots=True)
class LineHeight:
    """Line height as a multiplier, or as an absolute length in points."""

    value: float
    absolute: bool = False


@dataclass(frozen=True, slots=True)
class BorderSpec:
    """Parsed border shorthand."""

    width: Optional[float] = None
    style: Optional[str] = None
    color: Optional[str] = None


def _float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_font_weight(value: Optional[str]) -> Toggle:
    """``bold``/``bolder``/>=600 is bold; ``normal``/``lighter``/<600 resets it."""
    if not value:
        return None
    weight = value.strip().lower()
    if weight in ("bold", "bolder"):
        return True
    if weight in ("normal", "lighter"):
        return OFF
    number = _float(weight)
    if number is None:
        LOGGER.debug("Dropping font-weight value: %s", value)
        return None
    return True if number >= BOLD_WEIGHT_THRESHOLD else OFF


def parse_font_style(value: Optional[str]) -> Toggle:
    if not value:
        return None
    style = value.strip().lower()
    if style in ("italic", "oblique"):
        return True
    if style == "normal":
        return OFF
    return None


def parse_text_decoration(value: Optional[str]) -> Optional[Union[str, ExplicitOff]]:
    if not value:
        return None
    decoration = value.strip().lower()
    if "underline" in decoration:
        return "underline"
    if "line-through" in decoration:
        return "lineThrough"
    if decoration == "none":
        return OFF
    return None


def parse_font_size(value: Optional[str]) -> Optional[float]:
    """Font size in points; ``px`` scales by 0.75 and ``em``/``rem`` by a 12pt base."""
    if not value:
        return None
    match = _FONT_SIZE_PATTERN.match(value.strip())
    if not match:
        LOGGER.debug("Dropping font-size value: %s", value)
        return None
    number = _float(match.group(1))
    if number is None:
        return None
    unit = match.group(2) or "pt"
    if unit == "px":
        return number * PX_TO_PT
    if unit in ("em", "rem"):
        return number * EM_FONT_SIZE
    return number


def parse_color(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.strip() or None


def parse_background_color(value: Optional[str]) -> Optional[str]:
    color = parse_color(value)
    if color is None or color.lower() == "transparent":
        return None
    return color


def parse_alignment(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return ALIGNMENTS.get(value.strip().lower())


def parse_font_family(value: Optional[str]) -> Optional[str]:
    """First family of a font list, unquoted and lower-cased for font lookup."""
    if not value:
        return None
    family = value.split(",", 1)[0].strip().strip("'\"").strip()
    return family.lower() or None


def parse_line_height(value: Optional[str]) -> Optional[LineHeight]:
    """Unitless and relative values are multipliers; lengths are absolute points."""
    if not value:
        return None
    text = value.strip().lower()
    if text == "normal":
        return None
    if _NUMBER_PATTERN.match(text):
        number = _float(text)
        return LineHeight(number) if number is not None else None
    percent = _PERCENT_PATTERN.fullmatch(text)
    if percent:
        return LineHeight(float(percent.group(1)) / 100)
    if text.endswith("em"):
        number = _float(text[:-2])
        return LineHeight(number) if number is not None else None
    points = parse_length(text)
    if points is None:
        LOGGER.debug("Dropping line-height value: %s", value)
        return None
    return LineHeight(points, absolute=True)


def parse_page_break(value: Optional[str], position: str = "before") -> Optional[str]:
    """Only ``always`` forces a page break."""
    if value and value.strip().lower() == "always":
        return position
    return None


def parse_padding(value: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    """Padding shorthand as ``(left, top, right, bottom)``."""
    if not value:
        return None
    left, top, right, bottom = parse_margins(value)
    return (left, top, right, bottom)


def parse_margin(element: Element) -> Optional[Tuple[float, float, float, float]]:
    """Combine the margin shorthand with individual sides and block spacing."""
    sides = list(parse_padding(element.get("margin")) or (0, 0, 0, 0))
    found = element.has("margin")
    individual = (
        ("margin-left", 0),
        ("margin-top", 1),
        ("space-before", 1),
        ("space-before.optimum", 1),
        ("margin-right", 2),
        ("margin-bottom", 3),
        ("space-after", 3),
        ("space-after.optimum", 3),
    )
    for name, index in individual:
        raw = element.get(name)
        if raw is None:
            continue
        points = parse_length(raw)
        if points is None:
            LOGGER.debug("Dropping %s value: %s", name, raw)
            continue
        sides[index] = points
        found = True
    if not found:
        return None
    return (sides[0], sides[1], sides[2], sides[3])


def parse_border_width(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    text = value.strip().lower()
    if text in BORDER_WIDTH_KEYWORDS:
        return BORDER_WIDTH_KEYWORDS[text]
    return parse_length(text)


def parse_border_shorthand(value: Optional[str]) -> Optional[BorderSpec]:
    """Parse ``"<width> <style> <color>"`` in any order."""
    if not value:
        return None
    width: Optional[float] = None
    style: Optional[str] = None
    color: Optional[str] = None
    for token in value.split():
        lowered = token.lower()
        if lowered in BORDER_STYLES:
            style = lowered
            continue
        token_width = parse_border_width(lowered)
        if token_width is not None:
            width = token_width
            continue
        color = token
    if style in ("none", "hidden"):
        width = 0
    elif width is None:
        width = DEFAULT_BORDER_WIDTH
    return BorderSpec(width=width, style=style, color=color)


def parse_proportional_width(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _PROPORTIONAL_PATTERN.search(value)
    if not match:
        return None
    return float(match.group(1))


def parse_percentage(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _PERCENT_PATTERN.search(value)
    if not match:
        return None
    return float(match.group(1))


BORDER_SIDES = ("left", "top", "right", "bottom")


def parse_border(element: Element, prefix: str = "border") -> Optional[BorderSpec]:
    """Merge a border shorthand with its ``-width``/``-style``/``-color`` longhands."""
    names = (prefix, f"{prefix}-width", f"{prefix}-style", f"{prefix}-color")
    if not any(element.has(name) for name in names):
        return None
    spec = parse_border_shorthand(element.get(prefix)) or BorderSpec()
    width = parse_border_width(element.get(f"{prefix}-width"))
    style = element.get(f"{prefix}-style")
    color = parse_color(element.get(f"{prefix}-color"))
    return BorderSpec(
        width=width if width is not None else spec.width,
        style=style.strip().lower() if style else spec.style,
        color=color if color is not None else spec.color,
    )


def parse_side_borders(element: Element) -> Optional[Tuple[BorderSpec, ...]]:
    """Per-side borders ``(left, top, right, bottom)``; ``None`` without any border attribute."""
    general = parse_border(element)
    sides = {side: parse_border(element, f"border-{side}") for side in BORDER_SIDES}
    if general is None and all(spec is None for spec in sides.values()):
        return None
    resolved = []
    for side in BORDER_SIDES:
        spec = sides[side]
        if spec is None:
            spec = general or BorderSpec(width=0)
        elif general is not None:
            spec = BorderSpec(
                width=spec.width if spec.width is not None else general.width,
                style=spec.style or general.style,
                color=spec.color or general.color,
            )
        if spec.style in ("none", "hidden"):
            spec = BorderSpec(width=0, style=spec.style, color=spec.color)
        elif spec.width is None:
            spec = BorderSpec(width=DEFAULT_BORDER_WIDTH, style=spec.style, color=spec.color)
        resolved.append(spec)
    return tuple(resolved)


def parse_placement(element: Element) -> Placement:
    """Block placement: margins, forced page breaks and keep conditions."""
    return Placement(
        margin=parse_margin(element),
        page_break=parse_page_break(element.get("page-break-before"))
        or parse_page_break(element.get("break-before"))
        or parse_page_break(element.get("page-break-after"), "after"),
        unbreakable=has_keep_together(element),
        keep_with_previous=has_keep_with_previous(element),
    )
