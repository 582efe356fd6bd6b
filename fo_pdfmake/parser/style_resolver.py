"""Resolve a node's effective style from inherited and local attributes."""
from __future__ import annotations

from dataclasses import fields
from typing import Any, Callable, Dict, Optional

from fo_pdfmake.model.content import EMPTY_STYLE, OFF, ResolvedStyle
from fo_pdfmake.model.elements import Element
from fo_pdfmake.parser import attribute_parser as attrs
from fo_pdfmake.utils.logger import get_logger

LOGGER = get_logger(__name__)

BASE_FONT_SIZE = 10

StyleParsers = Dict[str, Callable[[Optional[str]], Any]]

DEFAULT_PARSERS: StyleParsers = {
    "font-weight": attrs.parse_font_weight,
    "font-style": attrs.parse_font_style,
    "text-decoration": attrs.parse_text_decoration,
    "font-size": attrs.parse_font_size,
    "color": attrs.parse_color,
    "background-color": attrs.parse_background_color,
    "text-align": attrs.parse_alignment,
    "font-family": attrs.parse_font_family,
    "line-height": attrs.parse_line_height,
}

_FIELD_FOR_ATTRIBUTE = {
    "font-weight": "bold",
    "font-style": "italics",
    "text-decoration": "decoration",
    "font-size": "font_size",
    "color": "color",
    "background-color": "background",
    "text-align": "alignment",
    "font-family": "font",
    "line-height": "line_height",
}


class StyleResolver:
    """Compute local style deltas and merge them over an inherited style.

    A delta value of :data:`OFF` resets an inherited property. The reset
    only materialises as an explicit ``False`` when the inherited value was
    truthy, so subtrees that never had the property stay free of it.
    """

    def __init__(self, parsers: Optional[StyleParsers] = None, base_font_size: float = BASE_FONT_SIZE) -> None:
        self._parsers = parsers or DEFAULT_PARSERS
        self._base_font_size = base_font_size

    def local_delta(self, element: Element) -> Dict[str, Any]:
        """Parse the element's own style attributes, dropping malformed values."""
        delta: Dict[str, Any] = {}
        for attribute, parser in self._parsers.items():
            raw = element.get(attribute)
            if raw is None:
                continue
            value = parser(raw)
            if value is None:
                LOGGER.debug("Ignoring %s=%r on <%s>", attribute, raw, element.tag)
                continue
            delta[_FIELD_FOR_ATTRIBUTE[attribute]] = value
        return delta

    def resolve(self, element: Element, inherited: Optional[ResolvedStyle] = None) -> ResolvedStyle:
        return self.merge(inherited or EMPTY_STYLE, self.local_delta(element))

    def merge(self, inherited: ResolvedStyle, delta: Dict[str, Any]) -> ResolvedStyle:
        values = {f.name: getattr(inherited, f.name) for f in fields(inherited)}
        delta = dict(delta)
        line_height = delta.pop("line_height", None)
        for name, value in delta.items():
            if value is OFF:
                if getattr(inherited, name):
                    values[name] = False
                continue
            values[name] = value

        font_size = values["font_size"] or self._base_font_size
        if isinstance(line_height, attrs.LineHeight):
            if line_height.absolute:
                values["line_height_points"] = line_height.value
                values["line_height"] = line_height.value / font_size
            else:
                values["line_height_points"] = None
                values["line_height"] = line_height.value
        elif "font_size" in delta and values["line_height_points"] is not None:
            values["line_height"] = values["line_height_points"] / font_size
        return ResolvedStyle(**values)
