"""Static tables describing which child tags inherit a parent's resolved style."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from fo_pdfmake.model.content import EMPTY_STYLE, ResolvedStyle

INHERITABLE_TEXT_ATTRIBUTES: Tuple[str, ...] = (
    "color",
    "font-family",
    "font-size",
    "font-weight",
    "font-style",
    "background-color",
    "text-align",
    "text-decoration",
    "line-height",
)

# Markup attribute -> ResolvedStyle fields it drives.
ATTRIBUTE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "color": ("color",),
    "font-family": ("font",),
    "font-size": ("font_size",),
    "font-weight": ("bold",),
    "font-style": ("italics",),
    "background-color": ("background",),
    "text-align": ("alignment",),
    "text-decoration": ("decoration",),
    "line-height": ("line_height", "line_height_points"),
}


@dataclass(frozen=True, slots=True)
class InheritanceRule:
    """Children of ``tag`` listed in ``inheriters`` receive ``attributes``."""

    tag: str
    inheriters: FrozenSet[str]
    attributes: Tuple[str, ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        names = []
        for attribute in self.attributes:
            names.extend(ATTRIBUTE_FIELDS.get(attribute, ()))
        return tuple(names)


class InheritanceConfig:
    """Tag-keyed lookup of inheritance rules."""

    def __init__(self, rules: Iterable[InheritanceRule]) -> None:
        self._rules: Dict[str, InheritanceRule] = {}
        for rule in rules:
            self._rules[rule.tag] = rule

    def rule_for(self, tag: str) -> Optional[InheritanceRule]:
        return self._rules.get(tag)

    def inherited_for(self, parent_tag: str, child_tag: str, style: ResolvedStyle) -> ResolvedStyle:
        """Style a child receives from its parent; non-inheriters start from nothing."""
        rule = self._rules.get(parent_tag)
        if rule is None or child_tag not in rule.inheriters:
            return EMPTY_STYLE
        return style.only(rule.fields)

    def merged(self, other: "InheritanceConfig") -> "InheritanceConfig":
        """Combine two configurations; rules of ``other`` win for shared tags."""
        return InheritanceConfig([*self._rules.values(), *other._rules.values()])


def _rule(tag: str, inheriters: Sequence[str], attributes: Sequence[str] = INHERITABLE_TEXT_ATTRIBUTES) -> InheritanceRule:
    return InheritanceRule(tag=tag, inheriters=frozenset(inheriters), attributes=tuple(attributes))


BLOCK_INHERITANCE = InheritanceConfig(
    [
        _rule("flow", ["block", "inline", "list-block"]),
        _rule("static-content", ["block", "inline", "list-block"]),
        _rule("block", ["block", "inline", "list-block"]),
        _rule("inline", ["inline"]),
        _rule("list-block", ["list-item"]),
        _rule("list-item", ["list-item-label", "list-item-body"]),
        _rule("list-item-label", ["block", "inline"]),
        _rule("list-item-body", ["block", "inline"]),
    ]
)

TABLE_INHERITANCE = InheritanceConfig(
    [_rule("table-cell", ["block", "inline"], ["color", "text-align", "font-size", "font-family"])]
)

DEFAULT_INHERITANCE = BLOCK_INHERITANCE.merged(TABLE_INHERITANCE)


def custom_block_config(attributes: Sequence[str]) -> InheritanceConfig:
    """Block-to-block/inline inheritance restricted to the given attributes."""
    return InheritanceConfig([_rule("block", ["block", "inline"], attributes)])


def minimal_block_config() -> InheritanceConfig:
    return custom_block_config(["color", "font-family", "font-size", "font-weight", "font-style"])
