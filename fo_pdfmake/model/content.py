"""Content model emitted by the transducer and its pdfmake-style serialisation."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


class ExplicitOff:
    """Marker for an attribute that explicitly resets an inherited value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OFF"

    def __bool__(self) -> bool:
        return False


OFF = ExplicitOff()

# Field name -> document-definition key. ``line_height_points`` is internal.
STYLE_KEYS: Dict[str, str] = {
    "bold": "bold",
    "italics": "italics",
    "decoration": "decoration",
    "font_size": "fontSize",
    "color": "color",
    "background": "background",
    "alignment": "alignment",
    "font": "font",
    "line_height": "lineHeight",
}


@dataclass(frozen=True, slots=True)
class ResolvedStyle:
    """Effective text style of a node; ``None`` means inherit silently."""

    bold: Optional[bool] = None
    italics: Optional[bool] = None
    decoration: Optional[Union[str, bool]] = None
    font_size: Optional[float] = None
    color: Optional[str] = None
    background: Optional[str] = None
    alignment: Optional[str] = None
    font: Optional[str] = None
    line_height: Optional[float] = None
    line_height_points: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in STYLE_KEYS)

    def difference(self, base: "ResolvedStyle") -> "ResolvedStyle":
        """Return the fields whose value differs from ``base``; these are the ones a node emits."""
        changes = {
            name: getattr(self, name)
            for name in STYLE_KEYS
            if getattr(self, name) is not None and getattr(self, name) != getattr(base, name)
        }
        return ResolvedStyle(**changes)

    def only(self, names: Iterable[str]) -> "ResolvedStyle":
        """Keep only the named fields."""
        allowed = set(names)
        return ResolvedStyle(**{f.name: getattr(self, f.name) for f in fields(self) if f.name in allowed})

    def fill_from(self, other: "ResolvedStyle") -> "ResolvedStyle":
        """Return a copy where unset fields take their value from ``other``."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name, value in values.items():
            if value is None:
                values[name] = getattr(other, name)
        return ResolvedStyle(**values)

    def to_properties(self) -> Dict[str, Any]:
        return {key: getattr(self, name) for name, key in STYLE_KEYS.items() if getattr(self, name) is not None}


EMPTY_STYLE = ResolvedStyle()


@dataclass(frozen=True, slots=True)
class Placement:
    """Block-level placement options that do not inherit."""

    margin: Optional[Tuple[float, float, float, float]] = None
    page_break: Optional[str] = None
    unbreakable: bool = False
    keep_with_previous: bool = False

    @property
    def is_empty(self) -> bool:
        return self.margin is None and self.page_break is None and not self.unbreakable and not self.keep_with_previous

    def fill_from(self, other: "Placement") -> "Placement":
        return Placement(
            margin=self.margin if self.margin is not None else other.margin,
            page_break=self.page_break or other.page_break,
            unbreakable=self.unbreakable or other.unbreakable,
            keep_with_previous=self.keep_with_previous or other.keep_with_previous,
        )

    def to_properties(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {}
        if self.margin is not None:
            props["margin"] = list(self.margin)
        if self.page_break is not None:
            props["pageBreak"] = self.page_break
        if self.unbreakable:
            props["unbreakable"] = True
        return props


NO_PLACEMENT = Placement()


@dataclass(frozen=True, slots=True)
class TextLiteral:
    """Plain text without any styling of its own."""

    text: str


@dataclass(frozen=True, slots=True)
class StyledRun:
    """Text carrying style; a sequence ``text`` only ever holds literals and runs."""

    text: Union[str, Tuple["ContentNode", ...]]
    style: ResolvedStyle = EMPTY_STYLE
    placement: Placement = NO_PLACEMENT


@dataclass(frozen=True, slots=True)
class ListBlock:
    """Bulleted or numbered list."""

    kind: str
    items: Tuple["ContentNode", ...]
    style: ResolvedStyle = EMPTY_STYLE
    placement: Placement = NO_PLACEMENT


@dataclass(frozen=True, slots=True)
class StackBlock:
    """Vertical sequence of block-level content."""

    items: Tuple["ContentNode", ...]
    style: ResolvedStyle = EMPTY_STYLE
    placement: Placement = NO_PLACEMENT


@dataclass(frozen=True, slots=True)
class LayoutRule:
    """Callable ``(index, node) -> value`` used for table line and padding rules.

    ``first`` applies to index 0 and ``last`` to the final line, which is
    found by counting ``node["table"][axis]`` at render time.
    """

    value: Any
    first: Any = None
    last: Any = None
    axis: str = "body"

    def __call__(self, index: int, node: Optional[Dict[str, Any]] = None) -> Any:
        if index == 0 and self.first is not None:
            return self.first
        if self.last is not None and node is not None:
            count = len(node.get("table", {}).get(self.axis, ()))
            if index == count:
                return self.last
        return self.value


@dataclass(frozen=True, slots=True)
class TableLayout:
    """Line and padding rules of a table, keyed by pdfmake layout names."""

    rules: Tuple[Tuple[str, LayoutRule], ...] = ()
    default_border: bool = True

    def rule(self, name: str) -> Optional[LayoutRule]:
        for key, value in self.rules:
            if key == name:
                return value
        return None

    def to_properties(self) -> Dict[str, Any]:
        props: Dict[str, Any] = dict(self.rules)
        if not self.default_border:
            props["defaultBorder"] = False
        return props


@dataclass(frozen=True, slots=True)
class TableCell:
    """One cell of a table row; placeholders stand in for spanned positions."""

    content: Optional["ContentNode"] = None
    col_span: int = 1
    row_span: int = 1
    fill_color: Optional[str] = None
    border: Optional[Tuple[bool, bool, bool, bool]] = None
    margin: Optional[Tuple[float, float, float, float]] = None
    placeholder: bool = False


@dataclass(frozen=True, slots=True)
class Table:
    """Table with column widths, rows of cells and a line layout."""

    widths: Tuple[Union[str, float], ...]
    body: Tuple[Tuple[TableCell, ...], ...]
    header_rows: int = 0
    layout: TableLayout = field(default_factory=TableLayout)
    style: ResolvedStyle = EMPTY_STYLE
    placement: Placement = NO_PLACEMENT


ContentNode = Union[TextLiteral, StyledRun, ListBlock, StackBlock, Table]
BLOCK_LEVEL = (ListBlock, StackBlock, Table)


def is_block_level(node: Any) -> bool:
    """Lists, stacks and tables may never appear inside a text array."""
    return isinstance(node, BLOCK_LEVEL)


def placement_of(node: ContentNode) -> Placement:
    if isinstance(node, TextLiteral):
        return NO_PLACEMENT
    return node.placement


def with_placement(node: ContentNode, placement: Placement) -> ContentNode:
    if isinstance(node, TextLiteral):
        if placement.is_empty:
            return node
        return StyledRun(text=node.text, placement=placement)
    return replace(node, placement=placement)


def apply_style(node: ContentNode, style: ResolvedStyle) -> ContentNode:
    """Fold a wrapper style into a node; values the node sets itself win."""
    if style.is_empty:
        return node
    if isinstance(node, TextLiteral):
        return StyledRun(text=node.text, style=style)
    return replace(node, style=node.style.fill_from(style))


def is_empty_literal(node: object) -> bool:
    return isinstance(node, TextLiteral) and node.text == ""


def to_definition(node: Optional[ContentNode]) -> Any:
    """Serialise a content node into pdfmake's document-definition shape."""
    if node is None:
        return None
    if isinstance(node, TextLiteral):
        return node.text
    if isinstance(node, StyledRun):
        text = node.text if isinstance(node.text, str) else [to_definition(child) for child in node.text]
        return {"text": text, **node.style.to_properties(), **node.placement.to_properties()}
    if isinstance(node, ListBlock):
        key = "ol" if node.kind == "numbered" else "ul"
        return {key: [to_definition(item) for item in node.items], **node.style.to_properties(), **node.placement.to_properties()}
    if isinstance(node, StackBlock):
        return {"stack": [to_definition(item) for item in node.items], **node.style.to_properties(), **node.placement.to_properties()}
    if isinstance(node, Table):
        table: Dict[str, Any] = {"widths": list(node.widths) or ["*"]}
        if node.header_rows:
            table["headerRows"] = node.header_rows
        table["body"] = [[_cell_definition(cell) for cell in row] for row in node.body]
        result: Dict[str, Any] = {"table": table, "layout": node.layout.to_properties()}
        result.update(node.style.to_properties())
        result.update(node.placement.to_properties())
        return result
    raise TypeError(f"Unsupported content node: {type(node).__name__}")


def content_to_definition(nodes: Iterable[ContentNode]) -> List[Any]:
    return [to_definition(node) for node in nodes]


def _cell_definition(cell: TableCell) -> Any:
    if cell.placeholder:
        return {}
    extras: Dict[str, Any] = {}
    if cell.col_span > 1:
        extras["colSpan"] = cell.col_span
    if cell.row_span > 1:
        extras["rowSpan"] = cell.row_span
    if cell.fill_color is not None:
        extras["fillColor"] = cell.fill_color
    if cell.border is not None:
        extras["border"] = list(cell.border)
    if cell.margin is not None:
        extras["margin"] = list(cell.margin)
    content = to_definition(cell.content) if cell.content is not None else ""
    if not extras:
        return content
    if isinstance(content, dict):
        return {**content, **extras}
    return {"text": content, **extras}
