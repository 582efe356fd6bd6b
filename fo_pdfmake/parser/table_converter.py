"""Convert ``table`` elements and bordered blocks into table content nodes."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, Union

from fo_pdfmake.model.content import (
    EMPTY_STYLE,
    ContentNode,
    LayoutRule,
    Placement,
    ResolvedStyle,
    Table,
    TableCell,
    TableLayout,
)
from fo_pdfmake.model.elements import Element
from fo_pdfmake.parser.attribute_parser import (
    BorderSpec,
    parse_border,
    parse_int,
    parse_margin,
    parse_padding,
    parse_percentage,
    parse_placement,
    parse_proportional_width,
    parse_side_borders,
)
from fo_pdfmake.utils.logger import get_logger
from fo_pdfmake.utils.units import parse_length

if TYPE_CHECKING:
    from fo_pdfmake.parser.transducer import Transducer

LOGGER = get_logger(__name__)

AUTO_WIDTH = "*"
DEFAULT_TABLE_PERCENT = 100.0
OUTER_BORDER_COLOR = "#000000"
INNER_BORDER_COLOR = "#AAAAAA"
DEFAULT_LINE_WIDTH = 1.0

Width = Union[str, float]
Padding = Tuple[float, float, float, float]


@dataclass(slots=True)
class TableMetrics:
    """Border and padding information gathered while converting cells."""

    total_cells: int = 0
    cell_borders: List[BorderSpec] = field(default_factory=list)
    cell_padding: List[Padding] = field(default_factory=list)
    has_nested_tables: bool = False


def format_percent(value: float) -> str:
    """Render a percentage without a trailing ``.0`` for whole numbers."""
    if float(value).is_integer():
        return f"{int(value)}%"
    return f"{value!r}%"


def column_widths(table: Element) -> Tuple[Width, ...]:
    """Column widths from ``table-column`` children.

    When every column is proportional the proportions become percentages of
    the table width; otherwise lengths become points and proportional
    columns share the remaining space.
    """
    raw: List[str] = []
    for column in table.elements("table-column"):
        repeat = parse_int(column.get("number-columns-repeated")) or 1
        raw.extend([column.get("column-width") or AUTO_WIDTH] * max(repeat, 1))
    if not raw:
        return (AUTO_WIDTH,)

    proportions = [parse_proportional_width(width) for width in raw]
    if all(proportion is not None for proportion in proportions):
        total = sum(proportions)  # type: ignore[arg-type]
        table_percent = parse_percentage(table.get("width")) or DEFAULT_TABLE_PERCENT
        if total <= 0:
            return tuple(AUTO_WIDTH for _ in raw)
        return tuple(format_percent(proportion / total * table_percent) for proportion in proportions)  # type: ignore[operator]

    widths: List[Width] = []
    for width, proportion in zip(raw, proportions):
        if proportion is not None:
            widths.append(AUTO_WIDTH)
            continue
        points = parse_length(width)
        widths.append(points if points is not None else width)
    return tuple(widths)


def _all_equal(values: Sequence[object]) -> bool:
    return all(value == values[0] for value in values[1:])


def _constant_rules(width: float, color: str) -> List[Tuple[str, LayoutRule]]:
    return [
        ("hLineWidth", LayoutRule(width)),
        ("vLineWidth", LayoutRule(width)),
        ("hLineColor", LayoutRule(color)),
        ("vLineColor", LayoutRule(color)),
    ]


def build_layout(metrics: TableMetrics, table_border: Optional[BorderSpec]) -> TableLayout:
    """Derive line and padding rules from the table and cell border pattern."""
    rules: List[Tuple[str, LayoutRule]] = []
    has_table_border = table_border is not None and (table_border.width is not None or table_border.color is not None)
    borders = metrics.cell_borders
    uniform_cells = bool(borders) and _all_equal(borders)

    if has_table_border and borders:
        if uniform_cells:
            first = borders[0]
            width = first.width or table_border.width or DEFAULT_LINE_WIDTH  # type: ignore[union-attr]
            outer = table_border.color or OUTER_BORDER_COLOR  # type: ignore[union-attr]
            inner = first.color or INNER_BORDER_COLOR
            rules = [
                ("hLineWidth", LayoutRule(width)),
                ("vLineWidth", LayoutRule(width)),
                ("hLineColor", LayoutRule(inner, first=outer, last=outer, axis="body")),
                ("vLineColor", LayoutRule(inner, first=outer, last=outer, axis="widths")),
            ]
    elif not has_table_border and borders and len(borders) == metrics.total_cells:
        if uniform_cells:
            first = borders[0]
            rules = _constant_rules(first.width or DEFAULT_LINE_WIDTH, first.color or OUTER_BORDER_COLOR)
    elif has_table_border and not borders:
        rules = _constant_rules(
            table_border.width or DEFAULT_LINE_WIDTH,  # type: ignore[union-attr]
            table_border.color or OUTER_BORDER_COLOR,  # type: ignore[union-attr]
        )
    default_border = bool(rules)

    layout = dict(rules)
    if metrics.has_nested_tables:
        for name in ("paddingLeft", "paddingRight", "paddingTop", "paddingBottom", "hLineWidth", "vLineWidth"):
            layout[name] = LayoutRule(0)
    elif metrics.cell_padding and len(metrics.cell_padding) == metrics.total_cells and _all_equal(metrics.cell_padding):
        left, top, right, bottom = metrics.cell_padding[0]
        layout.update(
            {
                "paddingLeft": LayoutRule(left),
                "paddingRight": LayoutRule(right),
                "paddingTop": LayoutRule(top),
                "paddingBottom": LayoutRule(bottom),
            }
        )
    return TableLayout(rules=tuple(layout.items()), default_border=default_border)


class TableConverter:
    """Build :class:`Table` nodes from XSL-FO table markup."""

    def convert(self, element: Element, inherited: ResolvedStyle, transducer: "Transducer") -> Optional[Table]:
        table_style = transducer.styles.resolve(element, inherited)
        metrics = TableMetrics()
        header_rows: List[Tuple[TableCell, ...]] = []
        body_rows: List[Tuple[TableCell, ...]] = []
        footer_rows: List[Tuple[TableCell, ...]] = []

        for section in element.elements():
            if section.tag == "table-header":
                header_rows.extend(self._convert_rows(section, transducer, metrics))
            elif section.tag == "table-body":
                for nested in section.elements("table-header"):
                    header_rows.extend(self._convert_rows(nested, transducer, metrics))
                body_rows.extend(self._convert_rows(section, transducer, metrics))
            elif section.tag == "table-footer":
                footer_rows.extend(self._convert_rows(section, transducer, metrics))

        rows = [*header_rows, *body_rows, *footer_rows]
        if not rows:
            LOGGER.debug("Dropping table without rows")
            return None

        margin = parse_margin(element) or parse_padding(element.get("padding"))
        placement = replace(parse_placement(element), margin=margin)
        return Table(
            widths=column_widths(element),
            body=tuple(rows),
            header_rows=len(header_rows),
            layout=build_layout(metrics, parse_border(element)),
            style=table_style.difference(inherited),
            placement=placement,
        )

    def bordered_block(
        self,
        content: ContentNode,
        borders: Tuple[BorderSpec, ...],
        fill_color: Optional[str],
        placement: Placement,
    ) -> Table:
        """Single-cell table drawing a block's per-side borders."""
        left, top, right, bottom = borders
        rules = (
            ("hLineWidth", LayoutRule(bottom.width, first=top.width)),
            ("vLineWidth", LayoutRule(right.width, first=left.width)),
            ("hLineColor", LayoutRule(bottom.color or OUTER_BORDER_COLOR, first=top.color or OUTER_BORDER_COLOR)),
            ("vLineColor", LayoutRule(right.color or OUTER_BORDER_COLOR, first=left.color or OUTER_BORDER_COLOR)),
        )
        cell = TableCell(content=content, fill_color=fill_color)
        return Table(widths=(AUTO_WIDTH,), body=((cell,),), layout=TableLayout(rules=rules), placement=placement)

    # ------------------------------------------------------------------
    def _convert_rows(self, section: Element, transducer: "Transducer", metrics: TableMetrics) -> List[Tuple[TableCell, ...]]:
        rows: List[Tuple[TableCell, ...]] = []
        # Column index -> rows still covered by a cell spanning down from above.
        spanned: Dict[int, int] = {}
        for row in section.elements("table-row"):
            fill = transducer.styles.resolve(row, EMPTY_STYLE).background
            cells = self._convert_cells(row.elements("table-cell"), transducer, metrics, fill, spanned)
            if cells:
                rows.append(cells)
        loose_cells = section.elements("table-cell")
        if loose_cells:
            rows.append(self._convert_cells(loose_cells, transducer, metrics, None, spanned))
        return rows

    def _convert_cells(
        self,
        cells: Sequence[Element],
        transducer: "Transducer",
        metrics: TableMetrics,
        row_fill: Optional[str],
        spanned: Dict[int, int],
    ) -> Tuple[TableCell, ...]:
        converted: List[TableCell] = []

        def skip_spanned() -> None:
            while spanned.get(len(converted), 0) > 0:
                spanned[len(converted)] -= 1
                converted.append(TableCell(placeholder=True))

        for cell in cells:
            skip_spanned()
            metrics.total_cells += 1
            if any(child.tag == "table" for child in cell.elements()):
                metrics.has_nested_tables = True

            cell_style = transducer.styles.resolve(cell, EMPTY_STYLE)
            rule = transducer.config.rule_for("table-cell")
            own = cell_style.only(rule.fields) if rule is not None else EMPTY_STYLE
            content = transducer.wrap_region(transducer.transduce_children(cell, cell_style), own)

            border = None
            if parse_side_borders(cell) is not None:
                border = (True, True, True, True)
                metrics.cell_borders.append(parse_border(cell) or BorderSpec())
            padding = parse_padding(cell.get("padding"))
            if padding is not None:
                metrics.cell_padding.append(padding)

            col_span = max(parse_int(cell.get("number-columns-spanned")) or 1, 1)
            row_span = max(parse_int(cell.get("number-rows-spanned")) or 1, 1)
            if row_span > 1:
                for column in range(len(converted), len(converted) + col_span):
                    spanned[column] = row_span - 1
            converted.append(
                TableCell(
                    content=content,
                    col_span=col_span,
                    row_span=row_span,
                    fill_color=cell_style.background or row_fill,
                    border=border,
                    margin=padding,
                )
            )
            converted.extend(TableCell(placeholder=True) for _ in range(col_span - 1))
        skip_spanned()
        return tuple(converted)
