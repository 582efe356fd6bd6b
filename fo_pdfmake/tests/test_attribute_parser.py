"""Tests for attribute value parsers."""
import unittest

from fo_pdfmake.model.content import OFF
from fo_pdfmake.parser.attribute_parser import (
    BorderSpec,
    LineHeight,
    parse_alignment,
    parse_background_color,
    parse_border_shorthand,
    parse_font_family,
    parse_font_size,
    parse_font_style,
    parse_font_weight,
    parse_line_height,
    parse_margin,
    parse_page_break,
    parse_placement,
    parse_side_borders,
    parse_text_decoration,
)
from fo_pdfmake.utils.xml_utils import parse_xml


class FontAttributeTest(unittest.TestCase):
    """Font weight, style, size and family."""

    def test_font_weight(self) -> None:
        self.assertIs(parse_font_weight("bold"), True)
        self.assertIs(parse_font_weight("700"), True)
        self.assertIs(parse_font_weight("600"), True)
        self.assertIs(parse_font_weight("normal"), OFF)
        self.assertIs(parse_font_weight("400"), OFF)
        self.assertIsNone(parse_font_weight("heavy"))
        self.assertIsNone(parse_font_weight(None))

    def test_font_style(self) -> None:
        self.assertIs(parse_font_style("italic"), True)
        self.assertIs(parse_font_style("normal"), OFF)
        self.assertIsNone(parse_font_style("slanted"))

    def test_font_size(self) -> None:
        self.assertEqual(parse_font_size("12pt"), 12)
        self.assertEqual(parse_font_size("16px"), 12)
        self.assertEqual(parse_font_size("1.5em"), 18)
        self.assertEqual(parse_font_size("9"), 9)
        self.assertIsNone(parse_font_size("large"))

    def test_font_family(self) -> None:
        self.assertEqual(parse_font_family("Wingdings"), "wingdings")
        self.assertEqual(parse_font_family("'Times New Roman', serif"), "times new roman")

    def test_text_decoration(self) -> None:
        self.assertEqual(parse_text_decoration("underline"), "underline")
        self.assertEqual(parse_text_decoration("line-through"), "lineThrough")
        self.assertIs(parse_text_decoration("none"), OFF)
        self.assertIsNone(parse_text_decoration("overline"))


class ValueAttributeTest(unittest.TestCase):
    """Colours, alignment, line height and page breaks."""

    def test_alignment(self) -> None:
        self.assertEqual(parse_alignment("center"), "center")
        self.assertEqual(parse_alignment("start"), "left")
        self.assertEqual(parse_alignment("end"), "right")
        self.assertIsNone(parse_alignment("middle"))

    def test_transparent_background_is_dropped(self) -> None:
        self.assertIsNone(parse_background_color("transparent"))
        self.assertEqual(parse_background_color("#EEEEEE"), "#EEEEEE")

    def test_line_height(self) -> None:
        self.assertEqual(parse_line_height("1.5"), LineHeight(1.5))
        self.assertEqual(parse_line_height("150%"), LineHeight(1.5))
        self.assertEqual(parse_line_height("12pt"), LineHeight(12, absolute=True))
        self.assertIsNone(parse_line_height("normal"))

    def test_page_break(self) -> None:
        self.assertEqual(parse_page_break("always"), "before")
        self.assertIsNone(parse_page_break("auto"))


class BoxAttributeTest(unittest.TestCase):
    """Margins and borders read from whole elements."""

    def test_margin_shorthand_and_spacing(self) -> None:
        element = parse_xml('<block margin="2pt" space-before="6pt" margin-left="10pt"/>')
        self.assertEqual(parse_margin(element), (10, 6, 2, 2))

    def test_margin_absent(self) -> None:
        self.assertIsNone(parse_margin(parse_xml("<block/>")))

    def test_border_shorthand(self) -> None:
        self.assertEqual(parse_border_shorthand("1pt solid #FF0000"), BorderSpec(1, "solid", "#FF0000"))
        self.assertEqual(parse_border_shorthand("solid"), BorderSpec(1.0, "solid", None))
        self.assertEqual(parse_border_shorthand("none").width, 0)

    def test_side_borders_override_general(self) -> None:
        element = parse_xml('<block border="0.5pt solid black" border-bottom-width="0pt"/>')
        left, top, right, bottom = parse_side_borders(element)
        self.assertEqual(top.width, 0.5)
        self.assertEqual(left.color, "black")
        self.assertEqual(bottom.width, 0)

    def test_single_side_border(self) -> None:
        element = parse_xml('<block border-top="1pt solid red"/>')
        left, top, right, bottom = parse_side_borders(element)
        self.assertEqual(top, BorderSpec(1, "solid", "red"))
        self.assertEqual((left.width, right.width, bottom.width), (0, 0, 0))

    def test_no_borders(self) -> None:
        self.assertIsNone(parse_side_borders(parse_xml('<block color="red"/>')))

    def test_placement(self) -> None:
        element = parse_xml(
            '<block page-break-before="always" keep-together.within-page="always" '
            'keep-with-previous.within-page="always"/>'
        )
        placement = parse_placement(element)
        self.assertEqual(placement.page_break, "before")
        self.assertTrue(placement.unbreakable)
        self.assertTrue(placement.keep_with_previous)
        self.assertIsNone(placement.margin)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
