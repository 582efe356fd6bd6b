"""Tests for keep-together and keep-with-previous handling."""
import unittest

from fo_pdfmake.model.content import Placement, StackBlock, StyledRun, TextLiteral
from fo_pdfmake.parser.keep_properties import has_keep_together, has_keep_with_previous, process_keep_with_previous
from fo_pdfmake.utils.xml_utils import parse_xml

KEEP = Placement(keep_with_previous=True)


def _kept(text: str) -> StyledRun:
    return StyledRun(text=text, placement=KEEP)


class KeepAttributeTest(unittest.TestCase):
    """Reading keep conditions from attributes."""

    def test_keep_together(self) -> None:
        self.assertTrue(has_keep_together(parse_xml('<block keep-together.within-page="always"/>')))
        self.assertTrue(has_keep_together(parse_xml('<block keep-together="always"/>')))
        self.assertFalse(has_keep_together(parse_xml('<block keep-together="auto"/>')))

    def test_keep_with_previous(self) -> None:
        self.assertTrue(has_keep_with_previous(parse_xml('<block keep-with-previous.within-page="always"/>')))
        self.assertFalse(has_keep_with_previous(parse_xml("<block/>")))


class KeepWithPreviousTest(unittest.TestCase):
    """Grouping marked nodes with their predecessor."""

    def test_marked_nodes_join_one_stack(self) -> None:
        result = process_keep_with_previous([TextLiteral("a"), _kept("b"), _kept("c")])
        self.assertEqual(
            result,
            [StackBlock(items=(TextLiteral("a"), StyledRun("b"), StyledRun("c")), placement=Placement(unbreakable=True))],
        )

    def test_unmarked_node_ends_the_group(self) -> None:
        result = process_keep_with_previous([TextLiteral("a"), _kept("b"), TextLiteral("c"), _kept("d")])
        self.assertEqual(len(result), 2)
        self.assertEqual(result[1].items, (TextLiteral("c"), StyledRun("d")))

    def test_first_marked_node_stays_alone(self) -> None:
        self.assertEqual(process_keep_with_previous([_kept("a")]), [StyledRun("a")])

    def test_unmarked_sequence_is_unchanged(self) -> None:
        nodes = [TextLiteral("a"), TextLiteral("b")]
        self.assertEqual(process_keep_with_previous(nodes), nodes)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
