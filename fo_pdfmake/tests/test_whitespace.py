"""Tests for whitespace normalisation helpers."""
import unittest

from fo_pdfmake.utils.whitespace import (
    is_blank,
    is_line_break,
    merge_adjacent_strings,
    normalize_children,
    normalize_whitespace,
)


class _Run:
    """Stand-in for an inline child."""


def _never_inline(child: object) -> bool:
    return False


def _is_run(child: object) -> bool:
    return isinstance(child, _Run)


class WhitespaceTest(unittest.TestCase):
    """Collapsing, trimming and separating text."""

    def test_normalize_whitespace(self) -> None:
        self.assertEqual(normalize_whitespace("a\n\tb   c"), "a b c")
        self.assertEqual(normalize_whitespace(""), "")

    def test_blank_and_line_break(self) -> None:
        self.assertTrue(is_blank("  \n"))
        self.assertFalse(is_blank(" x "))
        self.assertTrue(is_line_break("\n\n"))
        self.assertFalse(is_line_break("\n "))

    def test_edges_trimmed_and_blank_strings_dropped(self) -> None:
        children = ["  Hello  world ", "   ", "\n", "end  "]
        self.assertEqual(normalize_children(children, _never_inline), ["Hello world ", "\n", "end"])

    def test_adjacent_inline_children_get_a_space(self) -> None:
        first, second = _Run(), _Run()
        self.assertEqual(normalize_children([first, second], _is_run), [first, " ", second])

    def test_preserve_keeps_text_verbatim(self) -> None:
        self.assertEqual(normalize_children(["  a\n", "", "b"], _never_inline, preserve=True), ["  a\n", "b"])

    def test_merge_adjacent_strings(self) -> None:
        marker = _Run()
        self.assertEqual(merge_adjacent_strings(["a", "b", marker, "c"]), ["ab", marker, "c"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
