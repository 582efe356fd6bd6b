"""Tests for length conversion and page-size helpers."""
import unittest

from fo_pdfmake.utils.units import convert_to_points, determine_page_size, parse_length, parse_margins


class ConvertToPointsTest(unittest.TestCase):
    """Unit conversion to points."""

    def test_units(self) -> None:
        self.assertEqual(convert_to_points("1in"), 72)
        self.assertAlmostEqual(convert_to_points("1cm"), 28.35)
        self.assertAlmostEqual(convert_to_points("10mm"), 28.35)
        self.assertEqual(convert_to_points("12pt"), 12)
        self.assertEqual(convert_to_points("16px"), 12)
        self.assertEqual(convert_to_points("7"), 7)

    def test_unit_is_case_insensitive(self) -> None:
        self.assertEqual(convert_to_points("2IN"), 144)

    def test_invalid_values_are_zero(self) -> None:
        self.assertEqual(convert_to_points(None), 0)
        self.assertEqual(convert_to_points(""), 0)
        self.assertEqual(convert_to_points("10xyz"), 0)
        self.assertEqual(convert_to_points("abc"), 0)

    def test_parse_length_reports_failure(self) -> None:
        self.assertIsNone(parse_length("auto"))
        self.assertEqual(parse_length("0.5in"), 36)


class ParseMarginsTest(unittest.TestCase):
    """CSS-style margin shorthand expansion."""

    def test_single_value(self) -> None:
        self.assertEqual(parse_margins("1in"), [72, 72, 72, 72])

    def test_vertical_horizontal(self) -> None:
        self.assertEqual(parse_margins("1in 2in"), [144, 72, 144, 72])

    def test_four_values(self) -> None:
        self.assertEqual(parse_margins("1in 2in 3in 4in"), [288, 72, 144, 216])

    def test_unsupported_count(self) -> None:
        with self.assertLogs("fo_pdfmake.utils.units", level="WARNING"):
            self.assertEqual(parse_margins("1in 2in 3in"), [0, 0, 0, 0])

    def test_missing_value(self) -> None:
        self.assertEqual(parse_margins(None), [0, 0, 0, 0])


class PageSizeTest(unittest.TestCase):
    """Named page size detection."""

    def test_named_sizes(self) -> None:
        self.assertEqual(determine_page_size(612, 792), "LETTER")
        self.assertEqual(determine_page_size(595, 842), "A4")
        self.assertEqual(determine_page_size(612, 1008), "LEGAL")

    def test_custom_size(self) -> None:
        self.assertEqual(determine_page_size(500.1234, 700.4567), {"width": 500.12, "height": 700.46})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
