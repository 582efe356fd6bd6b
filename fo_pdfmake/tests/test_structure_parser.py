"""Tests for layout master and header/footer resolution."""
import unittest

from fo_pdfmake.model.page_model import ALL, FIRST, REPEATABLE, REST
from fo_pdfmake.parser.structure_parser import (
    StaticContentLayout,
    StructureResolver,
    find_flows,
    is_should_run,
    super_header_footer,
)
from fo_pdfmake.utils.xml_utils import parse_xml

REPORT = """
<root xmlns="http://www.w3.org/1999/XSL/Format">
  <layout-master-set>
    <simple-page-master master-name="first" page-width="8.5in" page-height="11in" margin="0.25in">
      <region-body margin="0.25in 0.25in 1.2cm 0.25in"/>
      <region-before region-name="first-header" extent="1in"/>
      <region-after region-name="footer" extent="1cm"/>
    </simple-page-master>
    <simple-page-master master-name="rest" margin="0.25in">
      <region-body margin-left="0.25in" margin-right="0.25in" margin-bottom="1.2cm"/>
      <region-before region-name="rest-header" extent="0.5in"/>
      <region-after region-name="footer" extent="1cm"/>
    </simple-page-master>
    <page-sequence-master master-name="report">
      <single-page-master-reference master-reference="first"/>
      <repeatable-page-master-reference master-reference="rest"/>
    </page-sequence-master>
  </layout-master-set>
  <page-sequence master-reference="report">
    <static-content flow-name="first-header"><block>Title</block></static-content>
    <static-content flow-name="footer"><block>Footer</block></static-content>
    <static-content flow-name="rest-header"><block>Continued</block></static-content>
    <flow flow-name="xsl-region-body"><block>Body</block></flow>
  </page-sequence>
</root>
"""


class PageMasterTest(unittest.TestCase):
    """Simple page masters and their calculated margins."""

    def setUp(self) -> None:
        self.resolver = StructureResolver()
        self.structure = self.resolver.resolve_structure(parse_xml(REPORT))

    def test_page_size_and_margins(self) -> None:
        master = self.structure.page_masters["first"]
        self.assertEqual(master.page_size.definition, "LETTER")
        self.assertEqual(master.page_margin, (18, 18, 18, 18))
        self.assertEqual(master.header.height, 72)
        self.assertAlmostEqual(master.footer.height, 28.35)

    def test_calculated_page_margins(self) -> None:
        left, top, right, bottom = self.structure.page_masters["first"].calculated_page_margins
        self.assertEqual((left, top, right), (36, 72, 36))
        self.assertAlmostEqual(bottom, 80.37)

    def test_master_without_size_uses_a4(self) -> None:
        master = self.structure.page_masters["rest"]
        self.assertEqual(master.page_size.definition, "A4")
        self.assertIsNone(master.page_size.raw_width)

    def test_master_without_header(self) -> None:
        master = self.resolver.parse_simple_page_master(
            parse_xml(
                '<simple-page-master master-name="plain" margin="0.25in">'
                '<region-body margin-left="0.25in" margin-right="0.25in" margin-bottom="1.2cm"/>'
                '<region-after extent="1cm"/></simple-page-master>'
            )
        )
        left, top, right, bottom = master.calculated_page_margins
        self.assertEqual((left, top, right), (36, 0, 36))
        self.assertAlmostEqual(bottom, 80.37)
        self.assertEqual(master.footer.name, "xsl-region-after")

    def test_missing_layout_master_set(self) -> None:
        with self.assertLogs("fo_pdfmake.parser.structure_parser", level="WARNING"):
            structure = self.resolver.resolve_structure(parse_xml("<root><page-sequence/></root>"))
        self.assertEqual(structure.page_masters, {})
        self.assertEqual(structure.headers, [])


class PageSequenceMasterTest(unittest.TestCase):
    """Reference ordering and governing masters."""

    def setUp(self) -> None:
        self.resolver = StructureResolver()
        self.structure = self.resolver.resolve_structure(parse_xml(REPORT))

    def test_reference_kinds(self) -> None:
        sequence = self.structure.sequences["report"]
        self.assertEqual([ref.repetition for ref in sequence.references], [FIRST, REPEATABLE])
        self.assertEqual(sequence.references[1].master.name, "rest")

    def test_governing_master(self) -> None:
        self.assertEqual(self.resolver.governing_master(self.structure, "report", 1).name, "first")
        self.assertEqual(self.resolver.governing_master(self.structure, "report", 4).name, "rest")
        self.assertEqual(self.resolver.governing_master(self.structure, "first", 4).name, "first")
        self.assertIsNone(self.resolver.governing_master(self.structure, "missing"))

    def test_conditional_alternatives(self) -> None:
        node = parse_xml(
            '<page-sequence-master master-name="alt"><repeatable-page-master-alternatives>'
            '<conditional-page-master-reference master-reference="first" page-position="first"/>'
            '<conditional-page-master-reference master-reference="rest" page-position="rest"/>'
            "</repeatable-page-master-alternatives></page-sequence-master>"
        )
        sequence = self.resolver.parse_page_sequence_master(node, self.structure)
        self.assertEqual([ref.repetition for ref in sequence.references], [FIRST, REPEATABLE])
        self.assertEqual(sequence.governing_master(2).name, "rest")

    def test_unknown_master_is_reported(self) -> None:
        node = parse_xml(
            '<page-sequence-master master-name="broken">'
            '<single-page-master-reference master-reference="nowhere"/></page-sequence-master>'
        )
        with self.assertLogs("fo_pdfmake.parser.structure_parser", level="WARNING"):
            sequence = self.resolver.parse_page_sequence_master(node, self.structure)
        self.assertIsNone(sequence.references[0].master)


class HeaderFooterTest(unittest.TestCase):
    """Classification and page callbacks of static content."""

    def setUp(self) -> None:
        self.resolver = StructureResolver()
        self.structure = self.resolver.resolve_structure(parse_xml(REPORT))

    def test_classification(self) -> None:
        first = self.resolver.get_header_footer_information(self.structure, "report", "first-header")
        rest = self.resolver.get_header_footer_information(self.structure, "report", "rest-header")
        footer = self.resolver.get_header_footer_information(self.structure, "report", "footer")
        self.assertEqual((first.applicability, first.page_master_reference), (FIRST, "first"))
        self.assertEqual((rest.applicability, rest.page_master_reference), (REST, "rest"))
        self.assertEqual(footer.applicability, ALL)
        self.assertEqual(footer.to_dict()["page-sequence-master"], "report")

    def test_simple_master_reference_applies_everywhere(self) -> None:
        information = self.resolver.get_header_footer_information(self.structure, "first", "footer")
        self.assertEqual(information.applicability, ALL)
        self.assertIsNone(information.sequence_master_name)

    def test_unknown_regions(self) -> None:
        self.assertIsNone(self.resolver.get_header_footer_information(self.structure, "report", "sidebar"))
        self.assertIsNone(self.resolver.get_header_footer_information(self.structure, "missing", "footer"))
        flags = self.resolver.is_header_or_footer(self.structure, "missing", "footer")
        self.assertFalse(flags.is_header or flags.is_footer)

    def test_header_or_footer_flags(self) -> None:
        self.assertTrue(self.resolver.is_header_or_footer(self.structure, "first", "first-header").is_header)
        self.assertTrue(self.resolver.is_header_or_footer(self.structure, "rest", "footer").is_footer)

    def test_entries_are_registered(self) -> None:
        self.assertEqual(len(self.structure.headers), 2)
        self.assertEqual(len(self.structure.footers), 1)
        footer = self.structure.footers[0].structure
        self.assertEqual(footer(1), ["Footer"])
        self.assertEqual(footer(7, 9), ["Footer"])

    def test_super_header_dispatches_in_order(self) -> None:
        header = super_header_footer(self.structure.headers)
        self.assertEqual(header(1), ["Title"])
        self.assertEqual(header(2), ["Continued"])
        self.assertEqual(header(2, 5), ["Continued"])

    def test_callbacks_return_fresh_copies(self) -> None:
        header = super_header_footer(self.structure.headers)
        header(1).append("mutated")
        self.assertEqual(header(1), ["Title"])

    def test_static_layout_without_information(self) -> None:
        layout = self.resolver.static_content_layout(None, ["ignored"])
        self.assertEqual(layout(1), "")

    def test_static_layout_applicability(self) -> None:
        layout = StaticContentLayout(applicability=REST, content=["x"])
        self.assertEqual(layout(1), "")
        self.assertEqual(layout(2), ["x"])

    def test_empty_dispatch(self) -> None:
        self.assertEqual(super_header_footer([])(1), "")


class HelperTest(unittest.TestCase):
    """Page predicates and flow lookup."""

    def test_is_should_run(self) -> None:
        self.assertTrue(is_should_run(ALL, 0))
        self.assertTrue(is_should_run(FIRST, 1))
        self.assertFalse(is_should_run(FIRST, 2))
        self.assertFalse(is_should_run(FIRST, 0))
        self.assertFalse(is_should_run(REST, 1))
        self.assertTrue(is_should_run(REST, 2))
        self.assertFalse(is_should_run(REST, -1))
        self.assertFalse(is_should_run("custom", 1))
        self.assertFalse(is_should_run(None, 1))

    def test_find_flows(self) -> None:
        root = parse_xml(REPORT)
        self.assertEqual([flow.get("flow-name") for flow in find_flows(root)], ["xsl-region-body"])
        self.assertEqual([flow.tag for flow in find_flows(root, "footer")], ["static-content"])
        self.assertEqual(find_flows(root, "nothing"), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
