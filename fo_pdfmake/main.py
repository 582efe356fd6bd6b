"""Entry-point for the XSL-FO to document-definition pipeline."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fo_pdfmake.model.page_model import DocumentStructure
from fo_pdfmake.parser.structure_parser import StructureResolver
from fo_pdfmake.parser.transducer import Transducer
from fo_pdfmake.renderer.definition_builder import DefinitionBuilder
from fo_pdfmake.renderer.formatter import format_definition
from fo_pdfmake.utils.debug import DebugDumper
from fo_pdfmake.utils.logger import get_logger, set_verbose
from fo_pdfmake.utils.xml_utils import load_document

LOGGER = get_logger(__name__)

OUTPUT_NAME = "document_definition.json"


def build_document_definition(fo_path: Path, flow: Optional[str] = None) -> Tuple[Dict[str, Any], DocumentStructure]:
    """Parse an XSL-FO file, resolve its structure and build the document definition."""
    root = load_document(fo_path)
    transducer = Transducer()
    resolver = StructureResolver(transducer)
    structure = resolver.resolve_structure(root)
    builder = DefinitionBuilder(transducer, resolver)
    return builder.convert_to_definition(root, flow_name=flow, structure=structure), structure


def write_definition(definition: Dict[str, Any], output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / OUTPUT_NAME
    target.write_text(format_definition(definition), encoding="utf-8")
    return target


def main(fo_file: str, output_dir: Optional[str] = None, flow: Optional[str] = None, debug: bool = False) -> Path:
    """Run the XSL-FO → element tree → document definition pipeline."""
    fo_path = Path(fo_file).resolve()
    if not fo_path.exists():
        raise FileNotFoundError(f"XSL-FO file not found: {fo_path}")

    LOGGER.info("Building document definition for %s", fo_path.name)
    definition, structure = build_document_definition(fo_path, flow)

    if output_dir is None:
        output_dir = str(fo_path.with_suffix(""))

    output_path = Path(output_dir).resolve()
    LOGGER.info("Writing definition into %s", output_path)
    target = write_definition(definition, output_path)

    if debug:
        DebugDumper(output_path / "debug").dump(definition, structure)
    return target


if __name__ == "__main__":  # pragma: no cover
    import argparse

    parser = argparse.ArgumentParser(description="Convert XSL-FO documents into pdfmake document definitions")
    parser.add_argument("fo_file", help="Path to the input .fo file")
    parser.add_argument("--output", help="Directory to write generated artifacts")
    parser.add_argument("--flow", help="Convert only the flow or static-content with this flow-name")
    parser.add_argument("--debug", action="store_true", help="Dump intermediate structures and verbose logs")

    args = parser.parse_args()
    set_verbose(args.debug)
    main(args.fo_file, args.output, flow=args.flow, debug=args.debug)
