"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from fo_pdfmake.model.page_model import DocumentStructure
from fo_pdfmake.renderer.formatter import format_definition, to_serializable


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, definition: Dict[str, Any], structure: DocumentStructure) -> None:
        """Persist the resolved structure and the definition with sampled callbacks."""
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / "document_structure.json").write_text(
            json.dumps(self._serialize(structure), indent=2), encoding="utf-8"
        )
        (self.directory / "document_definition.json").write_text(
            format_definition(definition, sample_pages=(1, 2), page_count=2), encoding="utf-8"
        )

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value) and not isinstance(value, type):
            if callable(value):
                return to_serializable(value)
            return {f.name: self._serialize(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
