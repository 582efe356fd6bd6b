"""Render a document definition as JSON text for inspection."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional

CALLBACK_KEYS = ("header", "footer")


def to_serializable(value: Any) -> Any:
    """Replace callables with a ``<function name>`` marker, recursing into containers."""
    if callable(value):
        return f"<function {getattr(value, '__name__', type(value).__name__)}>"
    if isinstance(value, dict):
        return {key: to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    return value


def sample_callbacks(definition: Dict[str, Any], pages: Iterable[int], page_count: int) -> Dict[str, Dict[str, Any]]:
    """Evaluate the header/footer callbacks for the given page numbers."""
    samples: Dict[str, Dict[str, Any]] = {}
    for key in CALLBACK_KEYS:
        callback = definition.get(key)
        if callable(callback):
            samples[key] = {str(page): to_serializable(callback(page, page_count)) for page in pages}
    return samples


def format_definition(
    definition: Dict[str, Any],
    indent: int = 2,
    sample_pages: Optional[Iterable[int]] = None,
    page_count: int = 0,
) -> str:
    payload = to_serializable(definition)
    if sample_pages is not None:
        payload["_samples"] = sample_callbacks(definition, list(sample_pages), page_count)
    return json.dumps(payload, indent=indent, ensure_ascii=False)
