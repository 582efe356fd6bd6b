"""Whitespace normalisation for text collected from XSL-FO elements."""
from __future__ import annotations

import re
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

LINE_BREAKS_PATTERN = re.compile(r"[\n\r\t]+")
SPACE_RUN_PATTERN = re.compile(r" {2,}")
NEWLINES_ONLY_PATTERN = re.compile(r"^\n+$")


def normalize_whitespace(text: str) -> str:
    """Turn line breaks and tabs into spaces and collapse runs of spaces."""
    if not text:
        return text
    return SPACE_RUN_PATTERN.sub(" ", LINE_BREAKS_PATTERN.sub(" ", text))


def is_blank(text: str) -> bool:
    return not text or text.isspace()


def is_line_break(text: str) -> bool:
    """True for strings made only of newlines, which survive normalisation."""
    return bool(NEWLINES_ONLY_PATTERN.match(text))


def normalize_children(
    children: Sequence[object],
    is_inline: Callable[[object], bool],
    preserve: bool = False,
) -> List[object]:
    """Normalise the string members of a child sequence.

    Blank strings are dropped, the leading and trailing strings are trimmed
    (line-break strings are kept intact) and a single space separates two
    adjacent inline items so that runs do not glue together. With
    ``preserve`` the strings are kept verbatim and only empty ones dropped.
    """
    normalized: List[object] = []
    for child in children:
        if isinstance(child, str) and preserve:
            if child == "":
                continue
        elif isinstance(child, str):
            if not is_line_break(child):
                child = normalize_whitespace(child)
            if child == "" or (child.strip() == "" and not is_line_break(child)):
                continue
        normalized.append(child)

    if preserve:
        return normalized
    if normalized and isinstance(normalized[0], str) and not is_line_break(normalized[0]):
        normalized[0] = normalized[0].lstrip()
        if not normalized[0]:
            normalized.pop(0)
    if normalized and isinstance(normalized[-1], str) and not is_line_break(normalized[-1]):
        normalized[-1] = normalized[-1].rstrip()
        if not normalized[-1]:
            normalized.pop()

    result: List[object] = []
    for index, child in enumerate(normalized):
        if index and is_inline(child) and is_inline(normalized[index - 1]):
            result.append(" ")
        result.append(child)
    return result


def merge_adjacent_strings(children: Sequence[T]) -> List[T]:
    """Run-length merge consecutive strings, leaving other items in place."""
    merged: List[T] = []
    for child in children:
        if isinstance(child, str) and merged and isinstance(merged[-1], str):
            merged[-1] = merged[-1] + child  # type: ignore[assignment, operator]
        else:
            merged.append(child)
    return merged
