"""Locate anchor tags that open a new browsing context."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .models import LinkMatch

# Opening ``<a ...>`` tags carrying target="_blank". ``[^>]`` keeps the match
# inside a single tag.
_TAG_PATTERN = re.compile(
    r"<a\s[^>]*?(?<![\w-])target\s*=\s*([\"'])_blank\1[^>]*>",
    re.IGNORECASE,
)

_ATTRIBUTE_TEMPLATE = r"(?<![\w-]){name}\s*=\s*(?:\"([^\"]*)\"|'([^']*)')"


def attribute_pattern(name: str) -> re.Pattern[str]:
    """Return a case-insensitive pattern for a quoted attribute called ``name``."""
    return re.compile(_ATTRIBUTE_TEMPLATE.format(name=re.escape(name)), re.IGNORECASE)


HREF_PATTERN = attribute_pattern("href")
REL_PATTERN = attribute_pattern("rel")
TARGET_PATTERN = attribute_pattern("target")


def find_attribute(tag: str, pattern: re.Pattern[str]) -> Optional[Tuple[str, int, int]]:
    """Return ``(value, start, end)`` of the first attribute match in ``tag``."""
    match = pattern.search(tag)
    if match is None:
        return None
    value = match.group(1) if match.group(1) is not None else match.group(2)
    return value, match.start(), match.end()


def line_number(text: str, offset: int) -> int:
    """Return the 1-based line on which ``offset`` falls."""
    return text.count("\n", 0, offset) + 1


def scan(text: str) -> List[LinkMatch]:
    """Return every ``target="_blank"`` anchor in ``text`` in document order."""

    matches: List[LinkMatch] = []
    for match in _TAG_PATTERN.finditer(text):
        tag = match.group(0)
        href_found = find_attribute(tag, HREF_PATTERN)
        rel_found = find_attribute(tag, REL_PATTERN)
        href = href_found[0] if href_found and href_found[0] else None
        rel = rel_found[0] if rel_found else None
        matches.append(
            LinkMatch(
                tag=tag,
                start=match.start(),
                end=match.end(),
                href=href,
                rel=rel,
                line=line_number(text, match.start()),
            )
        )
    return matches


__all__ = [
    "HREF_PATTERN",
    "REL_PATTERN",
    "TARGET_PATTERN",
    "attribute_pattern",
    "find_attribute",
    "line_number",
    "scan",
]
