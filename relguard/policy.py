"""Rel attribute policy for external links opened in a new tab."""

from __future__ import annotations

from typing import List, Optional

from .models import Classification, LinkMatch

REQUIRED_REL_TOKENS = ("noopener", "noreferrer")
EXTERNAL_PREFIXES = ("http://", "https://", "//")


def is_external_url(href: Optional[str]) -> bool:
    """Return True for absolute http(s) and protocol-relative URLs."""
    if not href:
        return False
    return href.startswith(EXTERNAL_PREFIXES)


def rel_tokens(rel: Optional[str]) -> List[str]:
    if not rel:
        return []
    return rel.lower().split()


def has_secure_rel(rel: Optional[str]) -> bool:
    tokens = rel_tokens(rel)
    return all(required in tokens for required in REQUIRED_REL_TOKENS)


def secure_rel_value(rel: Optional[str]) -> str:
    """Return a lower-cased rel value that contains every required token.

    Existing tokens are kept in their original order with duplicates removed;
    missing required tokens are appended in ``REQUIRED_REL_TOKENS`` order.
    """
    tokens: List[str] = []
    for token in rel_tokens(rel):
        if token not in tokens:
            tokens.append(token)
    for required in REQUIRED_REL_TOKENS:
        if required not in tokens:
            tokens.append(required)
    return " ".join(tokens)


def classify(match: LinkMatch) -> Classification:
    if not is_external_url(match.href):
        return Classification.SKIP
    if has_secure_rel(match.rel):
        return Classification.COMPLIANT
    return Classification.VIOLATION


__all__ = [
    "EXTERNAL_PREFIXES",
    "REQUIRED_REL_TOKENS",
    "classify",
    "has_secure_rel",
    "is_external_url",
    "rel_tokens",
    "secure_rel_value",
]
