"""Rewrite non-compliant anchor tags so their rel attribute is secure."""

from __future__ import annotations

from .models import Classification, LinkMatch
from .policy import classify, secure_rel_value
from .scanner import REL_PATTERN, TARGET_PATTERN, find_attribute


def secure_tag(match: LinkMatch) -> str:
    """Return ``match.tag`` with a rel attribute that satisfies the policy."""
    tag = match.tag
    rel_found = find_attribute(tag, REL_PATTERN)
    if rel_found is not None:
        _, start, end = rel_found
        return f'{tag[:start]}rel="{secure_rel_value(match.rel)}"{tag[end:]}'

    target_found = find_attribute(tag, TARGET_PATTERN)
    if target_found is None:
        # scan() only yields tags with a target attribute; fall back to the tag end.
        insert_at = len(tag) - 1
        if tag.endswith("/>"):
            insert_at -= 1
    else:
        insert_at = target_found[2]
    return f'{tag[:insert_at]} rel="{secure_rel_value(None)}"{tag[insert_at:]}'


def remediate(match: LinkMatch, text: str) -> str:
    """Splice a secured version of ``match`` back into ``text``.

    ``match`` offsets refer to ``text``; when several matches of one document
    are remediated, apply them from the highest offset down so earlier offsets
    stay valid.
    """
    if classify(match) is not Classification.VIOLATION:
        return text
    return text[: match.start] + secure_tag(match) + text[match.end :]


__all__ = ["remediate", "secure_tag"]
