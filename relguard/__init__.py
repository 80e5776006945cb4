"""Audit and fix rel attributes on external links that open a new tab."""

from .auditor import audit_document, audit_run, audit_text, discover_documents
from .models import Classification, DocumentResult, Issue, LinkMatch, RunReport
from .policy import classify, has_secure_rel, is_external_url, secure_rel_value
from .remediate import remediate
from .scanner import scan

__all__ = [
    "Classification",
    "DocumentResult",
    "Issue",
    "LinkMatch",
    "RunReport",
    "audit_document",
    "audit_run",
    "audit_text",
    "classify",
    "discover_documents",
    "has_secure_rel",
    "is_external_url",
    "remediate",
    "scan",
    "secure_rel_value",
]
