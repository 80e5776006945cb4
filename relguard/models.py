"""Core data models shared across relguard components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

SEVERITY_HIGH = "HIGH"
STATUS_FIXED = "FIXED"
MISSING_REL = "(none)"
ISSUE_MESSAGE = 'External link with target="_blank" missing secure rel attribute'


class Classification(str, Enum):
    """Outcome of checking one ``target="_blank"`` anchor against the rel policy."""

    SKIP = "skip"
    COMPLIANT = "compliant"
    VIOLATION = "violation"


@dataclass(frozen=True)
class LinkMatch:
    """An anchor opening tag with ``target="_blank"`` found in a document."""

    tag: str
    start: int
    end: int
    href: Optional[str]
    rel: Optional[str]
    line: int


@dataclass
class Issue:
    """An external new-tab link whose rel attribute is not secure."""

    file: str
    line: int
    href: str
    current_rel: str = MISSING_REL
    severity: str = SEVERITY_HIGH
    message: str = ISSUE_MESSAGE
    status: Optional[str] = None
    offset: int = 0

    @property
    def resolved(self) -> bool:
        return self.status == STATUS_FIXED


@dataclass
class DocumentResult:
    """Outcome of auditing a single document."""

    path: str
    issues: List[Issue] = field(default_factory=list)
    fixed: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Aggregate over every document processed in one run."""

    results: List[DocumentResult] = field(default_factory=list)
    fix_mode: bool = False

    @property
    def issues(self) -> List[Issue]:
        return [issue for result in self.results for issue in result.issues]

    @property
    def violations(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == SEVERITY_HIGH]

    @property
    def errors(self) -> List[DocumentResult]:
        return [result for result in self.results if not result.ok]

    @property
    def all_clear(self) -> bool:
        return not self.violations

    def exit_code(self, *, fail_on_error: bool = False) -> int:
        """Return the process exit status for this run."""
        if fail_on_error and self.errors:
            return 1
        if self.all_clear or self.fix_mode:
            return 0
        return 1


__all__ = [
    "Classification",
    "DocumentResult",
    "ISSUE_MESSAGE",
    "Issue",
    "LinkMatch",
    "MISSING_REL",
    "RunReport",
    "SEVERITY_HIGH",
    "STATUS_FIXED",
]
