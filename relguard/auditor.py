"""Audit documents for insecure new-tab links and optionally fix them."""

from __future__ import annotations

import os
import shutil
import tempfile
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .config import DEFAULT_ENCODING, DEFAULT_EXTENSION
from .logging import get_logger
from .models import MISSING_REL, STATUS_FIXED, Classification, DocumentResult, Issue, RunReport
from .policy import classify
from .remediate import remediate
from .scanner import scan

logger = get_logger("auditor")


class DocumentError(RuntimeError):
    """Raised when a document cannot be read or written back."""

    kind = "io"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentReadError(DocumentError):
    kind = "read"


class DocumentWriteError(DocumentError):
    kind = "write"


def audit_text(
    text: str, *, fix_mode: bool = False, source: str = "<string>"
) -> Tuple[str, List[Issue]]:
    """Audit one document's text.

    Returns the (possibly remediated) text and the issues found, ordered by
    position in the document. The text is only changed in ``fix_mode``.
    """
    updated = text
    issues: List[Issue] = []
    matches = scan(text)

    # Highest offset first so splices never move a match not yet visited.
    for match in reversed(matches):
        if classify(match) is not Classification.VIOLATION:
            continue
        issues.append(
            Issue(
                file=source,
                line=match.line,
                href=match.href or "",
                current_rel=match.rel if match.rel is not None else MISSING_REL,
                offset=match.start,
            )
        )
        if fix_mode:
            updated = remediate(match, updated)

    issues.sort(key=lambda issue: (issue.line, issue.offset))
    return updated, issues


def read_document(path: Path, *, encoding: str = DEFAULT_ENCODING) -> str:
    try:
        with path.open("r", encoding=encoding, newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, _describe(exc)) from exc


def write_document(path: Path, text: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Replace ``path`` with ``text`` via a sibling temp file and ``os.replace``.

    The temp file gets a unique name in the same directory and takes over the
    permission bits of ``path`` before the swap.
    """
    try:
        fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise DocumentWriteError(path, _describe(exc)) from exc
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
        shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except (OSError, UnicodeEncodeError) as exc:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.debug("Could not remove temp file %s", temp_path)
        raise DocumentWriteError(path, _describe(exc)) from exc


def audit_document(
    path: Path | str, *, fix_mode: bool = False, encoding: str = DEFAULT_ENCODING
) -> DocumentResult:
    """Audit a single document, isolating any read or write failure."""
    path = Path(path)
    name = str(path)
    try:
        original = read_document(path, encoding=encoding)
    except DocumentReadError as exc:
        logger.error("Error processing %s: %s", name, exc.reason)
        return DocumentResult(path=name, error=exc.reason, error_kind=exc.kind)

    updated, issues = audit_text(original, fix_mode=fix_mode, source=name)
    logger.debug("%s: %d violation(s)", name, len(issues))

    if not fix_mode or not issues or updated == original:
        return DocumentResult(path=name, issues=issues)

    try:
        write_document(path, updated, encoding=encoding)
    except DocumentWriteError as exc:
        logger.error("Error writing %s: %s", name, exc.reason)
        return DocumentResult(path=name, issues=issues, error=exc.reason, error_kind=exc.kind)

    for issue in issues:
        issue.status = STATUS_FIXED
    logger.info("Fixed %d issue(s) in %s", len(issues), name)
    return DocumentResult(path=name, issues=issues, fixed=True)


def audit_run(
    paths: Iterable[Path | str], *, fix_mode: bool = False, encoding: str = DEFAULT_ENCODING
) -> RunReport:
    """Audit ``paths`` in order and aggregate the results."""
    report = RunReport(fix_mode=fix_mode)
    for path in paths:
        report.results.append(audit_document(path, fix_mode=fix_mode, encoding=encoding))
    logger.debug(
        "Audited %d document(s): %d violation(s), %d error(s)",
        len(report.results),
        len(report.violations),
        len(report.errors),
    )
    return report


def discover_documents(
    root: Path | str,
    *,
    extension: str = DEFAULT_EXTENSION,
    exclude: Sequence[str] = (),
) -> List[Path]:
    """Return files directly under ``root`` ending in ``extension``, sorted by name."""
    root = Path(root)
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        logger.error("Error finding %s files in %s: %s", extension, root, _describe(exc))
        return []

    documents = [
        entry
        for entry in entries
        if entry.name.endswith(extension)
        and entry.is_file()
        and not any(fnmatchcase(entry.name, pattern) for pattern in exclude)
    ]
    return sorted(documents, key=lambda entry: entry.name)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


__all__ = [
    "DocumentError",
    "DocumentReadError",
    "DocumentWriteError",
    "audit_document",
    "audit_run",
    "audit_text",
    "discover_documents",
    "read_document",
    "write_document",
]
