"""Human-readable and JSON-ready renderings of a run report."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from .models import Issue, RunReport

_RULE = "=" * 60

HELP_EPILOG = """\
examples:
  relguard                    check every .html file in the current directory
  relguard index.html         check a specific file
  relguard --fix              check and fix every file
  relguard --fix index.html   check and fix a specific file

security details:
  External links with target="_blank" can be a security vulnerability
  if they don't include rel="noopener noreferrer":

  - "noopener" prevents the new page from accessing window.opener
  - "noreferrer" prevents the new page from knowing the referring URL

  This protects against reverse tabnabbing attacks and privacy leaks.
"""


def render_file_lines(report: RunReport) -> List[str]:
    lines: List[str] = []
    for result in report.results:
        if result.error_kind == "read":
            lines.append(f"❌ {result.path}: Error - {result.error}")
        elif result.error is not None:
            lines.append(
                f"❌ {result.path}: Error - {result.error} "
                f"({len(result.issues)} issue(s) left unfixed)"
            )
        elif not result.issues:
            lines.append(f"✅ {result.path}: No issues found")
        else:
            status = "Fixed" if result.fixed else "Found"
            lines.append(f"⚠️  {result.path}: {status} {len(result.issues)} issue(s)")
    return lines


def render_summary(report: RunReport) -> List[str]:
    violations = report.violations
    lines = ["", _RULE, "EXTERNAL LINKS SECURITY REPORT", _RULE]

    if not violations:
        lines.append("✅ All external links are properly secured!")
        lines.append('   All target="_blank" links have rel="noopener noreferrer"')
    else:
        lines.append(f"❌ Found {len(violations)} security issue(s):")
        lines.append("")
        for index, issue in enumerate(violations, start=1):
            lines.append(f"{index}. {issue.file}:{issue.line}")
            lines.append(f"   URL: {issue.href}")
            lines.append(f"   Current rel: {issue.current_rel}")
            lines.append(f"   Status: {issue.status or 'NEEDS FIX'}")
            lines.append(f"   Issue: {issue.message}")
            lines.append("")
        if not report.fix_mode:
            lines.append("💡 Run with --fix flag to automatically resolve these issues")

    errors = report.errors
    if errors:
        lines.append(f"⚠️  {len(errors)} document(s) could not be processed")

    lines.append(_banner(report))
    lines.append(_RULE)
    return lines


def _banner(report: RunReport) -> str:
    if report.all_clear:
        return "RESULT: PASS"
    if all(issue.resolved for issue in report.violations):
        return "RESULT: FIXED"
    return "RESULT: FAIL"


def render_report(report: RunReport) -> str:
    """Return the full console report for ``report``."""
    header = ["🔍 Checking external links security..."]
    if report.fix_mode:
        header.append("🔧 Fix mode enabled - issues will be automatically resolved")
    header.append("")
    return "\n".join(header + render_file_lines(report) + render_summary(report))


def _issue_to_dict(issue: Issue) -> Dict[str, Any]:
    data = asdict(issue)
    # The offset only orders issues within a document.
    data.pop("offset", None)
    return data


def report_to_dict(report: RunReport) -> Dict[str, Any]:
    """Return a JSON-serialisable view of ``report``."""
    return {
        "fix_mode": report.fix_mode,
        "all_clear": report.all_clear,
        "documents": [
            {
                "path": result.path,
                "fixed": result.fixed,
                "error": result.error,
                "error_kind": result.error_kind,
                "issues": [_issue_to_dict(issue) for issue in result.issues],
            }
            for result in report.results
        ],
        "issue_count": len(report.violations),
        "error_count": len(report.errors),
    }


__all__ = ["HELP_EPILOG", "render_file_lines", "render_report", "render_summary", "report_to_dict"]
