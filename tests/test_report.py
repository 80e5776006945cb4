"""Tests for relguard.report."""

from __future__ import annotations

import json

from relguard.models import DocumentResult, Issue, RunReport, STATUS_FIXED
from relguard.report import render_report, report_to_dict


def _report(*, fix_mode: bool = False, status: str | None = None) -> RunReport:
    return RunReport(
        results=[
            DocumentResult(path="clean.html"),
            DocumentResult(
                path="index.html",
                issues=[Issue(file="index.html", line=12, href="https://example.com", status=status)],
                fixed=status == STATUS_FIXED,
            ),
            DocumentResult(path="broken.html", error="Permission denied", error_kind="read"),
        ],
        fix_mode=fix_mode,
    )


def test_render_report_lists_per_file_status_and_issues() -> None:
    text = render_report(_report())
    assert "✅ clean.html: No issues found" in text
    assert "⚠️  index.html: Found 1 issue(s)" in text
    assert "❌ broken.html: Error - Permission denied" in text
    assert "EXTERNAL LINKS SECURITY REPORT" in text
    assert "1. index.html:12" in text
    assert "   URL: https://example.com" in text
    assert "   Current rel: (none)" in text
    assert "   Status: NEEDS FIX" in text
    assert "Run with --fix flag" in text
    assert "RESULT: FAIL" in text


def test_render_report_fix_mode_marks_issues_fixed() -> None:
    text = render_report(_report(fix_mode=True, status=STATUS_FIXED))
    assert "Fix mode enabled" in text
    assert "⚠️  index.html: Fixed 1 issue(s)" in text
    assert "   Status: FIXED" in text
    assert "Run with --fix flag" not in text
    assert "RESULT: FIXED" in text


def test_render_report_all_clear() -> None:
    text = render_report(RunReport())
    assert "All external links are properly secured!" in text
    assert "RESULT: PASS" in text


def test_report_to_dict_is_json_serialisable() -> None:
    payload = report_to_dict(_report())
    encoded = json.loads(json.dumps(payload))
    assert encoded["all_clear"] is False
    assert encoded["issue_count"] == 1
    assert encoded["error_count"] == 1
    assert encoded["documents"][1]["issues"][0]["href"] == "https://example.com"


def test_report_to_dict_issue_fields() -> None:
    [issue] = report_to_dict(_report())["documents"][1]["issues"]
    assert set(issue) == {"file", "line", "href", "current_rel", "severity", "message", "status"}
