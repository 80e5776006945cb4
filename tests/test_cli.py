"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from relguard.cli import _build_parser, main, select_documents
from tests._fixtures.site_builder import SiteBuilder

_LINK = '<a href="https://example.com" target="_blank">Link</a>'
_FIXED = '<a href="https://example.com" target="_blank" rel="noopener noreferrer">Link</a>'


def test_cli_parser_accepts_fix_and_documents() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--fix", "index.html", "about.html"])
    assert args.fix is True
    assert args.documents == ["index.html", "about.html"]


def test_cli_help_exits_without_scanning(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    for flag in ("--help", "-h"):
        with pytest.raises(SystemExit) as excinfo:
            main([flag, "--fix"])
        assert excinfo.value.code == 0

    out = capsys.readouterr().out
    assert "usage: relguard" in out
    assert "reverse tabnabbing" in out
    assert site_builder.read("index.html") == _LINK


def test_select_documents_ignores_unrelated_arguments() -> None:
    selected = select_documents(["index.html", "notes.txt", "--unknown", "about.html"], ".html")
    assert [str(path) for path in selected] == ["index.html", "about.html"]


def test_cli_report_only_finds_violation_and_exits_one(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    assert main([]) == 1

    out = capsys.readouterr().out
    assert "⚠️  index.html: Found 1 issue(s)" in out
    assert "1. index.html:1" in out
    assert "URL: https://example.com" in out
    assert "Current rel: (none)" in out
    assert site_builder.read("index.html") == _LINK


def test_cli_fix_rewrites_and_exits_zero(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    assert main(["--fix"]) == 0
    assert site_builder.read("index.html") == _FIXED
    assert "Fixed 1 issue(s)" in capsys.readouterr().out

    assert main([]) == 0


def test_cli_explicit_documents_and_ignored_arguments(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": _LINK, "about.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    assert main(["about.html", "readme.md", "--frobnicate", "--fix"]) == 0

    assert site_builder.read("about.html") == _FIXED
    assert site_builder.read("index.html") == _LINK
    assert "index.html" not in capsys.readouterr().out


def test_cli_empty_directory_is_clear(
    tmp_path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)

    assert main([]) == 0
    assert "All external links are properly secured!" in capsys.readouterr().out


def test_cli_json_output(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    assert main(["--json"]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload["issue_count"] == 1
    assert payload["documents"][0]["path"] == "index.html"


def test_cli_uses_config_extension_and_fail_on_error(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write(
        {
            ".relguard.yml": "extension: .htm\nfail_on_error: true\n",
            "page.htm": _LINK,
            "page.html": _LINK,
        }
    )
    monkeypatch.chdir(site_builder.path())

    assert main(["--fix", "missing.htm", "page.htm"]) == 1

    assert site_builder.read("page.htm") == _FIXED
    assert site_builder.read("page.html") == _LINK
    assert "❌ missing.htm: Error" in capsys.readouterr().out


def test_cli_invalid_config_exits_two(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    site_builder.write({".relguard.yml": "- not a mapping\n"})
    monkeypatch.chdir(site_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_cli_ignores_abbreviated_flags(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    site_builder.write({"index.html": _LINK})
    monkeypatch.chdir(site_builder.path())

    assert main(["--fi"]) == 1
    assert site_builder.read("index.html") == _LINK

    assert main(["--c", "index.html"]) == 1
    assert site_builder.read("index.html") == _LINK
