"""CLI entrypoint for relguard."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Sequence

from .auditor import audit_run, discover_documents
from .config import ConfigError, RelGuardConfig, load_config
from .logging import configure_logging, get_logger
from .report import HELP_EPILOG, render_report, report_to_dict


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relguard",
        description=(
            'Check that external links with target="_blank" carry '
            'rel="noopener noreferrer", and optionally fix them in place.'
        ),
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        # Partial flags are ignored like any other unknown argument.
        allow_abbrev=False,
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Automatically fix missing rel attributes.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of text.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .relguard.yml or its directory (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    parser.add_argument(
        "documents",
        nargs="*",
        help="Documents to check (defaults to every matching file in the current directory).",
    )
    return parser


def select_documents(arguments: Sequence[str], extension: str) -> List[Path]:
    """Keep the arguments that name documents with ``extension``."""
    logger = get_logger("cli")
    documents: List[Path] = []
    for argument in arguments:
        if argument.startswith("-") or not argument.endswith(extension):
            logger.debug("Ignoring argument %r", argument)
            continue
        documents.append(Path(argument))
    return documents


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args, extras = parser.parse_known_intermixed_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config: RelGuardConfig = load_config(config_path)
    except ConfigError as exc:
        parser.exit(2, f"relguard: {exc}\n")

    documents = select_documents(list(args.documents) + list(extras), config.extension)
    if not documents:
        documents = discover_documents(
            Path.cwd(), extension=config.extension, exclude=config.exclude
        )
        documents = [Path(document.name) for document in documents]
    logger.debug("Checking %d document(s)", len(documents))

    report = audit_run(documents, fix_mode=bool(args.fix), encoding=config.encoding)

    if args.json:
        print(json.dumps(report_to_dict(report), indent=2))
    else:
        print(render_report(report))

    return report.exit_code(fail_on_error=config.fail_on_error)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
