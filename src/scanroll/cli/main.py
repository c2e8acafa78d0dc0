"""CLI entrypoint for Scanroll."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from scanroll import __version__
from scanroll.cli.handlers import handle_scan, handle_validate_config
from scanroll.constants.branding import CLI_DESCRIPTION
from scanroll.constants.reporting import DEFAULT_OUTPUT_FORMATS
from scanroll.constants.severity import SEVERITIES


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="scanroll",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Collect findings for every configured application")
    scan.add_argument("-c", "--config", type=Path, help="Explicit config file (default: ./scanroll.yaml if present)")
    scan.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Report output directory (default: config `output_dir` or OUTPUT_DIR)",
    )
    scan.add_argument(
        "--output-format",
        default=DEFAULT_OUTPUT_FORMATS,
        help=f"Comma-separated output formats: html, json, csv (default: {DEFAULT_OUTPUT_FORMATS})",
    )
    scan.add_argument("--max-workers", type=_positive_int, default=None, help="Applications scanned in parallel")
    scan.add_argument(
        "--min-severity",
        choices=list(SEVERITIES),
        default=None,
        help="Only show findings at or above this severity (summary counts are unaffected)",
    )
    scan.add_argument(
        "--fail-on",
        choices=list(SEVERITIES),
        default=None,
        help="Exit 1 when any finding is at or above this severity",
    )
    scan.add_argument("--fail-on-errors", action="store_true", help="Exit 1 when any application failed")
    scan.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    scan.add_argument("--no-color", action="store_true", help="Disable colored output")
    scan.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without scanning")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")
    validate.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.command == "validate-config":
        return handle_validate_config(args)

    if args.command != "scan":
        parser.error(f"Unsupported command: {args.command}")

    return handle_scan(args)


if __name__ == "__main__":
    raise SystemExit(main())
