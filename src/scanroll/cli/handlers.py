"""CLI subcommand handlers and threshold evaluation."""

from __future__ import annotations

import argparse
import logging
import sys

from scanroll.config import load_config, validate_config
from scanroll.connectors import build_connectors
from scanroll.constants.reporting import VALID_OUTPUT_FORMATS
from scanroll.constants.severity import SEVERITY_RANK
from scanroll.exceptions import ConfigurationError, ScanrollError
from scanroll.exceptions.validation import format_errors
from scanroll.model import AggregateResult
from scanroll.reporting.filters import OutputFilters
from scanroll.reporting.stdout import StdoutReporter
from scanroll.reporting.writer import write_reports
from scanroll.scanner.orchestrator import run_all

logger = logging.getLogger(__name__)


def evaluate_fail_thresholds(
    result: AggregateResult,
    *,
    fail_on: str | None,
    fail_on_errors: bool = False,
) -> int:
    """Return 1 if the run breaches a CI threshold, 0 otherwise.

    Counts come from the summary, so output filters never change the verdict.
    """
    if fail_on_errors and result.errors:
        return 1
    if fail_on is not None:
        threshold = SEVERITY_RANK.get(fail_on, 0)
        for severity, count in result.summary.severity_summary.items():
            if count and SEVERITY_RANK[severity] >= threshold:
                return 1
    return 0


def parse_output_formats(raw: str) -> tuple[str, ...]:
    """Split ``--output-format`` into format names, rejecting malformed input."""
    raw_tokens = raw.split(",")
    output_formats = tuple(fmt for fmt in (token.strip() for token in raw_tokens) if fmt)
    if not output_formats or len(output_formats) != len(raw_tokens):
        raise ConfigurationError("--output-format contains empty or malformed tokens")
    invalid_formats = set(output_formats) - VALID_OUTPUT_FORMATS
    if invalid_formats:
        raise ConfigurationError(
            f"unknown output format(s): {', '.join(sorted(invalid_formats))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )
    return output_formats


def handle_scan(args: argparse.Namespace) -> int:
    """Run ``scanroll scan``: validate, scan every application, write reports."""
    try:
        output_formats = parse_output_formats(args.output_format)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    validation_errors = validate_config(args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    try:
        config = load_config(args.config)
        max_workers = args.max_workers if args.max_workers is not None else config.max_workers
        out_dir = args.output_dir if args.output_dir is not None else config.output_dir
        with build_connectors(config) as connectors:
            result = run_all(
                config.application_specs(),
                connectors,
                max_workers=max_workers,
                logger=logging.getLogger("scanroll.run"),
            )
        written = write_reports(
            out_dir,
            result,
            output_formats,
            filters=OutputFilters(min_severity=args.min_severity),
        )
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ScanrollError as exc:
        print(f"Scanner error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Output error: {exc}", file=sys.stderr)
        return 1

    exit_code = evaluate_fail_thresholds(result, fail_on=args.fail_on, fail_on_errors=args.fail_on_errors)

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        reporter = StdoutReporter(
            result,
            color=use_color,
            min_severity=args.min_severity,
            fail_on=args.fail_on,
            exit_code=exit_code,
        )
        print(reporter.render())
        for fmt, path in written.items():
            print(f"  {fmt:<5} {path}")

    return exit_code


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = validate_config(args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0
