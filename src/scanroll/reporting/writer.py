"""Write run artifacts: HTML report, aggregate JSON and findings CSV."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path

from scanroll.constants.reporting import (
    AGGREGATE_FILENAME,
    MULTI_APP_REPORT_PREFIX,
    REPORT_TEMP_PREFIX,
    REPORT_TEMP_SUFFIX,
    SINGLE_APP_REPORT_PREFIX,
    VALID_OUTPUT_FORMATS,
)
from scanroll.exceptions import ConfigurationError
from scanroll.io import write_json_atomic, write_text_atomic
from scanroll.model import AggregateResult
from scanroll.reporting.csv_writer import write_csv_findings
from scanroll.reporting.filters import OutputFilters, filter_aggregate
from scanroll.reporting.html_renderer import render_html_report

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _file_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime("%Y-%m-%dT%H-%M-%SZ")


def report_filename(result: AggregateResult) -> str:
    """Return the HTML file name for the layout ``render_html_report`` will use."""
    stamp = _file_timestamp(result.timestamp)
    if len(result.applications) == 1 and not result.errors:
        name = _UNSAFE_FILENAME_CHARS.sub("-", result.applications[0].application_name).strip("-") or "application"
        return f"{SINGLE_APP_REPORT_PREFIX}-{name}-{stamp}.html"
    return f"{MULTI_APP_REPORT_PREFIX}-{stamp}.html"


def write_reports(
    out_dir: Path,
    result: AggregateResult,
    formats: tuple[str, ...] = ("html", "json"),
    *,
    filters: OutputFilters | None = None,
) -> dict[str, Path]:
    """Write the requested artifacts and return their paths keyed by format.

    ``aggregate.json`` always carries every finding; ``filters`` only narrow
    the findings shown in the HTML and CSV outputs.
    """
    invalid = set(formats) - VALID_OUTPUT_FORMATS
    if invalid:
        raise ConfigurationError(
            f"Unknown output format(s): {', '.join(sorted(invalid))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )

    shown = filter_aggregate(result, filters or OutputFilters())
    written: dict[str, Path] = {}

    if "json" in formats:
        path = out_dir / AGGREGATE_FILENAME
        write_json_atomic(
            path=path,
            payload=result.to_dict(),
            temp_prefix=REPORT_TEMP_PREFIX,
            temp_suffix=REPORT_TEMP_SUFFIX,
        )
        written["json"] = path

    if "html" in formats:
        path = out_dir / report_filename(result)
        write_text_atomic(
            path=path,
            content=render_html_report(shown),
            temp_prefix=REPORT_TEMP_PREFIX,
            temp_suffix=".html",
        )
        written["html"] = path

    if "csv" in formats:
        written["csv"] = write_csv_findings(out_dir, shown.applications)

    for fmt, path in written.items():
        logger.info("Wrote %s report to %s", fmt, path)
    return written
