"""Constants for report file names, atomic writing, and stdout formatting."""

from __future__ import annotations

AGGREGATE_FILENAME: str = "aggregate.json"
CSV_FINDINGS_FILENAME: str = "findings.csv"
MULTI_APP_REPORT_PREFIX: str = "multi-app-report"
SINGLE_APP_REPORT_PREFIX: str = "report"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SCHEMA_VERSION: str = "1.0.0"

VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({"html", "json", "csv"})
DEFAULT_OUTPUT_FORMATS: str = "html,json"

CSV_COLUMNS: tuple[str, ...] = (
    "application",
    "platform",
    "category",
    "id",
    "severity",
    "state",
    "name",
    "rule_id",
    "file_path",
    "line",
    "package",
    "version",
    "advisory_id",
    "url",
)

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_RED: str = "\033[31;1m"
ANSI_MAGENTA: str = "\033[35;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

SEVERITY_COLORS: dict[str, str] = {
    "critical": ANSI_MAGENTA,
    "high": ANSI_RED,
    "medium": ANSI_YELLOW,
    "low": ANSI_GREEN,
    "warning": ANSI_DIM,
    "note": ANSI_DIM,
}

HTML_SEVERITY_COLORS: dict[str, str] = {
    "critical": "#b30000",
    "high": "#e68a00",
    "medium": "#cc7a00",
    "low": "#666600",
    "warning": "#663d00",
    "note": "#999999",
}
