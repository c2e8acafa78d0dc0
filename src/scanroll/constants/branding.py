"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SCANROLL"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SCANROLL",
    "     // code and dependency scanning roll-up",
)
SCAN_SUMMARY_TITLE: str = "Run summary"
REPORT_TITLE: str = "Dependency and Code Scanning Report"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} security findings aggregator"))
