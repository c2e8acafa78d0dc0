"""Reporting package for Scanroll outputs."""

from __future__ import annotations

from typing import Any

__all__ = ["StdoutReporter", "render_html_report", "report_filename", "write_reports"]


def __getattr__(name: str) -> Any:
    """Lazily expose reporting APIs to avoid import cycles at package import time."""
    if name == "render_html_report":
        from .html_renderer import render_html_report

        return render_html_report
    if name in {"report_filename", "write_reports"}:
        from .writer import report_filename, write_reports

        exports = {
            "report_filename": report_filename,
            "write_reports": write_reports,
        }
        return exports[name]
    if name == "StdoutReporter":
        from .stdout import StdoutReporter

        return StdoutReporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
