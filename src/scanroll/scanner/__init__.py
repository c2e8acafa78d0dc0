"""Application scanning and cross-application aggregation."""

from __future__ import annotations

from typing import Any

__all__ = ["ApplicationScanOutcome", "build_aggregate", "compute_summary", "run_all", "scan_application"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name in {"ApplicationScanOutcome", "scan_application"}:
        from . import application

        return getattr(application, name)
    if name in {"build_aggregate", "compute_summary"}:
        from . import summary

        return getattr(summary, name)
    if name == "run_all":
        from .orchestrator import run_all

        return run_all
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
