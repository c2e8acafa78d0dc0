"""Core data models for Scanroll."""

from .entities import (
    AggregateResult,
    ApplicationResult,
    ApplicationSpec,
    CodeLocation,
    ConnectorFailure,
    Finding,
    PackageInfo,
    ScanError,
    Summary,
)

__all__ = [
    "AggregateResult",
    "ApplicationResult",
    "ApplicationSpec",
    "CodeLocation",
    "ConnectorFailure",
    "Finding",
    "PackageInfo",
    "ScanError",
    "Summary",
]
