"""Shared type aliases for Scanroll."""

from .common import (
    Category,
    ConnectorErrorKind,
    FindingState,
    JsonObject,
    JsonScalar,
    JsonValue,
    Severity,
    SourcePlatform,
)

__all__ = [
    "Category",
    "ConnectorErrorKind",
    "FindingState",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Severity",
    "SourcePlatform",
]
