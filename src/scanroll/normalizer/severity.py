"""Severity, state and timestamp translation for raw platform values."""

from __future__ import annotations

from datetime import UTC, datetime

from scanroll.constants.severity import DEFAULT_SEVERITY, DEFAULT_STATE, SEVERITY_TABLES, STATE_TABLES
from scanroll.types import Category, FindingState, Severity, SourcePlatform


def map_severity(platform: SourcePlatform, category: Category, raw: object) -> Severity:
    """Translate a platform severity value onto the canonical six-value scale.

    Lookup is case-insensitive. Values missing from the platform table,
    including ``None`` and non-strings, resolve to ``DEFAULT_SEVERITY``.
    """
    if not isinstance(raw, str):
        return DEFAULT_SEVERITY
    table = SEVERITY_TABLES[(platform, category)]
    return table.get(raw.strip().lower(), DEFAULT_SEVERITY)


def map_state(platform: SourcePlatform, raw: object) -> FindingState:
    """Translate a platform alert state; unknown states are treated as open."""
    if not isinstance(raw, str):
        return DEFAULT_STATE
    return STATE_TABLES[platform].get(raw.strip().lower(), DEFAULT_STATE)


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime, or ``None``."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
