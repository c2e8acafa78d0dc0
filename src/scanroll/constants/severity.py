"""Canonical severity vocabulary and per-platform translation tables."""

from __future__ import annotations

from scanroll.types import Category, FindingState, Severity, SourcePlatform

SEVERITIES: tuple[Severity, ...] = ("critical", "high", "medium", "low", "warning", "note")

SEVERITY_RANK: dict[str, int] = {
    "note": 0,
    "warning": 1,
    "low": 2,
    "medium": 3,
    "high": 4,
    "critical": 5,
}

# Resolution for any raw value missing from a platform table. Changing it
# changes historical report totals.
DEFAULT_SEVERITY: Severity = "medium"

GITHUB_CODE_SEVERITY_MAP: dict[str, Severity] = {
    "critical": "critical",
    "high": "high",
    "medium": "medium",
    "low": "low",
    "warning": "warning",
    "note": "note",
    "error": "high",
    "recommendation": "medium",
}

GITHUB_DEPENDENCY_SEVERITY_MAP: dict[str, Severity] = {
    "critical": "critical",
    "high": "high",
    "medium": "medium",
    "moderate": "medium",
    "low": "low",
    "unknown": "warning",
}

AZURE_DEVOPS_CODE_SEVERITY_MAP: dict[str, Severity] = {
    "critical": "critical",
    "high": "high",
    "medium": "medium",
    "low": "low",
    "warning": "warning",
    "note": "note",
    "error": "high",
    "undefined": "note",
}

AZURE_DEVOPS_DEPENDENCY_SEVERITY_MAP: dict[str, Severity] = {
    "critical": "critical",
    "high": "high",
    "medium": "medium",
    "moderate": "medium",
    "low": "low",
    "undefined": "note",
}

SEVERITY_TABLES: dict[tuple[SourcePlatform, Category], dict[str, Severity]] = {
    ("github", "code-scanning"): GITHUB_CODE_SEVERITY_MAP,
    ("github", "dependency-scanning"): GITHUB_DEPENDENCY_SEVERITY_MAP,
    ("azure-devops", "code-scanning"): AZURE_DEVOPS_CODE_SEVERITY_MAP,
    ("azure-devops", "dependency-scanning"): AZURE_DEVOPS_DEPENDENCY_SEVERITY_MAP,
}

FINDING_STATES: tuple[FindingState, ...] = ("open", "fixed", "dismissed")
DEFAULT_STATE: FindingState = "open"

GITHUB_STATE_MAP: dict[str, FindingState] = {
    "open": "open",
    "fixed": "fixed",
    "closed": "fixed",
    "dismissed": "dismissed",
    "auto_dismissed": "dismissed",
}

AZURE_DEVOPS_STATE_MAP: dict[str, FindingState] = {
    "active": "open",
    "open": "open",
    "fixed": "fixed",
    "dismissed": "dismissed",
    "autodismissed": "dismissed",
}

STATE_TABLES: dict[SourcePlatform, dict[str, FindingState]] = {
    "github": GITHUB_STATE_MAP,
    "azure-devops": AZURE_DEVOPS_STATE_MAP,
}
