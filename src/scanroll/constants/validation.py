"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # missing credential or organization
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # no applications configured
CFG009: str = "CFG009"  # invalid nested mapping

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "branch",
        "output_dir",
        "github",
        "azure_devops",
        "request_timeout_seconds",
        "max_workers",
    }
)

ALLOWED_GITHUB_KEYS: frozenset[str] = frozenset({"org", "base_url", "applications"})
ALLOWED_AZURE_DEVOPS_KEYS: frozenset[str] = frozenset({"org", "project", "base_url", "applications"})

POSITIVE_INT_KEYS: tuple[str, ...] = ("request_timeout_seconds", "max_workers")
STRING_KEYS: tuple[str, ...] = ("branch", "output_dir")
