"""Configuration-related exceptions."""

from __future__ import annotations

from scanroll.exceptions.base import ScanrollError


class ConfigurationError(ScanrollError, ValueError):
    """Raised when run configuration is invalid; fatal before any scanning starts."""
