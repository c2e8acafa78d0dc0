"""Configuration loading and validation for Scanroll runs."""

from __future__ import annotations

from scanroll.config.loader import load_config, split_names
from scanroll.config.model import AzureDevOpsSettings, GitHubSettings, ScanrollConfig
from scanroll.config.validator import validate_config

__all__ = [
    "AzureDevOpsSettings",
    "GitHubSettings",
    "ScanrollConfig",
    "load_config",
    "split_names",
    "validate_config",
]
