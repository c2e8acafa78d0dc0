"""Shared exception hierarchy for Scanroll."""

from __future__ import annotations

from .base import ScanrollError
from .config import ConfigurationError
from .connector import ConnectorError
from .normalization import NormalizationError
from .scan import ApplicationScanError

__all__ = [
    "ApplicationScanError",
    "ConfigurationError",
    "ConnectorError",
    "NormalizationError",
    "ScanrollError",
]
