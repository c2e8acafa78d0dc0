"""Root exception type."""

from __future__ import annotations


class ScanrollError(Exception):
    """Base class for all errors raised by Scanroll."""
