"""Normalization exceptions."""

from __future__ import annotations

from scanroll.exceptions.base import ScanrollError


class NormalizationError(ScanrollError, ValueError):
    """Raised when a raw record is structurally invalid and cannot be interpreted."""
