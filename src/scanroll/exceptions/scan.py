"""Per-application scan exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scanroll.exceptions.base import ScanrollError

if TYPE_CHECKING:
    from scanroll.model import ConnectorFailure


class ApplicationScanError(ScanrollError):
    """Raised when an application scan could not produce real data.

    Carries the application name and every connector failure observed so
    the orchestrator can record a single ``ScanError`` for it.
    """

    def __init__(
        self,
        application_name: str,
        message: str,
        failures: tuple[ConnectorFailure, ...] = (),
    ) -> None:
        super().__init__(message)
        self.application_name = application_name
        self.failures = failures
