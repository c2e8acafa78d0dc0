"""Source connector exceptions."""

from __future__ import annotations

from scanroll.exceptions.base import ScanrollError
from scanroll.types import ConnectorErrorKind


class ConnectorError(ScanrollError):
    """Raised when one platform/category fetch cannot be completed.

    ``kind`` distinguishes HTTP status failures from network, timeout and
    malformed-response failures; ``status_code`` is set for ``http`` only.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ConnectorErrorKind = "http",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
