"""Connector protocol and the per-run connector registry."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from scanroll.types import Category, SourcePlatform


@runtime_checkable
class SourceConnector(Protocol):
    """Fetches raw records for one (platform, category) pair.

    ``fetch`` returns an empty list when the remote call succeeds without
    results and raises ``ConnectorError`` when it cannot be completed.
    """

    platform: SourcePlatform
    category: Category

    def fetch(self, application: str, branch: str) -> list[Any]: ...


class ConnectorSet:
    """Connectors available for a run, keyed by (platform, category)."""

    def __init__(self, connectors: tuple[SourceConnector, ...] | list[SourceConnector] = ()) -> None:
        self._connectors: dict[tuple[SourcePlatform, Category], SourceConnector] = {}
        for connector in connectors:
            key = (connector.platform, connector.category)
            if key in self._connectors:
                raise ValueError(f"Duplicate connector for {key[0]}/{key[1]}")
            self._connectors[key] = connector

    def get(self, platform: SourcePlatform, category: Category) -> SourceConnector | None:
        return self._connectors.get((platform, category))

    def __iter__(self) -> Iterator[SourceConnector]:
        return iter(self._connectors.values())

    def __len__(self) -> int:
        return len(self._connectors)

    def close(self) -> None:
        """Release HTTP sessions held by connectors that own one."""
        for connector in self._connectors.values():
            close = getattr(connector, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> ConnectorSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
