"""Tests for the connector registry and factory."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from scanroll.config import AzureDevOpsSettings, GitHubSettings, ScanrollConfig
from scanroll.connectors import ConnectorSet, SourceConnector, build_connectors


class _Stub:
    def __init__(self, platform: str, category: str) -> None:
        self.platform = platform
        self.category = category
        self.close = MagicMock()

    def fetch(self, application: str, branch: str) -> list[object]:
        return []


def test_get_returns_registered_connector_or_none() -> None:
    stub = _Stub("github", "code-scanning")
    connectors = ConnectorSet([stub])

    assert connectors.get("github", "code-scanning") is stub
    assert connectors.get("github", "dependency-scanning") is None
    assert isinstance(stub, SourceConnector)


def test_duplicate_registration_is_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate connector"):
        ConnectorSet([_Stub("github", "code-scanning"), _Stub("github", "code-scanning")])


def test_context_manager_closes_connectors() -> None:
    stub = _Stub("github", "code-scanning")

    with ConnectorSet([stub]):
        pass

    stub.close.assert_called_once_with()


def test_build_connectors_only_for_platforms_with_applications() -> None:
    config = ScanrollConfig(
        github=GitHubSettings(org="acme", token="t", applications=("svc-a",)),
        azure_devops=AzureDevOpsSettings(org="acme", project="p", token="pat"),
        request_timeout_seconds=12,
    )

    with build_connectors(config) as connectors:
        keys = sorted((connector.platform, connector.category) for connector in connectors)

    assert keys == [("github", "code-scanning"), ("github", "dependency-scanning")]
