"""Build the connector set for a run from resolved configuration."""

from __future__ import annotations

from scanroll.config.model import ScanrollConfig
from scanroll.connectors.azure_devops import AzureDevOpsCodeScanningConnector, AzureDevOpsDependencyScanningConnector
from scanroll.connectors.base import ConnectorSet, SourceConnector
from scanroll.connectors.github import GitHubCodeScanningConnector, GitHubDependencyScanningConnector


def build_connectors(config: ScanrollConfig) -> ConnectorSet:
    """Create connectors for every platform that has applications configured."""
    connectors: list[SourceConnector] = []
    timeout = config.request_timeout_seconds

    github = config.github
    if github.applications:
        for github_cls in (GitHubCodeScanningConnector, GitHubDependencyScanningConnector):
            connectors.append(
                github_cls(
                    org=github.org,
                    token=github.token,
                    base_url=github.base_url,
                    timeout_seconds=timeout,
                )
            )

    azure = config.azure_devops
    if azure.applications:
        for azure_cls in (AzureDevOpsCodeScanningConnector, AzureDevOpsDependencyScanningConnector):
            connectors.append(
                azure_cls(
                    org=azure.org,
                    project=azure.project,
                    token=azure.token,
                    base_url=azure.base_url,
                    timeout_seconds=timeout,
                )
            )

    return ConnectorSet(connectors)
