"""Source connectors that fetch raw alert records from each platform."""

from .azure_devops import AzureDevOpsCodeScanningConnector, AzureDevOpsDependencyScanningConnector
from .base import ConnectorSet, SourceConnector
from .factory import build_connectors
from .github import GitHubCodeScanningConnector, GitHubDependencyScanningConnector

__all__ = [
    "AzureDevOpsCodeScanningConnector",
    "AzureDevOpsDependencyScanningConnector",
    "ConnectorSet",
    "GitHubCodeScanningConnector",
    "GitHubDependencyScanningConnector",
    "SourceConnector",
    "build_connectors",
]
