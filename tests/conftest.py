"""Shared pytest fixtures: raw alert payloads, findings and fake connectors."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from scanroll.connectors.base import ConnectorSet
from scanroll.constants.platforms import CATEGORY_CODE, CATEGORY_DEPENDENCY, PLATFORM_AZURE_DEVOPS, PLATFORM_GITHUB
from scanroll.exceptions import ConnectorError
from scanroll.model import ApplicationResult, CodeLocation, Finding, PackageInfo
from scanroll.types import Category, SourcePlatform

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class FakeConnector:
    """In-memory connector: per-application records or exceptions."""

    def __init__(
        self,
        platform: SourcePlatform,
        category: Category,
        records: dict[str, list[Any]] | None = None,
        failures: dict[str, Exception] | None = None,
    ) -> None:
        self.platform = platform
        self.category = category
        self.records = records or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, str]] = []

    def fetch(self, application: str, branch: str) -> list[Any]:
        self.calls.append((application, branch))
        if application in self.failures:
            raise self.failures[application]
        return list(self.records.get(application, []))


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    """Clock returning a constant UTC timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture()
def github_code_alert() -> dict[str, Any]:
    """A GitHub code scanning alert as returned by the REST API."""
    return {
        "number": 42,
        "state": "open",
        "created_at": "2024-01-10T08:00:00Z",
        "updated_at": "2024-01-12T09:30:00Z",
        "html_url": "https://github.com/acme/svc-a/security/code-scanning/42",
        "rule": {
            "id": "py/sql-injection",
            "name": "SQL query built from user-controlled sources",
            "severity": "error",
            "security_severity_level": "high",
            "description": "Building a SQL query from user input is vulnerable to injection.",
            "tags": ["security", "external/cwe/cwe-089"],
        },
        "tool": {"name": "CodeQL", "version": "2.15.0"},
        "most_recent_instance": {
            "ref": "refs/heads/main",
            "commit_sha": "abc123",
            "state": "open",
            "message": {"text": "This query depends on a user-provided value."},
            "location": {
                "path": "app/db.py",
                "start_line": 10,
                "end_line": 12,
                "start_column": 5,
                "end_column": 40,
                "snippet": {"code": "cursor.execute(query)"},
            },
        },
    }


@pytest.fixture()
def github_dependency_alert() -> dict[str, Any]:
    """A GitHub Dependabot alert as returned by the REST API."""
    return {
        "number": 7,
        "state": "open",
        "created_at": "2024-02-01T00:00:00Z",
        "updated_at": "2024-02-02T00:00:00Z",
        "html_url": "https://github.com/acme/svc-a/security/dependabot/7",
        "dependency": {
            "manifest_path": "requirements.txt",
            "package": {"ecosystem": "pip", "name": "django"},
        },
        "security_advisory": {
            "ghsa_id": "GHSA-xxxx-yyyy-zzzz",
            "cve_id": "CVE-2024-0001",
            "summary": "Django SQL injection",
            "description": "A crafted query allows SQL injection.",
            "severity": "high",
            "cvss": {"score": 8.1, "vector_string": "CVSS:3.1/AV:N"},
            "cwes": [{"cwe_id": "CWE-89", "name": "SQL Injection"}],
            "identifiers": [{"type": "GHSA", "value": "GHSA-xxxx-yyyy-zzzz"}],
        },
        "security_vulnerability": {
            "severity": "moderate",
            "vulnerable_version_range": "< 4.2.10",
            "first_patched_version": {"identifier": "4.2.10"},
        },
    }


@pytest.fixture()
def azure_code_alert() -> dict[str, Any]:
    """An Azure DevOps Advanced Security code alert."""
    return {
        "alertId": 1001,
        "title": "Hard-coded credential",
        "severity": "error",
        "state": "active",
        "alertType": "code",
        "gitRef": "refs/heads/main",
        "firstSeenDate": "2024-03-01T10:00:00Z",
        "lastSeenDate": "2024-03-05T10:00:00Z",
        "rule": {
            "opaqueId": "cs/hardcoded-credentials",
            "friendlyName": "Hard-coded credentials",
            "description": "Credentials are hard-coded in source.",
            "tags": ["security", "external/cwe/cwe-798"],
        },
        "tools": [{"name": "CodeQL", "version": "2.16.1"}],
        "physicalLocations": [
            {
                "filePath": "src/Settings.cs",
                "region": {"lineStart": 3, "lineEnd": 3, "columnStart": 1, "columnEnd": 20},
                "versionControl": {"commitHash": "def456", "itemUrl": "https://dev.azure.com/acme/item"},
            }
        ],
    }


@pytest.fixture()
def azure_dependency_alert() -> dict[str, Any]:
    """An Azure DevOps Advanced Security dependency alert."""
    return {
        "alertId": 2002,
        "title": "CVE-2023-1234 in lodash",
        "severity": "moderate",
        "state": "active",
        "alertType": "dependency",
        "firstSeenDate": "2024-03-01T10:00:00Z",
        "rule": {
            "opaqueId": "GHSA-aaaa-bbbb-cccc",
            "friendlyName": "Prototype pollution",
            "description": "lodash is vulnerable to prototype pollution.",
            "additionalProperties": {"cveId": "CVE-2023-1234", "cvssScore": "7.4", "fixedVersion": "4.17.21"},
        },
        "physicalLocations": [{"filePath": "package.json"}],
        "logicalLocations": [{"fullyQualifiedName": "pkg:npm/lodash@4.17.15", "kind": "package"}],
    }


@pytest.fixture()
def make_finding() -> Callable[..., Finding]:
    """Factory for minimal, valid findings."""

    def _make_finding(
        *,
        fid: str = "1",
        severity: str = "high",
        state: str = "open",
        platform: SourcePlatform = PLATFORM_GITHUB,
        category: Category = CATEGORY_CODE,
        name: str = "finding",
    ) -> Finding:
        return Finding(
            id=fid,
            name=name,
            description="desc",
            severity=severity,  # type: ignore[arg-type]
            state=state,  # type: ignore[arg-type]
            category=category,
            source_platform=platform,
            code=CodeLocation(file_path="app.py", start_line=1) if category == CATEGORY_CODE else None,
            dependency=PackageInfo(name="pkg", version="1.0") if category == CATEGORY_DEPENDENCY else None,
        )

    return _make_finding


@pytest.fixture()
def make_application() -> Callable[..., ApplicationResult]:
    """Factory for application results with findings per finding set."""

    def _make_application(name: str = "svc-a", **finding_sets: tuple[Finding, ...]) -> ApplicationResult:
        return ApplicationResult(application_name=name, branch_name="main", timestamp=FIXED_NOW, **finding_sets)

    return _make_application


@pytest.fixture()
def fake_connectors() -> Callable[..., ConnectorSet]:
    """Factory building a ConnectorSet of ``FakeConnector`` objects for all four finding sets.

    ``records`` and ``failures`` are keyed by (platform, category), then by application.
    """

    def _build(
        records: dict[tuple[str, str], dict[str, list[Any]]] | None = None,
        failures: dict[tuple[str, str], dict[str, Exception]] | None = None,
    ) -> ConnectorSet:
        records = records or {}
        failures = failures or {}
        connectors = [
            FakeConnector(platform, category, records.get((platform, category)), failures.get((platform, category)))
            for platform in (PLATFORM_GITHUB, PLATFORM_AZURE_DEVOPS)
            for category in (CATEGORY_CODE, CATEGORY_DEPENDENCY)
        ]
        return ConnectorSet(connectors)

    return _build


@pytest.fixture()
def connector_error() -> Callable[..., ConnectorError]:
    """Factory for HTTP connector errors."""

    def _build(status_code: int = 500, message: str = "GitHub API Error: 500 - boom") -> ConnectorError:
        return ConnectorError(message, kind="http", status_code=status_code)

    return _build
