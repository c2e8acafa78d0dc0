"""Frozen dataclasses for normalized findings and run results."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from scanroll.constants.platforms import (
    CATEGORY_CODE,
    CATEGORY_DEPENDENCY,
    FINDING_SET_KEYS,
    PLATFORM_AZURE_DEVOPS,
    PLATFORM_GITHUB,
    PLATFORMS,
)
from scanroll.constants.reporting import SCHEMA_VERSION
from scanroll.constants.severity import FINDING_STATES, SEVERITIES
from scanroll.types import Category, ConnectorErrorKind, FindingState, JsonObject, Severity, SourcePlatform


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class CodeLocation:
    """Source location and snippet of a code-scanning finding."""

    file_path: str = ""
    start_line: int | None = None
    end_line: int | None = None
    start_column: int | None = None
    end_column: int | None = None
    snippet: str = ""

    def to_dict(self) -> JsonObject:
        return {
            "file_path": self.file_path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "start_column": self.start_column,
            "end_column": self.end_column,
            "snippet": self.snippet,
        }


@dataclass(frozen=True)
class PackageInfo:
    """Vulnerable package coordinates of a dependency-scanning finding."""

    ecosystem: str = ""
    name: str = ""
    version: str = ""
    fixed_version: str = ""
    manifest_path: str = ""
    advisory_id: str = ""
    cve_id: str = ""
    cvss: float | None = None

    def to_dict(self) -> JsonObject:
        return {
            "ecosystem": self.ecosystem,
            "name": self.name,
            "version": self.version,
            "fixed_version": self.fixed_version,
            "manifest_path": self.manifest_path,
            "advisory_id": self.advisory_id,
            "cve_id": self.cve_id,
            "cvss": self.cvss,
        }


@dataclass(frozen=True)
class Finding:
    """One normalized security result.

    ``code`` is only legal for code-scanning findings and ``dependency``
    only for dependency-scanning findings.
    """

    id: str
    name: str
    description: str
    severity: Severity
    state: FindingState
    category: Category
    source_platform: SourcePlatform
    created_at: datetime | None = None
    updated_at: datetime | None = None
    url: str = ""
    branch: str = ""
    tool_name: str = ""
    tool_version: str = ""
    rule_id: str = ""
    rule_name: str = ""
    commit_sha: str = ""
    cwes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    code: CodeLocation | None = None
    dependency: PackageInfo | None = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity {self.severity!r}")
        if self.state not in FINDING_STATES:
            raise ValueError(f"Unknown finding state {self.state!r}")
        if self.source_platform not in PLATFORMS:
            raise ValueError(f"Unknown source platform {self.source_platform!r}")
        if self.category == CATEGORY_CODE and self.dependency is not None:
            raise ValueError("code-scanning findings cannot carry package information")
        if self.category == CATEGORY_DEPENDENCY and self.code is not None:
            raise ValueError("dependency-scanning findings cannot carry a code location")
        if self.category not in (CATEGORY_CODE, CATEGORY_DEPENDENCY):
            raise ValueError(f"Unknown category {self.category!r}")
        if self.created_at is not None and self.updated_at is not None and self.updated_at < self.created_at:
            raise ValueError("updated_at must not precede created_at")

    def to_dict(self) -> JsonObject:
        """Return a JSON-serializable representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity,
            "state": self.state,
            "category": self.category,
            "source_platform": self.source_platform,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
            "url": self.url,
            "branch": self.branch,
            "tool_name": self.tool_name,
            "tool_version": self.tool_version,
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "commit_sha": self.commit_sha,
            "cwes": list(self.cwes),
            "tags": list(self.tags),
            "code": self.code.to_dict() if self.code is not None else None,
            "dependency": self.dependency.to_dict() if self.dependency is not None else None,
        }


@dataclass(frozen=True)
class ApplicationSpec:
    """One configured application and the platforms it is scanned on."""

    name: str
    branch: str
    platforms: tuple[SourcePlatform, ...]


@dataclass(frozen=True)
class ConnectorFailure:
    """A single failed platform/category fetch inside one application scan."""

    platform: SourcePlatform
    category: Category
    message: str
    kind: ConnectorErrorKind | None = None
    status_code: int | None = None

    def describe(self) -> str:
        return f"{self.platform}/{self.category}: {self.message}"

    def to_dict(self) -> JsonObject:
        return {
            "platform": self.platform,
            "category": self.category,
            "message": self.message,
            "kind": self.kind,
            "status_code": self.status_code,
        }


@dataclass(frozen=True)
class ApplicationResult:
    """One application's scan outcome with its four finding sets."""

    application_name: str
    branch_name: str
    timestamp: datetime
    github_code: tuple[Finding, ...] = ()
    github_dependency: tuple[Finding, ...] = ()
    azure_devops_code: tuple[Finding, ...] = ()
    azure_devops_dependency: tuple[Finding, ...] = ()

    @classmethod
    def empty(cls, application_name: str, branch_name: str, timestamp: datetime) -> ApplicationResult:
        """Placeholder result with all four finding sets empty."""
        return cls(application_name=application_name, branch_name=branch_name, timestamp=timestamp)

    def findings_for(self, platform: SourcePlatform, category: Category) -> tuple[Finding, ...]:
        """Return the finding set for one platform/category key."""
        if platform == PLATFORM_GITHUB:
            return self.github_code if category == CATEGORY_CODE else self.github_dependency
        if platform == PLATFORM_AZURE_DEVOPS:
            return self.azure_devops_code if category == CATEGORY_CODE else self.azure_devops_dependency
        raise KeyError(f"Unknown source platform {platform!r}")

    @property
    def finding_sets(self) -> dict[tuple[SourcePlatform, Category], tuple[Finding, ...]]:
        """All four finding sets keyed by (platform, category), in fixed order."""
        return {key: self.findings_for(*key) for key in FINDING_SET_KEYS}

    def iter_findings(self) -> Iterator[Finding]:
        for findings in self.finding_sets.values():
            yield from findings

    @property
    def finding_count(self) -> int:
        return sum(len(findings) for findings in self.finding_sets.values())

    def to_dict(self) -> JsonObject:
        return {
            "application_name": self.application_name,
            "branch_name": self.branch_name,
            "timestamp": self.timestamp.isoformat(),
            "findings": {
                f"{platform}/{category}": [finding.to_dict() for finding in findings]
                for (platform, category), findings in self.finding_sets.items()
            },
        }


@dataclass(frozen=True)
class ScanError:
    """Record of an application whose scan did not produce real data."""

    application_name: str
    error: str
    failures: tuple[ConnectorFailure, ...] = ()

    def to_dict(self) -> JsonObject:
        return {
            "application_name": self.application_name,
            "error": self.error,
            "failures": [failure.to_dict() for failure in self.failures],
        }


@dataclass(frozen=True)
class Summary:
    """Run-level totals derived from the application results."""

    total_applications: int = 0
    successful_applications: int = 0
    failed_applications: int = 0
    total_github_code_scanning_issues: int = 0
    total_github_dependency_scanning_issues: int = 0
    total_azure_devops_code_scanning_issues: int = 0
    total_azure_devops_dependency_scanning_issues: int = 0
    total_findings: int = 0
    severity_summary: dict[Severity, int] = field(default_factory=lambda: dict.fromkeys(SEVERITIES, 0))
    counts_by_state: dict[FindingState, int] = field(default_factory=lambda: dict.fromkeys(FINDING_STATES, 0))

    def to_dict(self) -> JsonObject:
        return {
            "total_applications": self.total_applications,
            "successful_applications": self.successful_applications,
            "failed_applications": self.failed_applications,
            "total_github_code_scanning_issues": self.total_github_code_scanning_issues,
            "total_github_dependency_scanning_issues": self.total_github_dependency_scanning_issues,
            "total_azure_devops_code_scanning_issues": self.total_azure_devops_code_scanning_issues,
            "total_azure_devops_dependency_scanning_issues": self.total_azure_devops_dependency_scanning_issues,
            "total_findings": self.total_findings,
            "severity_summary": dict(self.severity_summary),
            "counts_by_state": dict(self.counts_by_state),
        }


@dataclass(frozen=True)
class AggregateResult:
    """Run-level output: ordered application results, errors and derived summary."""

    applications: tuple[ApplicationResult, ...]
    errors: tuple[ScanError, ...]
    summary: Summary
    timestamp: datetime

    @property
    def failed_application_names(self) -> frozenset[str]:
        return frozenset(error.application_name for error in self.errors)

    def to_dict(self) -> JsonObject:
        return {
            "schema_version": SCHEMA_VERSION,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.summary.to_dict(),
            "applications": [application.to_dict() for application in self.applications],
            "errors": [error.to_dict() for error in self.errors],
        }
