"""Output filters applied to rendered findings, never to the summary."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from scanroll.constants.severity import SEVERITY_RANK
from scanroll.model import AggregateResult, ApplicationResult, Finding
from scanroll.types import Severity


@dataclass(frozen=True)
class OutputFilters:
    """Display/output filters that do not affect scanning or summary counts."""

    min_severity: Severity | None = None

    def active(self) -> bool:
        """Whether any filter is enabled."""
        return self.min_severity is not None


def finding_passes_filters(finding: Finding, filters: OutputFilters) -> bool:
    """Return whether a finding should be shown under the configured filters."""
    if filters.min_severity is None:
        return True
    return SEVERITY_RANK[finding.severity] >= SEVERITY_RANK[filters.min_severity]


def filter_findings(findings: Iterable[Finding], filters: OutputFilters) -> tuple[Finding, ...]:
    """Return findings that pass all configured output filters, in input order."""
    return tuple(finding for finding in findings if finding_passes_filters(finding, filters))


def filter_application(application: ApplicationResult, filters: OutputFilters) -> ApplicationResult:
    """Return a copy of ``application`` holding only the shown findings."""
    if not filters.active():
        return application
    return replace(
        application,
        github_code=filter_findings(application.github_code, filters),
        github_dependency=filter_findings(application.github_dependency, filters),
        azure_devops_code=filter_findings(application.azure_devops_code, filters),
        azure_devops_dependency=filter_findings(application.azure_devops_dependency, filters),
    )


def filter_aggregate(result: AggregateResult, filters: OutputFilters) -> AggregateResult:
    """Filter the findings of every application; ``summary`` keeps the full-run counts."""
    if not filters.active():
        return result
    return replace(
        result,
        applications=tuple(filter_application(application, filters) for application in result.applications),
    )
