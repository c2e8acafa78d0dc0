"""Map decoded raw records onto the unified ``Finding`` model.

This module is the only place that constructs ``Finding`` objects from
connector data. It is a pure function of its inputs: no clock reads, no
I/O, no logging.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from scanroll.constants.platforms import CATEGORY_CODE, CATEGORY_DEPENDENCY, PLATFORM_AZURE_DEVOPS, PLATFORM_GITHUB
from scanroll.model import CodeLocation, Finding, PackageInfo
from scanroll.normalizer.records import (
    AzureDevOpsCodeAlert,
    AzureDevOpsDependencyAlert,
    GitHubCodeAlert,
    GitHubDependencyAlert,
    decode_record,
)
from scanroll.normalizer.severity import map_severity, map_state, parse_timestamp
from scanroll.types import Category, SourcePlatform

UNKNOWN_RULE: str = "Unknown Rule"
UNKNOWN_DEPENDENCY: str = "Unknown Dependency"
NO_DESCRIPTION: str = "No description provided"


@dataclass(frozen=True)
class NormalizationContext:
    """Values the raw record may not carry itself."""

    branch: str


def _timestamps(created_raw: str, updated_raw: str) -> tuple[datetime | None, datetime | None]:
    created = parse_timestamp(created_raw)
    updated = parse_timestamp(updated_raw) or created
    if created is not None and updated is not None and updated < created:
        updated = created
    return created, updated


def _github_code(record: GitHubCodeAlert, context: NormalizationContext) -> Finding:
    created, updated = _timestamps(record.created_at, record.updated_at)
    return Finding(
        id=record.identifier,
        name=record.rule_name or UNKNOWN_RULE,
        description=record.rule_description or record.message or NO_DESCRIPTION,
        severity=map_severity(PLATFORM_GITHUB, CATEGORY_CODE, record.severity),
        state=map_state(PLATFORM_GITHUB, record.state),
        category=CATEGORY_CODE,
        source_platform=PLATFORM_GITHUB,
        created_at=created,
        updated_at=updated,
        url=record.url,
        branch=context.branch,
        tool_name=record.tool_name or "CodeQL",
        tool_version=record.tool_version or "Unknown",
        rule_id=record.rule_id,
        rule_name=record.rule_name,
        commit_sha=record.commit_sha,
        cwes=record.cwes,
        tags=record.tags,
        code=CodeLocation(
            file_path=record.file_path,
            start_line=record.start_line,
            end_line=record.end_line,
            start_column=record.start_column,
            end_column=record.end_column,
            snippet=record.snippet,
        ),
    )


def _github_dependency(record: GitHubDependencyAlert, context: NormalizationContext) -> Finding:
    created, updated = _timestamps(record.created_at, record.updated_at)
    return Finding(
        id=record.identifier,
        name=record.summary or record.package_name or UNKNOWN_DEPENDENCY,
        description=record.description or NO_DESCRIPTION,
        severity=map_severity(PLATFORM_GITHUB, CATEGORY_DEPENDENCY, record.severity),
        state=map_state(PLATFORM_GITHUB, record.state),
        category=CATEGORY_DEPENDENCY,
        source_platform=PLATFORM_GITHUB,
        created_at=created,
        updated_at=updated,
        url=record.url,
        branch=context.branch,
        tool_name="Dependabot",
        tool_version="Unknown",
        rule_id=record.ghsa_id,
        rule_name=record.summary or record.package_name,
        cwes=record.cwes,
        tags=record.identifiers,
        dependency=PackageInfo(
            ecosystem=record.ecosystem,
            name=record.package_name,
            version=record.vulnerable_version_range,
            fixed_version=record.fixed_version,
            manifest_path=record.manifest_path,
            advisory_id=record.ghsa_id,
            cve_id=record.cve_id,
            cvss=record.cvss,
        ),
    )


def _azure_devops_code(record: AzureDevOpsCodeAlert, context: NormalizationContext) -> Finding:
    created, updated = _timestamps(record.created_at, record.updated_at)
    return Finding(
        id=record.identifier,
        name=record.title or record.rule_name or UNKNOWN_RULE,
        description=record.rule_description or NO_DESCRIPTION,
        severity=map_severity(PLATFORM_AZURE_DEVOPS, CATEGORY_CODE, record.severity),
        state=map_state(PLATFORM_AZURE_DEVOPS, record.state),
        category=CATEGORY_CODE,
        source_platform=PLATFORM_AZURE_DEVOPS,
        created_at=created,
        updated_at=updated,
        url=record.url,
        branch=context.branch,
        tool_name=record.tool_name or "Advanced Security",
        tool_version=record.tool_version or "Unknown",
        rule_id=record.rule_id,
        rule_name=record.rule_name,
        commit_sha=record.commit_sha,
        cwes=record.cwes,
        tags=record.tags,
        code=CodeLocation(
            file_path=record.file_path,
            start_line=record.start_line,
            end_line=record.end_line,
            start_column=record.start_column,
            end_column=record.end_column,
        ),
    )


def _azure_devops_dependency(record: AzureDevOpsDependencyAlert, context: NormalizationContext) -> Finding:
    created, updated = _timestamps(record.created_at, record.updated_at)
    return Finding(
        id=record.identifier,
        name=record.title or record.package_name or UNKNOWN_DEPENDENCY,
        description=record.rule_description or NO_DESCRIPTION,
        severity=map_severity(PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY, record.severity),
        state=map_state(PLATFORM_AZURE_DEVOPS, record.state),
        category=CATEGORY_DEPENDENCY,
        source_platform=PLATFORM_AZURE_DEVOPS,
        created_at=created,
        updated_at=updated,
        url=record.url,
        branch=context.branch,
        tool_name=record.tool_name or "Dependency Scanning",
        tool_version=record.tool_version or "Unknown",
        rule_id=record.rule_id,
        rule_name=record.rule_name,
        commit_sha=record.commit_sha,
        cwes=record.cwes,
        tags=record.tags,
        dependency=PackageInfo(
            ecosystem=record.ecosystem,
            name=record.package_name,
            version=record.package_version,
            fixed_version=record.fixed_version,
            manifest_path=record.file_path,
            advisory_id=record.rule_id,
            cve_id=record.cve_id,
            cvss=record.cvss,
        ),
    )


_BUILDERS: dict[tuple[SourcePlatform, Category], Callable[[Any, NormalizationContext], Finding]] = {
    (PLATFORM_GITHUB, CATEGORY_CODE): _github_code,
    (PLATFORM_GITHUB, CATEGORY_DEPENDENCY): _github_dependency,
    (PLATFORM_AZURE_DEVOPS, CATEGORY_CODE): _azure_devops_code,
    (PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY): _azure_devops_dependency,
}


def normalize(
    raw: object,
    source_platform: SourcePlatform,
    category: Category,
    context: NormalizationContext,
) -> Finding:
    """Normalize one raw connector record into a ``Finding``.

    Missing optional fields fall back to empty values or documented
    defaults. Structurally invalid input raises ``NormalizationError``.
    """
    record = decode_record(raw, source_platform, category)
    return _BUILDERS[(source_platform, category)](record, context)


def normalize_many(
    records: Iterable[object],
    source_platform: SourcePlatform,
    category: Category,
    context: NormalizationContext,
) -> tuple[Finding, ...]:
    """Normalize a sequence of raw records, preserving order."""
    return tuple(normalize(raw, source_platform, category, context) for raw in records)
