"""Application Scanner: run every applicable connector for one application."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeAlias

from scanroll.connectors.base import ConnectorSet
from scanroll.constants.platforms import (
    CATEGORIES,
    CATEGORY_CODE,
    CATEGORY_DEPENDENCY,
    PLATFORM_AZURE_DEVOPS,
    PLATFORM_GITHUB,
    PLATFORM_LABELS,
)
from scanroll.exceptions import ConnectorError
from scanroll.model import ApplicationResult, ApplicationSpec, ConnectorFailure, Finding
from scanroll.normalizer import NormalizationContext, normalize_many
from scanroll.types import Category, SourcePlatform

logger = logging.getLogger(__name__)

Clock: TypeAlias = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ApplicationScanOutcome:
    """Assembled result of one application plus every failed sub-query."""

    result: ApplicationResult
    failures: tuple[ConnectorFailure, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.failures


def _failure_from(platform: SourcePlatform, category: Category, exc: Exception) -> ConnectorFailure:
    if isinstance(exc, ConnectorError):
        return ConnectorFailure(
            platform=platform,
            category=category,
            message=str(exc),
            kind=exc.kind,
            status_code=exc.status_code,
        )
    return ConnectorFailure(platform=platform, category=category, message=str(exc) or type(exc).__name__)


def scan_application(
    spec: ApplicationSpec,
    connectors: ConnectorSet,
    *,
    logger: logging.Logger = logger,
    clock: Clock = utc_now,
) -> ApplicationScanOutcome:
    """Fetch and normalize all finding sets that apply to ``spec``.

    Each (platform, category) call is attempted independently. A failing
    connector or an unreadable record leaves that one finding set empty and
    is reported in ``failures``; it never stops the remaining calls.
    """
    context = NormalizationContext(branch=spec.branch)
    finding_sets: dict[tuple[SourcePlatform, Category], tuple[Finding, ...]] = {}
    failures: list[ConnectorFailure] = []

    for platform in spec.platforms:
        for category in CATEGORIES:
            connector = connectors.get(platform, category)
            if connector is None:
                failures.append(
                    ConnectorFailure(
                        platform=platform,
                        category=category,
                        message=f"No {PLATFORM_LABELS[platform]} connector configured for {category}",
                    )
                )
                continue
            try:
                raw_records = connector.fetch(spec.name, spec.branch)
                findings = normalize_many(raw_records, platform, category, context)
            except Exception as exc:
                failure = _failure_from(platform, category, exc)
                logger.warning("Application %s: %s", spec.name, failure.describe())
                failures.append(failure)
                continue
            logger.debug("Application %s: %d %s/%s findings", spec.name, len(findings), platform, category)
            finding_sets[(platform, category)] = findings

    result = ApplicationResult(
        application_name=spec.name,
        branch_name=spec.branch,
        timestamp=clock(),
        github_code=finding_sets.get((PLATFORM_GITHUB, CATEGORY_CODE), ()),
        github_dependency=finding_sets.get((PLATFORM_GITHUB, CATEGORY_DEPENDENCY), ()),
        azure_devops_code=finding_sets.get((PLATFORM_AZURE_DEVOPS, CATEGORY_CODE), ()),
        azure_devops_dependency=finding_sets.get((PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY), ()),
    )
    return ApplicationScanOutcome(result=result, failures=tuple(failures))
