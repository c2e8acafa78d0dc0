"""Config data model for Scanroll runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from scanroll.constants.config import (
    DEFAULT_AZURE_DEVOPS_BASE_URL,
    DEFAULT_BRANCH,
    DEFAULT_GITHUB_BASE_URL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from scanroll.constants.platforms import PLATFORM_AZURE_DEVOPS, PLATFORM_GITHUB
from scanroll.model import ApplicationSpec
from scanroll.types import SourcePlatform


@dataclass(frozen=True)
class GitHubSettings:
    """GitHub organization, endpoint and repositories to scan."""

    org: str = ""
    token: str = field(default="", repr=False)
    base_url: str = DEFAULT_GITHUB_BASE_URL
    applications: tuple[str, ...] = ()


@dataclass(frozen=True)
class AzureDevOpsSettings:
    """Azure DevOps organization, default project, endpoint and repositories to scan."""

    org: str = ""
    project: str = ""
    token: str = field(default="", repr=False)
    base_url: str = DEFAULT_AZURE_DEVOPS_BASE_URL
    applications: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScanrollConfig:
    """Resolved run config: file values with environment overrides applied."""

    branch: str = DEFAULT_BRANCH
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    github: GitHubSettings = GitHubSettings()
    azure_devops: AzureDevOpsSettings = AzureDevOpsSettings()
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def has_applications(self) -> bool:
        return bool(self.github.applications or self.azure_devops.applications)

    def application_specs(self) -> tuple[ApplicationSpec, ...]:
        """Build application specs, GitHub applications first, then Azure DevOps.

        A name listed for both platforms yields one ApplicationSpec scanned on both,
        placed at its GitHub position.
        """
        platforms_by_name: dict[str, list[SourcePlatform]] = {}
        for platform, names in (
            (PLATFORM_GITHUB, self.github.applications),
            (PLATFORM_AZURE_DEVOPS, self.azure_devops.applications),
        ):
            for name in names:
                platforms = platforms_by_name.setdefault(name, [])
                if platform not in platforms:
                    platforms.append(platform)
        return tuple(
            ApplicationSpec(name=name, branch=self.branch, platforms=tuple(platforms))
            for name, platforms in platforms_by_name.items()
        )
