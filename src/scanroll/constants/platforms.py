"""Source platform and category identifiers."""

from __future__ import annotations

from scanroll.types import Category, SourcePlatform

PLATFORM_GITHUB: SourcePlatform = "github"
PLATFORM_AZURE_DEVOPS: SourcePlatform = "azure-devops"
PLATFORMS: tuple[SourcePlatform, ...] = (PLATFORM_GITHUB, PLATFORM_AZURE_DEVOPS)

CATEGORY_CODE: Category = "code-scanning"
CATEGORY_DEPENDENCY: Category = "dependency-scanning"
CATEGORIES: tuple[Category, ...] = (CATEGORY_CODE, CATEGORY_DEPENDENCY)

# Fixed iteration order for the four finding sets of an application result.
FINDING_SET_KEYS: tuple[tuple[SourcePlatform, Category], ...] = (
    (PLATFORM_GITHUB, CATEGORY_CODE),
    (PLATFORM_GITHUB, CATEGORY_DEPENDENCY),
    (PLATFORM_AZURE_DEVOPS, CATEGORY_CODE),
    (PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY),
)

# Summary counter name for each finding set.
SUMMARY_TOTAL_FIELDS: dict[tuple[SourcePlatform, Category], str] = {
    (PLATFORM_GITHUB, CATEGORY_CODE): "total_github_code_scanning_issues",
    (PLATFORM_GITHUB, CATEGORY_DEPENDENCY): "total_github_dependency_scanning_issues",
    (PLATFORM_AZURE_DEVOPS, CATEGORY_CODE): "total_azure_devops_code_scanning_issues",
    (PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY): "total_azure_devops_dependency_scanning_issues",
}

PLATFORM_LABELS: dict[SourcePlatform, str] = {
    PLATFORM_GITHUB: "GitHub",
    PLATFORM_AZURE_DEVOPS: "Azure DevOps",
}

CATEGORY_LABELS: dict[Category, str] = {
    CATEGORY_CODE: "Code Scanning",
    CATEGORY_DEPENDENCY: "Dependency Scanning",
}
