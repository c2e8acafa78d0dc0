"""HTTP constants for the source platform connectors."""

from __future__ import annotations

USER_AGENT: str = "scanroll"

GITHUB_ACCEPT: str = "application/vnd.github+json"
GITHUB_API_VERSION_HEADER: str = "X-GitHub-Api-Version"
GITHUB_API_VERSION: str = "2022-11-28"
GITHUB_PAGE_SIZE: int = 100
GITHUB_ALERT_STATE: str = "open"

AZURE_DEVOPS_API_VERSION: str = "7.2-preview.1"
AZURE_DEVOPS_CONTINUATION_HEADER: str = "x-ms-continuationtoken"
AZURE_DEVOPS_ALERT_STATE: str = "active"
AZURE_DEVOPS_ALERT_TYPES: dict[str, str] = {
    "code-scanning": "code",
    "dependency-scanning": "dependency",
}

BRANCH_REF_PREFIX: str = "refs/heads/"

# Upper bound on pages followed by a single fetch.
MAX_PAGES: int = 100
