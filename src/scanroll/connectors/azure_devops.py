"""Azure DevOps Advanced Security alert connectors."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from scanroll.connectors.http import ThreadLocalSessions, build_session, get_json
from scanroll.constants.config import (
    AZURE_PROJECT_SEPARATOR,
    DEFAULT_AZURE_DEVOPS_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from scanroll.constants.connectors import (
    AZURE_DEVOPS_ALERT_STATE,
    AZURE_DEVOPS_ALERT_TYPES,
    AZURE_DEVOPS_API_VERSION,
    AZURE_DEVOPS_CONTINUATION_HEADER,
    BRANCH_REF_PREFIX,
    MAX_PAGES,
)
from scanroll.constants.platforms import CATEGORY_CODE, CATEGORY_DEPENDENCY, PLATFORM_AZURE_DEVOPS
from scanroll.exceptions import ConnectorError
from scanroll.types import Category, SourcePlatform

logger = logging.getLogger(__name__)

_LABEL = "Azure DevOps"


def split_project(application: str, default_project: str) -> tuple[str, str]:
    """Resolve ``project/repository`` application names against the default project."""
    if AZURE_PROJECT_SEPARATOR in application:
        project, _, repository = application.partition(AZURE_PROJECT_SEPARATOR)
        if project and repository:
            return project, repository
    return default_project, application


class _AzureDevOpsConnector:
    platform: SourcePlatform = PLATFORM_AZURE_DEVOPS
    category: Category

    def __init__(
        self,
        *,
        org: str,
        project: str,
        token: str,
        base_url: str = DEFAULT_AZURE_DEVOPS_BASE_URL,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.org = org
        self.project = project
        self.base_url = base_url.rstrip("/")
        self._timeout = (timeout_seconds, timeout_seconds)
        self._sessions = ThreadLocalSessions(
            lambda: session if session is not None else build_session({"Accept": "application/json"}, auth=("", token))
        )

    @property
    def _session(self) -> requests.Session:
        return self._sessions.get()

    def close(self) -> None:
        self._sessions.close()

    def fetch(self, application: str, branch: str) -> list[Any]:
        project, repository = split_project(application, self.project)
        alert_type = AZURE_DEVOPS_ALERT_TYPES[self.category]
        logger.info(
            "Fetching %s %s alerts for project %s, repository %s on branch %s",
            _LABEL,
            alert_type,
            project,
            repository,
            branch,
        )
        url = (
            f"{self.base_url}/{quote(self.org, safe='')}/{quote(project, safe='')}"
            f"/_apis/alert/repositories/{quote(repository, safe='')}/alerts"
        )
        params: dict[str, str | int] = {
            "api-version": AZURE_DEVOPS_API_VERSION,
            "criteria.alertType": alert_type,
            "criteria.ref": f"{BRANCH_REF_PREFIX}{branch}",
            "criteria.states": AZURE_DEVOPS_ALERT_STATE,
        }
        records: list[Any] = []
        for _ in range(MAX_PAGES):
            payload, response = get_json(self._session, url, label=_LABEL, params=params, timeout=self._timeout)
            if not isinstance(payload, dict) or not isinstance(payload.get("value", []), list):
                raise ConnectorError(
                    f"Malformed response from {_LABEL} API: expected an object with a `value` list",
                    kind="malformed",
                )
            records.extend(payload.get("value", []))
            token = response.headers.get(AZURE_DEVOPS_CONTINUATION_HEADER)
            if not token:
                break
            params = {**params, "continuationToken": token}
        else:
            logger.warning("Stopped following %s continuation after %d pages for %s", _LABEL, MAX_PAGES, url)
        logger.info("Received %d %s %s alerts for %s", len(records), _LABEL, alert_type, application)
        return records


class AzureDevOpsCodeScanningConnector(_AzureDevOpsConnector):
    """Fetches active code scanning alerts for one repository and branch."""

    category: Category = CATEGORY_CODE


class AzureDevOpsDependencyScanningConnector(_AzureDevOpsConnector):
    """Fetches active dependency scanning alerts for one repository and branch."""

    category: Category = CATEGORY_DEPENDENCY
