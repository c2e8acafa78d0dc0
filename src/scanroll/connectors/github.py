"""GitHub code scanning and Dependabot alert connectors."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from scanroll.connectors.http import ThreadLocalSessions, build_session, get_json
from scanroll.constants.config import DEFAULT_GITHUB_BASE_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS
from scanroll.constants.connectors import (
    BRANCH_REF_PREFIX,
    GITHUB_ACCEPT,
    GITHUB_ALERT_STATE,
    GITHUB_API_VERSION,
    GITHUB_API_VERSION_HEADER,
    GITHUB_PAGE_SIZE,
    MAX_PAGES,
)
from scanroll.constants.platforms import CATEGORY_CODE, CATEGORY_DEPENDENCY, PLATFORM_GITHUB
from scanroll.exceptions import ConnectorError
from scanroll.types import Category, SourcePlatform

logger = logging.getLogger(__name__)

_LABEL = "GitHub"


class _GitHubConnector:
    platform: SourcePlatform = PLATFORM_GITHUB
    category: Category

    def __init__(
        self,
        *,
        org: str,
        token: str,
        base_url: str = DEFAULT_GITHUB_BASE_URL,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.org = org
        self.base_url = base_url.rstrip("/")
        self._timeout = (timeout_seconds, timeout_seconds)
        headers = {
            "Accept": GITHUB_ACCEPT,
            "Authorization": f"Bearer {token}",
            GITHUB_API_VERSION_HEADER: GITHUB_API_VERSION,
        }
        self._sessions = ThreadLocalSessions(lambda: session if session is not None else build_session(headers))

    @property
    def _session(self) -> requests.Session:
        return self._sessions.get()

    def close(self) -> None:
        self._sessions.close()

    def _repo_url(self, application: str, suffix: str) -> str:
        return f"{self.base_url}/repos/{quote(self.org, safe='')}/{quote(application, safe='')}/{suffix}"

    def _get_paginated(self, url: str, params: dict[str, str | int]) -> list[Any]:
        """Collect every page by following ``Link: rel="next"`` headers."""
        records: list[Any] = []
        next_url: str | None = url
        next_params: dict[str, str | int] | None = {**params, "per_page": GITHUB_PAGE_SIZE}
        for _ in range(MAX_PAGES):
            if next_url is None:
                return records
            payload, response = get_json(
                self._session,
                next_url,
                label=_LABEL,
                params=next_params,
                timeout=self._timeout,
            )
            if not isinstance(payload, list):
                raise ConnectorError(
                    f"Malformed response from {_LABEL} API: expected a list of alerts",
                    kind="malformed",
                )
            records.extend(payload)
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string.
            next_params = None
        if next_url is not None:
            logger.warning("Stopped following %s pagination after %d pages for %s", _LABEL, MAX_PAGES, url)
        return records


class GitHubCodeScanningConnector(_GitHubConnector):
    """Fetches open code scanning alerts for one repository and branch."""

    category: Category = CATEGORY_CODE

    def fetch(self, application: str, branch: str) -> list[Any]:
        logger.info("Fetching %s code scanning alerts for %s on branch %s", _LABEL, application, branch)
        records = self._get_paginated(
            self._repo_url(application, "code-scanning/alerts"),
            {"ref": f"{BRANCH_REF_PREFIX}{branch}", "state": GITHUB_ALERT_STATE},
        )
        logger.info("Received %d %s code scanning alerts for %s", len(records), _LABEL, application)
        return records


class GitHubDependencyScanningConnector(_GitHubConnector):
    """Fetches open Dependabot alerts for one repository.

    Dependabot alerts are tracked against the default branch; ``branch`` is
    accepted for interface parity and only used for logging.
    """

    category: Category = CATEGORY_DEPENDENCY

    def fetch(self, application: str, branch: str) -> list[Any]:
        logger.info("Fetching %s dependency alerts for %s (branch %s)", _LABEL, application, branch)
        records = self._get_paginated(
            self._repo_url(application, "dependabot/alerts"),
            {"state": GITHUB_ALERT_STATE},
        )
        logger.info("Received %d %s dependency alerts for %s", len(records), _LABEL, application)
        return records
