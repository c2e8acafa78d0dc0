"""Tests for GitHub connectors with a mocked requests session."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from scanroll.connectors.github import GitHubCodeScanningConnector, GitHubDependencyScanningConnector
from scanroll.exceptions import ConnectorError


def _response(
    payload: Any = None,
    *,
    status_code: int = 200,
    links: dict[str, dict[str, str]] | None = None,
    json_error: bool = False,
) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = "Reason"
    response.links = links or {}
    response.headers = {}
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


def _connector(cls: type, session: MagicMock) -> Any:
    return cls(org="acme", token="t0ken", base_url="https://api.github.test/", timeout_seconds=5, session=session)


def test_code_scanning_request_shape() -> None:
    session = MagicMock()
    session.get.return_value = _response([{"number": 1}])

    records = _connector(GitHubCodeScanningConnector, session).fetch("svc-a", "release")

    assert records == [{"number": 1}]
    url = session.get.call_args.args[0]
    kwargs = session.get.call_args.kwargs
    assert url == "https://api.github.test/repos/acme/svc-a/code-scanning/alerts"
    assert kwargs["params"] == {"ref": "refs/heads/release", "state": "open", "per_page": 100}
    assert kwargs["timeout"] == (5, 5)


def test_dependency_request_is_branch_independent() -> None:
    session = MagicMock()
    session.get.return_value = _response([])

    records = _connector(GitHubDependencyScanningConnector, session).fetch("svc-a", "main")

    assert records == []
    assert session.get.call_args.args[0].endswith("/repos/acme/svc-a/dependabot/alerts")
    assert session.get.call_args.kwargs["params"] == {"state": "open", "per_page": 100}


def test_follows_link_header_pagination() -> None:
    session = MagicMock()
    next_url = "https://api.github.test/repos/acme/svc-a/code-scanning/alerts?page=2"
    session.get.side_effect = [
        _response([{"number": 1}], links={"next": {"url": next_url}}),
        _response([{"number": 2}]),
    ]

    records = _connector(GitHubCodeScanningConnector, session).fetch("svc-a", "main")

    assert records == [{"number": 1}, {"number": 2}]
    second = session.get.call_args_list[1]
    assert second.args[0] == next_url
    assert second.kwargs["params"] is None


def test_http_error_carries_status_and_api_message() -> None:
    session = MagicMock()
    session.get.return_value = _response({"message": "no analysis found"}, status_code=404)

    with pytest.raises(ConnectorError) as exc_info:
        _connector(GitHubCodeScanningConnector, session).fetch("svc-a", "main")

    assert exc_info.value.kind == "http"
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "GitHub API Error: 404 - no analysis found"


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (requests.exceptions.ReadTimeout("slow"), "timeout"),
        (requests.exceptions.ConnectionError("refused"), "network"),
    ],
)
def test_transport_errors_are_classified(exc: Exception, kind: str) -> None:
    session = MagicMock()
    session.get.side_effect = exc

    with pytest.raises(ConnectorError) as exc_info:
        _connector(GitHubCodeScanningConnector, session).fetch("svc-a", "main")

    assert exc_info.value.kind == kind
    assert exc_info.value.status_code is None


@pytest.mark.parametrize("response", [_response(json_error=True), _response({"not": "a list"})])
def test_malformed_bodies(response: MagicMock) -> None:
    session = MagicMock()
    session.get.return_value = response

    with pytest.raises(ConnectorError) as exc_info:
        _connector(GitHubCodeScanningConnector, session).fetch("svc-a", "main")

    assert exc_info.value.kind == "malformed"


def test_default_session_sends_bearer_token() -> None:
    connector = GitHubCodeScanningConnector(org="acme", token="t0ken")
    try:
        headers = connector._session.headers
        assert headers["Authorization"] == "Bearer t0ken"
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["X-GitHub-Api-Version"] == "2022-11-28"
    finally:
        connector.close()
