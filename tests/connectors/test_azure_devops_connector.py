"""Tests for Azure DevOps Advanced Security connectors."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from scanroll.connectors.azure_devops import (
    AzureDevOpsCodeScanningConnector,
    AzureDevOpsDependencyScanningConnector,
    split_project,
)
from scanroll.exceptions import ConnectorError


def _response(payload: Any, *, status_code: int = 200, headers: dict[str, str] | None = None) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = "Reason"
    response.headers = headers or {}
    response.links = {}
    response.json.return_value = payload
    return response


def _connector(cls: type, session: MagicMock) -> Any:
    return cls(
        org="acme",
        project="platform",
        token="pat",
        base_url="https://advsec.dev.azure.test",
        timeout_seconds=10,
        session=session,
    )


def test_split_project() -> None:
    assert split_project("svc", "platform") == ("platform", "svc")
    assert split_project("other/svc", "platform") == ("other", "svc")
    assert split_project("/svc", "platform") == ("platform", "/svc")


def test_code_alert_request_shape() -> None:
    session = MagicMock()
    session.get.return_value = _response({"count": 1, "value": [{"alertId": 1}]})

    records = _connector(AzureDevOpsCodeScanningConnector, session).fetch("svc-c", "main")

    assert records == [{"alertId": 1}]
    assert (
        session.get.call_args.args[0]
        == "https://advsec.dev.azure.test/acme/platform/_apis/alert/repositories/svc-c/alerts"
    )
    assert session.get.call_args.kwargs["params"] == {
        "api-version": "7.2-preview.1",
        "criteria.alertType": "code",
        "criteria.ref": "refs/heads/main",
        "criteria.states": "active",
    }


def test_project_override_and_dependency_alert_type() -> None:
    session = MagicMock()
    session.get.return_value = _response({"value": []})

    _connector(AzureDevOpsDependencyScanningConnector, session).fetch("other-project/svc-d", "main")

    assert "/acme/other-project/_apis/alert/repositories/svc-d/alerts" in session.get.call_args.args[0]
    assert session.get.call_args.kwargs["params"]["criteria.alertType"] == "dependency"


def test_follows_continuation_token() -> None:
    session = MagicMock()
    session.get.side_effect = [
        _response({"value": [{"alertId": 1}]}, headers={"x-ms-continuationtoken": "abc"}),
        _response({"value": [{"alertId": 2}]}),
    ]

    records = _connector(AzureDevOpsCodeScanningConnector, session).fetch("svc", "main")

    assert records == [{"alertId": 1}, {"alertId": 2}]
    assert session.get.call_args_list[1].kwargs["params"]["continuationToken"] == "abc"


def test_http_error() -> None:
    session = MagicMock()
    session.get.return_value = _response({"message": "Advanced Security is not enabled"}, status_code=403)

    with pytest.raises(ConnectorError) as exc_info:
        _connector(AzureDevOpsCodeScanningConnector, session).fetch("svc", "main")

    assert exc_info.value.status_code == 403
    assert "Advanced Security is not enabled" in str(exc_info.value)


def test_malformed_body() -> None:
    session = MagicMock()
    session.get.return_value = _response([{"alertId": 1}])

    with pytest.raises(ConnectorError) as exc_info:
        _connector(AzureDevOpsCodeScanningConnector, session).fetch("svc", "main")

    assert exc_info.value.kind == "malformed"


def test_default_session_uses_basic_auth_with_pat() -> None:
    connector = AzureDevOpsCodeScanningConnector(org="acme", project="p", token="pat")
    try:
        assert connector._session.auth == ("", "pat")
    finally:
        connector.close()
