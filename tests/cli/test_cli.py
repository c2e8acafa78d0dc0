"""Tests for the scanroll command line interface."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from scanroll.cli.main import build_parser, main
from scanroll.connectors import ConnectorSet
from scanroll.constants import config as config_constants
from scanroll.exceptions import ScanrollError

CONFIG_YAML = """\
branch: main
github:
  org: acme
  applications:
    - svc-a
    - svc-b
"""


@pytest.fixture()
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory with every scanroll environment variable cleared."""
    for name in dir(config_constants):
        if name.startswith("ENV_"):
            monkeypatch.delenv(getattr(config_constants, name), raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def configured(workspace: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Workspace holding a valid config file and a GitHub token."""
    (workspace / "scanroll.yaml").write_text(CONFIG_YAML, encoding="utf-8")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    return workspace


def _run_scan(
    connectors: ConnectorSet,
    out_dir: Path,
    *extra: str,
) -> int:
    with patch("scanroll.cli.handlers.build_connectors", return_value=connectors):
        return main(["scan", "-o", str(out_dir), "--no-color", *extra])


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["scan"])

    assert args.output_format == "html,json"
    assert args.max_workers is None
    assert args.min_severity is None
    assert args.fail_on is None
    assert args.fail_on_errors is False


def test_parser_rejects_unknown_severity() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["scan", "--min-severity", "severe"])


def test_parser_rejects_non_positive_workers() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["scan", "--max-workers", "0"])


def test_validate_config_reports_missing_applications(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config"]) == 2
    assert "CFG008" in capsys.readouterr().err


def test_validate_config_success(configured: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config", "-c", str(configured / "scanroll.yaml")]) == 0
    assert "Configuration is valid." in capsys.readouterr().out


def test_validate_config_missing_token(
    configured: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv("GITHUB_TOKEN")

    assert main(["validate-config"]) == 2
    assert "github.token" in capsys.readouterr().err


def test_scan_writes_reports(
    configured: Path,
    fake_connectors: Callable[..., ConnectorSet],
    github_code_alert: dict[str, Any],
    capsys: pytest.CaptureFixture[str],
) -> None:
    connectors = fake_connectors(records={("github", "code-scanning"): {"svc-a": [github_code_alert]}})
    out_dir = configured / "out"

    assert _run_scan(connectors, out_dir, "--output-format", "html,json,csv") == 0

    payload = json.loads((out_dir / "aggregate.json").read_text(encoding="utf-8"))
    assert [app["application_name"] for app in payload["applications"]] == ["svc-a", "svc-b"]
    assert payload["summary"]["total_github_code_scanning_issues"] == 1
    assert (out_dir / "findings.csv").exists()
    assert any(path.name.startswith("multi-app-report-") for path in out_dir.iterdir())
    assert "Apps        2 total / 2 ok / 0 failed" in capsys.readouterr().out


def test_scan_no_stdout(
    configured: Path,
    fake_connectors: Callable[..., ConnectorSet],
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run_scan(fake_connectors(), configured / "out", "--no-stdout") == 0
    assert capsys.readouterr().out == ""


def test_scan_fail_on_severity(
    configured: Path,
    fake_connectors: Callable[..., ConnectorSet],
    github_code_alert: dict[str, Any],
) -> None:
    records = {("github", "code-scanning"): {"svc-a": [github_code_alert]}}

    assert _run_scan(fake_connectors(records=records), configured / "out", "--fail-on", "high") == 1
    assert _run_scan(fake_connectors(records=records), configured / "out", "--fail-on", "critical") == 0


def test_scan_application_failure_exit_codes(
    configured: Path,
    fake_connectors: Callable[..., ConnectorSet],
    connector_error: Callable[..., Exception],
    capsys: pytest.CaptureFixture[str],
) -> None:
    failures = {("github", "dependency-scanning"): {"svc-b": connector_error(403, "GitHub API Error: 403 - denied")}}

    assert _run_scan(fake_connectors(failures=failures), configured / "out") == 0
    assert "svc-b: github/dependency-scanning: GitHub API Error: 403 - denied" in capsys.readouterr().out
    assert _run_scan(fake_connectors(failures=failures), configured / "out", "--fail-on-errors") == 1


def test_scan_rejects_malformed_output_format(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", "--output-format", "html,,json"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_scan_rejects_unknown_output_format(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", "--output-format", "pdf"]) == 2
    assert "unknown output format(s): pdf" in capsys.readouterr().err


def test_scan_invalid_config_exits_2(workspace: Path) -> None:
    (workspace / "scanroll.yaml").write_text("branch: main\nunexpected: 1\n", encoding="utf-8")

    assert main(["scan"]) == 2


def test_scan_scanner_error_exits_1(
    configured: Path,
    fake_connectors: Callable[..., ConnectorSet],
    capsys: pytest.CaptureFixture[str],
) -> None:
    with (
        patch("scanroll.cli.handlers.build_connectors", return_value=fake_connectors()),
        patch("scanroll.cli.handlers.run_all", side_effect=ScanrollError("boom")),
    ):
        assert main(["scan", "-o", str(configured / "out")]) == 1
    assert "Scanner error: boom" in capsys.readouterr().err
