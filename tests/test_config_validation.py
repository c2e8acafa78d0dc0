"""Tests for collect-all config validation."""

from __future__ import annotations

from pathlib import Path

from scanroll.config import validate_config
from scanroll.exceptions.validation import format_errors

VALID_ENV = {"GITHUB_TOKEN": "gh"}


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "scanroll.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def _codes(errors: list) -> list[str]:
    return [error.code for error in errors]


def test_valid_config_has_no_errors(tmp_path: Path) -> None:
    path = _write(tmp_path, "github:\n  org: acme\n  applications: [svc-a]\n")

    assert validate_config(path, env=VALID_ENV) == []


def test_missing_explicit_file(tmp_path: Path) -> None:
    assert _codes(validate_config(tmp_path / "nope.yaml", env={})) == ["CFG001"]


def test_invalid_yaml(tmp_path: Path) -> None:
    assert _codes(validate_config(_write(tmp_path, "github: {org: [\n"), env={})) == ["CFG002"]


def test_non_mapping(tmp_path: Path) -> None:
    assert _codes(validate_config(_write(tmp_path, "- a\n"), env={})) == ["CFG003"]


def test_unknown_keys_get_suggestions(tmp_path: Path) -> None:
    path = _write(tmp_path, "branchh: main\ngithub:\n  orgg: acme\n")

    errors = validate_config(path, env={})

    assert _codes(errors) == ["CFG004", "CFG004"]
    assert errors[0].field == "branchh"
    assert errors[0].hint == "did you mean `branch`?"
    assert errors[1].field == "github.orgg"
    assert errors[1].hint == "did you mean `org`?"


def test_collects_type_and_range_errors(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "branch: 3\nmax_workers: -1\nrequest_timeout_seconds: fast\ngithub:\n  applications: svc\nazure_devops: []\n",
    )

    errors = validate_config(path, env={})

    assert _codes(errors) == ["CFG005", "CFG005", "CFG005", "CFG007", "CFG009"]
    assert "[CFG007]" in format_errors(errors)


def test_no_applications(tmp_path: Path) -> None:
    errors = validate_config(env={}, cwd=tmp_path)

    assert _codes(errors) == ["CFG008"]
    assert errors[0].path == "<environment>"


def test_missing_credentials_for_configured_platforms(tmp_path: Path) -> None:
    path = _write(tmp_path, "github:\n  applications: [svc-a]\nazure_devops:\n  applications: [svc-b, proj/svc-c]\n")

    errors = validate_config(path, env={})

    assert _codes(errors) == ["CFG006"] * 5
    assert sorted(error.field for error in errors) == [
        "azure_devops.org",
        "azure_devops.project",
        "azure_devops.token",
        "github.org",
        "github.token",
    ]


def test_project_not_required_when_every_application_names_one(tmp_path: Path) -> None:
    path = _write(tmp_path, "azure_devops:\n  org: acme\n  applications: [proj/svc-c]\n")

    assert validate_config(path, env={"AZURE_DEVOPS_TOKEN": "pat"}) == []
