"""Tests for config loading and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from scanroll.config import ScanrollConfig, load_config, split_names
from scanroll.exceptions import ConfigurationError

FULL_CONFIG = """\
branch: develop
output_dir: reports
github:
  org: acme
  applications: [svc-a, svc-b]
azure_devops:
  org: acme-ado
  project: platform
  applications: [svc-c, other/svc-d, svc-a]
request_timeout_seconds: 15
max_workers: 4
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "scanroll.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, FULL_CONFIG), env={"GITHUB_TOKEN": "gh", "AZURE_DEVOPS_TOKEN": "ado"})

    assert config.branch == "develop"
    assert config.output_dir == Path("reports")
    assert config.github.org == "acme"
    assert config.github.token == "gh"
    assert config.github.applications == ("svc-a", "svc-b")
    assert config.azure_devops.project == "platform"
    assert config.azure_devops.token == "ado"
    assert config.request_timeout_seconds == 15
    assert config.max_workers == 4


def test_tokens_are_hidden_from_repr(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, FULL_CONFIG), env={"GITHUB_TOKEN": "super-secret"})

    assert "super-secret" not in repr(config)


def test_environment_overrides_file(tmp_path: Path) -> None:
    env = {
        "BRANCH_NAME": "release",
        "OUTPUT_DIR": "/tmp/out",
        "GITHUB_ORG_NAME": "other-org",
        "GITHUB_APP_NAMES": "x, y ,,z",
        "AZURE_DEVOPS_PROJECT_NAME": "core",
    }

    config = load_config(_write(tmp_path, FULL_CONFIG), env=env)

    assert config.branch == "release"
    assert config.output_dir == Path("/tmp/out")
    assert config.github.org == "other-org"
    assert config.github.applications == ("x", "y", "z")
    assert config.azure_devops.project == "core"


def test_environment_only_config(tmp_path: Path) -> None:
    env = {"AZURE_DEVOPS_ORG_NAME": "acme", "AZURE_DEVOPS_APP_NAMES": "svc"}

    config = load_config(env=env, cwd=tmp_path)

    assert config.branch == "main"
    assert config.output_dir == Path("./output")
    assert config.azure_devops.applications == ("svc",)
    assert config.github.applications == ()


def test_default_file_is_picked_up_from_cwd(tmp_path: Path) -> None:
    _write(tmp_path, "branch: trunk\n")

    assert load_config(env={}, cwd=tmp_path).branch == "trunk"


def test_application_specs_github_first_and_merged(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, FULL_CONFIG), env={})

    specs = config.application_specs()

    assert [spec.name for spec in specs] == ["svc-a", "svc-b", "svc-c", "other/svc-d"]
    assert specs[0].platforms == ("github", "azure-devops")
    assert specs[1].platforms == ("github",)
    assert specs[2].platforms == ("azure-devops",)
    assert {spec.branch for spec in specs} == {"develop"}


def test_empty_config_has_no_applications() -> None:
    assert not ScanrollConfig().has_applications
    assert ScanrollConfig().application_specs() == ()


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("- a\n- b\n", "must be a YAML mapping"),
        ("github: [a]\n", "github must be a mapping"),
        ("github:\n  applications: svc-a\n", "github.applications must be a list of strings"),
        ("max_workers: 0\n", "max_workers must be a positive integer"),
        ("request_timeout_seconds: true\n", "request_timeout_seconds must be a positive integer"),
        ("branch: [main]\n", "branch must be a string"),
        ("github: {org: [\n", "Invalid YAML"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str, match: str) -> None:
    with pytest.raises(ConfigurationError, match=match):
        load_config(_write(tmp_path, content), env={})


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_config(tmp_path / "missing.yaml", env={})


def test_split_names() -> None:
    assert split_names(" a,b , ,c ") == ("a", "b", "c")
    assert split_names("") == ()
