"""Config loading: ``scanroll.yaml`` merged with environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from scanroll.config.model import AzureDevOpsSettings, GitHubSettings, ScanrollConfig
from scanroll.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_AZURE_DEVOPS_BASE_URL,
    DEFAULT_BRANCH,
    DEFAULT_GITHUB_BASE_URL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ENV_AZURE_DEVOPS_APP_NAMES,
    ENV_AZURE_DEVOPS_BASE_URL,
    ENV_AZURE_DEVOPS_ORG_NAME,
    ENV_AZURE_DEVOPS_PROJECT_NAME,
    ENV_AZURE_DEVOPS_TOKEN,
    ENV_BRANCH_NAME,
    ENV_GITHUB_APP_NAMES,
    ENV_GITHUB_BASE_URL,
    ENV_GITHUB_ORG_NAME,
    ENV_GITHUB_TOKEN,
    ENV_OUTPUT_DIR,
)
from scanroll.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def read_config_file(path: Path | None, *, cwd: Path | None = None) -> tuple[Path | None, dict[str, Any]]:
    """Read the raw YAML mapping, or an empty mapping when no file is present.

    An explicit ``path`` must exist; without one, ``scanroll.yaml`` in
    ``cwd`` is used when it exists.
    """
    if path is None:
        candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
        if not candidate.is_file():
            return None, {}
        path = candidate
    elif not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file at {path} must be a YAML mapping")
    return path, raw


def load_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> ScanrollConfig:
    """Load run config from YAML and apply environment variable overrides.

    Tokens are read from the environment only.
    """
    env = os.environ if env is None else env
    path, raw = read_config_file(config_path, cwd=cwd)
    if path is not None:
        logger.debug("Loaded config from %s", path)

    github_raw = _ensure_mapping(raw.get("github"), "github")
    azure_raw = _ensure_mapping(raw.get("azure_devops"), "azure_devops")

    github = GitHubSettings(
        org=_env_or(env, ENV_GITHUB_ORG_NAME, _ensure_string(github_raw.get("org", ""), "github.org")),
        token=env.get(ENV_GITHUB_TOKEN, "").strip(),
        base_url=_env_or(
            env,
            ENV_GITHUB_BASE_URL,
            _ensure_string(github_raw.get("base_url", DEFAULT_GITHUB_BASE_URL), "github.base_url"),
        ),
        applications=_applications(env, ENV_GITHUB_APP_NAMES, github_raw.get("applications"), "github.applications"),
    )
    azure_devops = AzureDevOpsSettings(
        org=_env_or(env, ENV_AZURE_DEVOPS_ORG_NAME, _ensure_string(azure_raw.get("org", ""), "azure_devops.org")),
        project=_env_or(
            env,
            ENV_AZURE_DEVOPS_PROJECT_NAME,
            _ensure_string(azure_raw.get("project", ""), "azure_devops.project"),
        ),
        token=env.get(ENV_AZURE_DEVOPS_TOKEN, "").strip(),
        base_url=_env_or(
            env,
            ENV_AZURE_DEVOPS_BASE_URL,
            _ensure_string(azure_raw.get("base_url", DEFAULT_AZURE_DEVOPS_BASE_URL), "azure_devops.base_url"),
        ),
        applications=_applications(
            env,
            ENV_AZURE_DEVOPS_APP_NAMES,
            azure_raw.get("applications"),
            "azure_devops.applications",
        ),
    )

    return ScanrollConfig(
        branch=_env_or(env, ENV_BRANCH_NAME, _ensure_string(raw.get("branch", DEFAULT_BRANCH), "branch")),
        output_dir=Path(
            _env_or(env, ENV_OUTPUT_DIR, _ensure_string(raw.get("output_dir", DEFAULT_OUTPUT_DIR), "output_dir"))
        ),
        github=github,
        azure_devops=azure_devops,
        request_timeout_seconds=_ensure_positive_int(
            raw.get("request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT_SECONDS),
            "request_timeout_seconds",
        ),
        max_workers=_ensure_positive_int(raw.get("max_workers", DEFAULT_MAX_WORKERS), "max_workers"),
    )


def split_names(value: str) -> tuple[str, ...]:
    """Split a comma-separated application list, dropping blanks."""
    return tuple(name.strip() for name in value.split(",") if name.strip())


def _env_or(env: Mapping[str, str], name: str, fallback: str) -> str:
    value = env.get(name, "").strip()
    return value or fallback


def _applications(env: Mapping[str, str], env_name: str, value: Any, key_name: str) -> tuple[str, ...]:
    env_value = env.get(env_name, "")
    if env_value.strip():
        return split_names(env_value)
    return tuple(name.strip() for name in _ensure_string_list(value, key_name) if name.strip())


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{key_name} must be a mapping")
    return value


def _ensure_string(value: Any, key_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(f"{key_name} must be a string")
    return value.strip()


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigurationError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_positive_int(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{key_name} must be a positive integer")
    return value
