"""Preflight config validation for Scanroll runs."""

from __future__ import annotations

import difflib
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from scanroll.config.loader import load_config
from scanroll.constants.config import (
    CONFIG_FILENAME,
    ENV_AZURE_DEVOPS_ORG_NAME,
    ENV_AZURE_DEVOPS_PROJECT_NAME,
    ENV_AZURE_DEVOPS_TOKEN,
    ENV_GITHUB_ORG_NAME,
    ENV_GITHUB_TOKEN,
)
from scanroll.constants.validation import (
    ALLOWED_AZURE_DEVOPS_KEYS,
    ALLOWED_CONFIG_KEYS,
    ALLOWED_GITHUB_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    POSITIVE_INT_KEYS,
    STRING_KEYS,
)
from scanroll.exceptions import ConfigurationError
from scanroll.exceptions.validation import ValidationError, sort_errors

_ENVIRONMENT = "<environment>"


def validate_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> list[ValidationError]:
    """Validate the config file and the resolved run settings.

    Collects every problem instead of stopping at the first one and never
    raises. The returned list is sorted by code, path and field.
    """
    env = os.environ if env is None else env
    errors: list[ValidationError] = []
    if config_path is not None:
        path: Path | None = config_path
    else:
        candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
        path = candidate if candidate.is_file() else None

    if path is not None:
        _validate_file(path, explicit=config_path is not None, errors=errors)
    if errors:
        return sort_errors(errors)

    try:
        config = load_config(config_path, env=env, cwd=cwd)
    except ConfigurationError as exc:
        errors.append(ValidationError(code=CFG005, path=str(path or _ENVIRONMENT), field="", message=str(exc)))
        return sort_errors(errors)

    if not config.has_applications:
        errors.append(
            ValidationError(
                code=CFG008,
                path=str(path or _ENVIRONMENT),
                field="applications",
                message="no applications configured",
                hint="list repositories under `github.applications` or `azure_devops.applications`",
            )
        )

    if config.github.applications:
        if not config.github.org:
            errors.append(_missing("github.org", f"set `github.org` or {ENV_GITHUB_ORG_NAME}"))
        if not config.github.token:
            errors.append(_missing("github.token", f"set {ENV_GITHUB_TOKEN}"))

    if config.azure_devops.applications:
        if not config.azure_devops.org:
            errors.append(_missing("azure_devops.org", f"set `azure_devops.org` or {ENV_AZURE_DEVOPS_ORG_NAME}"))
        if not config.azure_devops.token:
            errors.append(_missing("azure_devops.token", f"set {ENV_AZURE_DEVOPS_TOKEN}"))
        needs_project = [name for name in config.azure_devops.applications if "/" not in name]
        if needs_project and not config.azure_devops.project:
            errors.append(
                _missing(
                    "azure_devops.project",
                    f"set `azure_devops.project` or {ENV_AZURE_DEVOPS_PROJECT_NAME}, "
                    "or write applications as `project/repository`",
                )
            )

    return sort_errors(errors)


def _missing(field: str, hint: str) -> ValidationError:
    return ValidationError(
        code=CFG006,
        path=_ENVIRONMENT,
        field=field,
        message=f"`{field}` is required for the configured applications",
        hint=hint,
    )


def _validate_file(path: Path, *, explicit: bool, errors: list[ValidationError]) -> None:
    path_str = str(path)
    if not path.exists():
        if explicit:
            errors.append(
                ValidationError(code=CFG001, path=path_str, field="", message=f"config file not found: {path}")
            )
        return

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(ValidationError(code=CFG002, path=path_str, field="", message=f"invalid YAML: {exc}"))
        return

    if raw is None:
        return
    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return

    _check_unknown_keys(raw, ALLOWED_CONFIG_KEYS, path_str, "", errors)

    for key in STRING_KEYS:
        if key in raw and not isinstance(raw[key], str):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=key,
                    message=f"invalid type for `{key}`",
                    hint="expected a string",
                )
            )

    for key in POSITIVE_INT_KEYS:
        if key not in raw:
            continue
        val = raw[key]
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=key,
                    message=f"invalid type for `{key}`",
                    hint="expected a positive integer",
                )
            )
        elif val <= 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field=key,
                    message=f"`{key}` must be a positive integer, got {val}",
                )
            )

    _validate_platform_block(raw, "github", ALLOWED_GITHUB_KEYS, path_str, errors)
    _validate_platform_block(raw, "azure_devops", ALLOWED_AZURE_DEVOPS_KEYS, path_str, errors)


def _validate_platform_block(
    raw: dict[str, Any],
    block: str,
    allowed: frozenset[str],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``github`` or ``azure_devops`` nested mapping."""
    if raw.get(block) is None:
        return
    section = raw[block]
    if not isinstance(section, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field=block,
                message=f"`{block}` must be a mapping",
            )
        )
        return

    _check_unknown_keys(section, allowed, path_str, f"{block}.", errors)

    for key in sorted(allowed - {"applications"}):
        if key in section and section[key] is not None and not isinstance(section[key], str):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=f"{block}.{key}",
                    message=f"invalid type for `{block}.{key}`",
                    hint="expected a string",
                )
            )

    apps = section.get("applications")
    if apps is not None and (not isinstance(apps, list) or not all(isinstance(item, str) for item in apps)):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field=f"{block}.applications",
                message=f"invalid type for `{block}.applications`",
                hint="expected a list of strings",
            )
        )


def _check_unknown_keys(
    raw: dict[str, Any],
    allowed: frozenset[str],
    path_str: str,
    prefix: str,
    errors: list[ValidationError],
) -> None:
    for key in sorted(raw.keys(), key=str):
        if key not in allowed:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"{prefix}{key}",
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(str(key), allowed),
                )
            )


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
