"""Narrow raw-record variants for each (platform, category) pair.

Connector payloads are loosely typed JSON. ``decode_record`` checks the
container structure against a JSON Schema and then copies the fields the
normalizer needs into a frozen dataclass, so the rest of the pipeline
never touches raw dictionaries.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cache
from typing import Any, TypeAlias
from urllib.parse import unquote

from jsonschema import Draft7Validator

from scanroll.constants.platforms import CATEGORY_CODE, CATEGORY_DEPENDENCY, PLATFORM_AZURE_DEVOPS, PLATFORM_GITHUB
from scanroll.constants.schemas import (
    AZURE_DEVOPS_CODE_ALERT_SCHEMA,
    AZURE_DEVOPS_DEPENDENCY_ALERT_SCHEMA,
    GITHUB_CODE_ALERT_SCHEMA,
    GITHUB_DEPENDENCY_ALERT_SCHEMA,
)
from scanroll.exceptions import NormalizationError
from scanroll.types import Category, SourcePlatform

_CWE_TAG_PREFIX = "external/cwe/"
_PURL_PREFIX = "pkg:"
_AZURE_PACKAGE_KINDS = frozenset({"package", "rootdependency"})


def _text(value: object) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _int(value: object) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _float(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        parsed = float(value)
    except (ValueError, OverflowError):
        return None
    return parsed if math.isfinite(parsed) else None


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: object) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _first_text(*values: object) -> str:
    """Return the first non-blank value rendered as text."""
    for value in values:
        text = _text(value).strip()
        if text:
            return text
    return ""


def _cwes_from_tags(tags: tuple[str, ...]) -> tuple[str, ...]:
    cwes = []
    for tag in tags:
        if tag.lower().startswith(_CWE_TAG_PREFIX):
            cwes.append(tag[len(_CWE_TAG_PREFIX) :].upper())
    return tuple(cwes)


def _parse_purl(value: str) -> tuple[str, str, str]:
    """Split a package URL like ``pkg:npm/lodash@4.17.10`` into (ecosystem, name, version)."""
    if not value.startswith(_PURL_PREFIX):
        return "", value, ""
    body = value[len(_PURL_PREFIX) :].split("?", 1)[0].split("#", 1)[0]
    ecosystem, _, coordinates = body.partition("/")
    name, separator, version = coordinates.rpartition("@")
    if not separator:
        name, version = coordinates, ""
    return ecosystem, unquote(name), unquote(version)


@dataclass(frozen=True)
class GitHubCodeAlert:
    """GitHub code scanning alert fields used for normalization."""

    identifier: str
    state: str
    severity: str
    rule_id: str
    rule_name: str
    rule_description: str
    message: str
    created_at: str
    updated_at: str
    url: str
    tool_name: str
    tool_version: str
    ref: str
    commit_sha: str
    file_path: str
    start_line: int | None
    end_line: int | None
    start_column: int | None
    end_column: int | None
    snippet: str
    tags: tuple[str, ...]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> GitHubCodeAlert:
        rule = _mapping(payload.get("rule"))
        tool = _mapping(payload.get("tool"))
        instance = _mapping(payload.get("most_recent_instance"))
        if not instance:
            instances = _sequence(payload.get("instances"))
            instance = _mapping(instances[0]) if instances else {}
        location = _mapping(instance.get("location"))
        return cls(
            identifier=_first_text(payload.get("number"), payload.get("id")),
            state=_text(payload.get("state")),
            severity=_first_text(
                rule.get("severity"),
                payload.get("severity"),
                rule.get("security_severity_level"),
            ),
            rule_id=_first_text(rule.get("id"), payload.get("rule_id")),
            rule_name=_first_text(rule.get("name"), rule.get("id"), payload.get("rule_id")),
            rule_description=_text(rule.get("description")),
            message=_text(_mapping(instance.get("message")).get("text")),
            created_at=_text(payload.get("created_at")),
            updated_at=_first_text(payload.get("updated_at"), payload.get("created_at")),
            url=_first_text(payload.get("html_url"), payload.get("url")),
            tool_name=_text(tool.get("name")),
            tool_version=_text(tool.get("version")),
            ref=_text(instance.get("ref")),
            commit_sha=_text(instance.get("commit_sha")),
            file_path=_text(location.get("path")),
            start_line=_int(location.get("start_line")),
            end_line=_int(location.get("end_line")),
            start_column=_int(location.get("start_column")),
            end_column=_int(location.get("end_column")),
            snippet=_text(_mapping(location.get("snippet")).get("code")),
            tags=tuple(_text(tag) for tag in _sequence(rule.get("tags")) if _text(tag)),
        )

    @property
    def cwes(self) -> tuple[str, ...]:
        return _cwes_from_tags(self.tags)


@dataclass(frozen=True)
class GitHubDependencyAlert:
    """GitHub Dependabot alert fields used for normalization."""

    identifier: str
    state: str
    severity: str
    summary: str
    description: str
    created_at: str
    updated_at: str
    url: str
    ecosystem: str
    package_name: str
    manifest_path: str
    vulnerable_version_range: str
    fixed_version: str
    ghsa_id: str
    cve_id: str
    cvss: float | None
    cwes: tuple[str, ...]
    identifiers: tuple[str, ...]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> GitHubDependencyAlert:
        dependency = _mapping(payload.get("dependency"))
        package = _mapping(dependency.get("package"))
        advisory = _mapping(payload.get("security_advisory"))
        vulnerability = _mapping(payload.get("security_vulnerability"))
        return cls(
            identifier=_first_text(payload.get("number"), payload.get("id")),
            state=_text(payload.get("state")),
            severity=_first_text(vulnerability.get("severity"), advisory.get("severity")),
            summary=_text(advisory.get("summary")),
            description=_text(advisory.get("description")),
            created_at=_text(payload.get("created_at")),
            updated_at=_first_text(payload.get("updated_at"), payload.get("created_at")),
            url=_first_text(payload.get("html_url"), payload.get("url")),
            ecosystem=_text(package.get("ecosystem")),
            package_name=_text(package.get("name")),
            manifest_path=_text(dependency.get("manifest_path")),
            vulnerable_version_range=_text(vulnerability.get("vulnerable_version_range")),
            fixed_version=_text(_mapping(vulnerability.get("first_patched_version")).get("identifier")),
            ghsa_id=_text(advisory.get("ghsa_id")),
            cve_id=_text(advisory.get("cve_id")),
            cvss=_float(_mapping(advisory.get("cvss")).get("score")),
            cwes=tuple(
                cwe_id
                for cwe_id in (_text(_mapping(item).get("cwe_id")) for item in _sequence(advisory.get("cwes")))
                if cwe_id
            ),
            identifiers=tuple(
                value
                for value in (_text(_mapping(item).get("value")) for item in _sequence(advisory.get("identifiers")))
                if value
            ),
        )


@dataclass(frozen=True)
class _AzureDevOpsAlert:
    identifier: str
    state: str
    severity: str
    title: str
    rule_id: str
    rule_name: str
    rule_description: str
    git_ref: str
    created_at: str
    updated_at: str
    url: str
    tool_name: str
    tool_version: str
    commit_sha: str
    file_path: str
    start_line: int | None
    end_line: int | None
    start_column: int | None
    end_column: int | None
    tags: tuple[str, ...]

    @staticmethod
    def _common_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
        rule = _mapping(payload.get("rule"))
        tools = _sequence(payload.get("tools"))
        tool = _mapping(tools[0]) if tools else {}
        locations = _sequence(payload.get("physicalLocations"))
        location = _mapping(locations[0]) if locations else {}
        region = _mapping(location.get("region"))
        version_control = _mapping(location.get("versionControl"))
        return {
            "identifier": _text(payload.get("alertId")),
            "state": _text(payload.get("state")),
            "severity": _text(payload.get("severity")),
            "title": _text(payload.get("title")),
            "rule_id": _first_text(rule.get("opaqueId"), rule.get("id")),
            "rule_name": _text(rule.get("friendlyName")),
            "rule_description": _text(rule.get("description")),
            "git_ref": _text(payload.get("gitRef")),
            "created_at": _text(payload.get("firstSeenDate")),
            "updated_at": _first_text(
                payload.get("fixedDate"),
                payload.get("lastSeenDate"),
                payload.get("firstSeenDate"),
            ),
            "url": _first_text(version_control.get("itemUrl"), payload.get("repositoryUrl")),
            "tool_name": _text(tool.get("name")),
            "tool_version": _text(tool.get("version")),
            "commit_sha": _text(version_control.get("commitHash")),
            "file_path": _text(location.get("filePath")),
            "start_line": _int(region.get("lineStart")),
            "end_line": _int(region.get("lineEnd")),
            "start_column": _int(region.get("columnStart")),
            "end_column": _int(region.get("columnEnd")),
            "tags": tuple(_text(tag) for tag in _sequence(rule.get("tags")) if _text(tag)),
        }

    @property
    def cwes(self) -> tuple[str, ...]:
        return _cwes_from_tags(self.tags)


@dataclass(frozen=True)
class AzureDevOpsCodeAlert(_AzureDevOpsAlert):
    """Azure DevOps Advanced Security code alert fields used for normalization."""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> AzureDevOpsCodeAlert:
        return cls(**cls._common_fields(payload))


@dataclass(frozen=True)
class AzureDevOpsDependencyAlert(_AzureDevOpsAlert):
    """Azure DevOps Advanced Security dependency alert fields used for normalization."""

    ecosystem: str = ""
    package_name: str = ""
    package_version: str = ""
    fixed_version: str = ""
    cve_id: str = ""
    cvss: float | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> AzureDevOpsDependencyAlert:
        fields = cls._common_fields(payload)
        logical = [_mapping(item) for item in _sequence(payload.get("logicalLocations"))]
        packages = [item for item in logical if _text(item.get("kind")).lower() in _AZURE_PACKAGE_KINDS]
        chosen = packages[0] if packages else (logical[0] if logical else {})
        ecosystem, name, version = _parse_purl(_text(chosen.get("fullyQualifiedName")))
        extra = _mapping(_mapping(payload.get("rule")).get("additionalProperties"))
        return cls(
            **fields,
            ecosystem=ecosystem,
            package_name=name,
            package_version=version,
            fixed_version=_first_text(extra.get("fixedVersion"), extra.get("patchedVersion")),
            cve_id=_first_text(extra.get("cveId"), extra.get("cve")),
            cvss=_float(extra.get("cvssScore")),
        )


RawRecord: TypeAlias = GitHubCodeAlert | GitHubDependencyAlert | AzureDevOpsCodeAlert | AzureDevOpsDependencyAlert

_VARIANTS: dict[tuple[SourcePlatform, Category], tuple[dict[str, Any], type[Any]]] = {
    (PLATFORM_GITHUB, CATEGORY_CODE): (GITHUB_CODE_ALERT_SCHEMA, GitHubCodeAlert),
    (PLATFORM_GITHUB, CATEGORY_DEPENDENCY): (GITHUB_DEPENDENCY_ALERT_SCHEMA, GitHubDependencyAlert),
    (PLATFORM_AZURE_DEVOPS, CATEGORY_CODE): (AZURE_DEVOPS_CODE_ALERT_SCHEMA, AzureDevOpsCodeAlert),
    (PLATFORM_AZURE_DEVOPS, CATEGORY_DEPENDENCY): (AZURE_DEVOPS_DEPENDENCY_ALERT_SCHEMA, AzureDevOpsDependencyAlert),
}


@cache
def _validator(platform: SourcePlatform, category: Category) -> Draft7Validator:
    schema, _ = _VARIANTS[(platform, category)]
    return Draft7Validator(schema)


def _json_path(path: Any) -> str:
    rendered = "$"
    for part in path:
        rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
    return rendered


def decode_record(payload: object, platform: SourcePlatform, category: Category) -> RawRecord:
    """Validate a raw connector record and decode it into its narrow variant.

    Raises ``NormalizationError`` when the payload is not a JSON object or
    its structure does not match the platform schema.
    """
    if (platform, category) not in _VARIANTS:
        raise NormalizationError(f"Unsupported record kind {platform}/{category}")
    if not isinstance(payload, Mapping):
        raise NormalizationError(
            f"{platform}/{category} record must be a JSON object, got {type(payload).__name__}"
        )

    payload = dict(payload)
    errors = sorted(_validator(platform, category).iter_errors(payload), key=lambda e: _json_path(e.absolute_path))
    if errors:
        first = errors[0]
        raise NormalizationError(
            f"Invalid {platform}/{category} record at {_json_path(first.absolute_path)}: {first.message}"
        )

    _, variant = _VARIANTS[(platform, category)]
    return variant.from_payload(payload)
