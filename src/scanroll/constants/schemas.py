"""Structural JSON Schemas (Draft 7) for raw connector records.

The schemas only pin container shapes and scalar types. Every field is
optional; absent data is filled in by the normalizer. Severity and state
fields accept any value.
"""

from __future__ import annotations

from typing import Any

_SCALAR: dict[str, Any] = {"type": ["string", "number", "boolean", "null"]}
_TEXT: dict[str, Any] = {"type": ["string", "null"]}
_IDENT: dict[str, Any] = {"type": ["string", "integer", "null"]}
_NUMBER: dict[str, Any] = {"type": ["number", "string", "null"]}
_TEXT_LIST: dict[str, Any] = {"type": ["array", "null"], "items": _SCALAR}
# Severity and state values of any type are left to the lookup tables.
_LEVEL: dict[str, Any] = {}

_GITHUB_LOCATION: dict[str, Any] = {
    "type": ["object", "null"],
    "properties": {
        "path": _TEXT,
        "start_line": _NUMBER,
        "end_line": _NUMBER,
        "start_column": _NUMBER,
        "end_column": _NUMBER,
        "snippet": {"type": ["object", "null"], "properties": {"code": _TEXT}},
    },
}

_GITHUB_INSTANCE: dict[str, Any] = {
    "type": ["object", "null"],
    "properties": {
        "ref": _TEXT,
        "commit_sha": _TEXT,
        "state": _LEVEL,
        "location": _GITHUB_LOCATION,
        "message": {"type": ["object", "null"], "properties": {"text": _TEXT}},
    },
}

GITHUB_CODE_ALERT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "GitHub code scanning alert",
    "type": "object",
    "properties": {
        "number": _IDENT,
        "id": _IDENT,
        "state": _LEVEL,
        "severity": _LEVEL,
        "created_at": _TEXT,
        "updated_at": _TEXT,
        "fixed_at": _TEXT,
        "dismissed_at": _TEXT,
        "html_url": _TEXT,
        "url": _TEXT,
        "rule_id": _TEXT,
        "rule": {
            "type": ["object", "null"],
            "properties": {
                "id": _TEXT,
                "name": _TEXT,
                "severity": _LEVEL,
                "security_severity_level": _LEVEL,
                "description": _TEXT,
                "tags": _TEXT_LIST,
            },
        },
        "tool": {
            "type": ["object", "null"],
            "properties": {"name": _TEXT, "version": _TEXT},
        },
        "most_recent_instance": _GITHUB_INSTANCE,
        "instances": {"type": ["array", "null"], "items": _GITHUB_INSTANCE},
    },
}

GITHUB_DEPENDENCY_ALERT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "GitHub Dependabot alert",
    "type": "object",
    "properties": {
        "number": _IDENT,
        "id": _IDENT,
        "state": _LEVEL,
        "created_at": _TEXT,
        "updated_at": _TEXT,
        "html_url": _TEXT,
        "url": _TEXT,
        "dependency": {
            "type": ["object", "null"],
            "properties": {
                "manifest_path": _TEXT,
                "scope": _TEXT,
                "package": {
                    "type": ["object", "null"],
                    "properties": {"ecosystem": _TEXT, "name": _TEXT},
                },
            },
        },
        "security_advisory": {
            "type": ["object", "null"],
            "properties": {
                "ghsa_id": _TEXT,
                "cve_id": _TEXT,
                "summary": _TEXT,
                "description": _TEXT,
                "severity": _LEVEL,
                "cvss": {
                    "type": ["object", "null"],
                    "properties": {"score": _NUMBER, "vector_string": _TEXT},
                },
                "cwes": {
                    "type": ["array", "null"],
                    "items": {"type": "object", "properties": {"cwe_id": _TEXT, "name": _TEXT}},
                },
                "identifiers": {
                    "type": ["array", "null"],
                    "items": {"type": "object", "properties": {"type": _TEXT, "value": _TEXT}},
                },
            },
        },
        "security_vulnerability": {
            "type": ["object", "null"],
            "properties": {
                "severity": _LEVEL,
                "vulnerable_version_range": _TEXT,
                "first_patched_version": {
                    "type": ["object", "null"],
                    "properties": {"identifier": _TEXT},
                },
            },
        },
    },
}

_AZURE_PHYSICAL_LOCATION: dict[str, Any] = {
    "type": "object",
    "properties": {
        "filePath": _TEXT,
        "region": {
            "type": ["object", "null"],
            "properties": {
                "lineStart": _NUMBER,
                "lineEnd": _NUMBER,
                "columnStart": _NUMBER,
                "columnEnd": _NUMBER,
            },
        },
        "versionControl": {
            "type": ["object", "null"],
            "properties": {"commitHash": _TEXT, "itemUrl": _TEXT},
        },
    },
}

_AZURE_ALERT_PROPERTIES: dict[str, Any] = {
    "alertId": _IDENT,
    "title": _TEXT,
    "severity": _LEVEL,
    "state": _LEVEL,
    "alertType": _TEXT,
    "gitRef": _TEXT,
    "firstSeenDate": _TEXT,
    "lastSeenDate": _TEXT,
    "fixedDate": _TEXT,
    "repositoryUrl": _TEXT,
    "rule": {
        "type": ["object", "null"],
        "properties": {
            "id": _IDENT,
            "opaqueId": _TEXT,
            "friendlyName": _TEXT,
            "description": _TEXT,
            "tags": _TEXT_LIST,
            "additionalProperties": {"type": ["object", "null"]},
        },
    },
    "tools": {
        "type": ["array", "null"],
        "items": {
            "type": "object",
            "properties": {"name": _TEXT, "version": _TEXT},
        },
    },
    "physicalLocations": {"type": ["array", "null"], "items": _AZURE_PHYSICAL_LOCATION},
    "logicalLocations": {
        "type": ["array", "null"],
        "items": {
            "type": "object",
            "properties": {"fullyQualifiedName": _TEXT, "kind": _TEXT},
        },
    },
}

AZURE_DEVOPS_CODE_ALERT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Azure DevOps Advanced Security code alert",
    "type": "object",
    "properties": _AZURE_ALERT_PROPERTIES,
}

AZURE_DEVOPS_DEPENDENCY_ALERT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Azure DevOps Advanced Security dependency alert",
    "type": "object",
    "properties": _AZURE_ALERT_PROPERTIES,
}
