"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["critical", "high", "medium", "low", "warning", "note"]
FindingState: TypeAlias = Literal["open", "fixed", "dismissed"]
Category: TypeAlias = Literal["code-scanning", "dependency-scanning"]
SourcePlatform: TypeAlias = Literal["github", "azure-devops"]
ConnectorErrorKind: TypeAlias = Literal["http", "network", "timeout", "malformed"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
