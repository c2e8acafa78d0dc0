"""Raw record decoding and normalization into the unified finding model."""

from .normalize import NormalizationContext, normalize, normalize_many
from .records import (
    AzureDevOpsCodeAlert,
    AzureDevOpsDependencyAlert,
    GitHubCodeAlert,
    GitHubDependencyAlert,
    RawRecord,
    decode_record,
)
from .severity import map_severity, map_state, parse_timestamp

__all__ = [
    "AzureDevOpsCodeAlert",
    "AzureDevOpsDependencyAlert",
    "GitHubCodeAlert",
    "GitHubDependencyAlert",
    "NormalizationContext",
    "RawRecord",
    "decode_record",
    "map_severity",
    "map_state",
    "normalize",
    "normalize_many",
    "parse_timestamp",
]
