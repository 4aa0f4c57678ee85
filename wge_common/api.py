"""Public API surface for wge_common."""

from wge_common.errors import (
    BackendLaunchError,
    BackendUnavailable,
    ConfigurationError,
    ManifestParseError,
    OrchestratorBusyError,
    OutputParseError,
    PresetNotFoundError,
    WGEError,
    error_to_payload,
)
from wge_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "WGEError",
    "ManifestParseError",
    "BackendUnavailable",
    "BackendLaunchError",
    "OutputParseError",
    "ConfigurationError",
    "PresetNotFoundError",
    "OrchestratorBusyError",
    "error_to_payload",
]
