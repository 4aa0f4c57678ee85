"""Shared error taxonomy for the WGE preset tools."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class WGEError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__


class ManifestParseError(WGEError):
    """A single manifest file could not be read or validated."""


class BackendUnavailable(WGEError):
    """PowerShell or the automation entry-point script is missing."""


class BackendLaunchError(WGEError):
    """The automation backend process could not be started."""


class OutputParseError(WGEError):
    """Backend stdout did not match the expected document schema."""


class ConfigurationError(WGEError):
    """Failure due to invalid configuration."""


class PresetNotFoundError(WGEError):
    """No loaded preset matches the requested id."""


class OrchestratorBusyError(WGEError):
    """An automation invocation is already in flight."""


def error_to_payload(error: WGEError) -> dict[str, Any]:
    """Convert a WGEError to a log/report payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
