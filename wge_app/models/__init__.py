"""Manifest and backend document models."""

from wge_app.models.automation import (
    AutomationCounts,
    AutomationEntry,
    AutomationSummary,
    BackendState,
    PresetStatusSummary,
    StatusCheck,
    StatusEntry,
)
from wge_app.models.manifest import (
    ManifestDocument,
    ManifestMetadata,
    Preset,
    TweakDefinition,
)

__all__ = [
    "AutomationCounts",
    "AutomationEntry",
    "AutomationSummary",
    "BackendState",
    "ManifestDocument",
    "ManifestMetadata",
    "Preset",
    "PresetStatusSummary",
    "StatusCheck",
    "StatusEntry",
    "TweakDefinition",
]
