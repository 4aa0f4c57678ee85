"""Service layer for the WGE application package."""

from wge_app.services.automation_client import AutomationClient, build_backend_arguments
from wge_app.services.manifest_store import ManifestLoadReport, ManifestStore
from wge_app.services.orchestrator import PresetOrchestrator, PresetSession, RunReport
from wge_app.services.run_types import (
    FallbackResult,
    LaunchFailureResult,
    RunMode,
    RunResult,
    StructuredResult,
)
from wge_app.services.settings import SettingsRepository, WGESettings

__all__ = [
    "AutomationClient",
    "FallbackResult",
    "LaunchFailureResult",
    "ManifestLoadReport",
    "ManifestStore",
    "PresetOrchestrator",
    "PresetSession",
    "RunMode",
    "RunReport",
    "RunResult",
    "SettingsRepository",
    "StructuredResult",
    "WGESettings",
    "build_backend_arguments",
]
