"""Stable application-layer API surface."""

from wge_app.interfaces import NoOpHooks, OrchestratorHooks
from wge_app.models import (
    AutomationCounts,
    AutomationEntry,
    AutomationSummary,
    BackendState,
    ManifestMetadata,
    Preset,
    PresetStatusSummary,
    StatusCheck,
    StatusEntry,
    TweakDefinition,
)
from wge_app.services.automation_client import AutomationClient, build_backend_arguments
from wge_app.services.doctor_service import DoctorService
from wge_app.services.doctor_types import DoctorCheckGroup, DoctorCheckItem, DoctorReport
from wge_app.services.manifest_store import ManifestStore
from wge_app.services.orchestrator import PresetOrchestrator, PresetSession, RunReport
from wge_app.services.result_classifier import classify
from wge_app.services.run_state import OrchestratorState
from wge_app.services.run_types import (
    FallbackResult,
    LaunchFailureResult,
    RunMode,
    RunResult,
    StructuredResult,
)
from wge_app.services.settings import SettingsRepository, WGESettings
from wge_app.services.status_reconciler import reconcile
from wge_app.viewmodels import ActivityLog, DisplayTweakRow, ResultRow, TweakStatus

__all__ = [
    "ActivityLog",
    "AutomationClient",
    "AutomationCounts",
    "AutomationEntry",
    "AutomationSummary",
    "BackendState",
    "DisplayTweakRow",
    "DoctorCheckGroup",
    "DoctorCheckItem",
    "DoctorReport",
    "DoctorService",
    "FallbackResult",
    "LaunchFailureResult",
    "ManifestMetadata",
    "ManifestStore",
    "NoOpHooks",
    "OrchestratorHooks",
    "OrchestratorState",
    "Preset",
    "PresetOrchestrator",
    "PresetSession",
    "PresetStatusSummary",
    "ResultRow",
    "RunMode",
    "RunReport",
    "RunResult",
    "SettingsRepository",
    "StatusCheck",
    "StatusEntry",
    "StructuredResult",
    "TweakDefinition",
    "TweakStatus",
    "WGESettings",
    "build_backend_arguments",
    "classify",
    "reconcile",
]
