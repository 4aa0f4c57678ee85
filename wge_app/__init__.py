"""Application layer: manifests, automation backend runs and row reconciliation."""

from .interfaces import NoOpHooks, OrchestratorHooks
from .services.orchestrator import PresetOrchestrator, PresetSession, RunReport
from .services.run_types import RunMode

__all__ = ["NoOpHooks", "OrchestratorHooks", "PresetOrchestrator", "PresetSession", "RunMode", "RunReport"]
