"""Notification interfaces exposed to presentation layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from wge_app.services.run_state import OrchestratorState
    from wge_app.viewmodels.rows import DisplayTweakRow, ResultRow


class OrchestratorHooks(Protocol):
    """Callbacks invoked by the orchestrator to update a presentation layer."""

    def on_log(self, message: str) -> None: ...
    def on_busy(self, busy: bool) -> None: ...
    def on_progress(self, message: str | None) -> None: ...
    def on_state(self, state: "OrchestratorState", reason: str | None) -> None: ...
    def on_rows(self, rows: Sequence["DisplayTweakRow"]) -> None: ...
    def on_results(self, rows: Sequence["ResultRow"]) -> None: ...


class NoOpHooks:
    """Hooks implementation that ignores every notification."""

    def on_log(self, message: str) -> None:
        return None

    def on_busy(self, busy: bool) -> None:
        return None

    def on_progress(self, message: str | None) -> None:
        return None

    def on_state(self, state: "OrchestratorState", reason: str | None) -> None:
        return None

    def on_rows(self, rows: Sequence["DisplayTweakRow"]) -> None:
        return None

    def on_results(self, rows: Sequence["ResultRow"]) -> None:
        return None
