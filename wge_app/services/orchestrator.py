"""Composition root sequencing manifests, backend runs and row updates.

The orchestrator is the only component that talks to the manifest store
and the automation client. Presentation layers pass an explicit
``PresetSession`` into each operation and receive updates through
subscribed ``OrchestratorHooks``.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from wge_app.interfaces import OrchestratorHooks
from wge_app.models.manifest import Preset
from wge_app.services.automation_client import AutomationClient
from wge_app.services.manifest_store import ManifestStore
from wge_app.services.result_classifier import classify
from wge_app.services.run_state import OrchestratorState, RunStateMachine
from wge_app.services.run_types import (
    FallbackResult,
    LaunchFailureResult,
    RunMode,
    RunResult,
    StructuredResult,
)
from wge_app.services.status_reconciler import reconcile
from wge_app.viewmodels.rows import DisplayTweakRow, ResultRow, build_tweak_rows
from wge_common.errors import OrchestratorBusyError, PresetNotFoundError

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


@dataclass
class PresetSession:
    """The currently selected preset and its display rows."""

    preset: Preset
    rows: list[DisplayTweakRow] = field(default_factory=list)
    results: list[ResultRow] = field(default_factory=list)

    @property
    def preset_id(self) -> str:
        return self.preset.preset_id


@dataclass(frozen=True)
class RunReport:
    """Outcome of an apply, dry-run or revert, plus the follow-up status probe."""

    mode: RunMode
    result: RunResult
    result_rows: list[ResultRow]
    status_result: RunResult | None = None

    @property
    def succeeded(self) -> bool:
        if not isinstance(self.result, StructuredResult):
            return False
        counts = self.result.summary.counts
        return counts is None or counts.failed == 0


def _direct_dispatch(fn: Callable[[], None]) -> None:
    fn()


class PresetOrchestrator:
    """Run presets one at a time and keep session rows in sync."""

    def __init__(
        self,
        store: ManifestStore,
        client: AutomationClient,
        *,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        """
        Args:
            store: Catalog of presets.
            client: Backend runner.
            dispatcher: Marshals hook notifications onto the caller's
                thread; defaults to calling them inline.
        """
        self.store = store
        self.client = client
        self.state = RunStateMachine()
        self._dispatch = dispatcher or _direct_dispatch
        self._hooks: list[OrchestratorHooks] = []
        self._busy = threading.Lock()
        self._executor: ThreadPoolExecutor | None = None
        self.state.register_callback(
            lambda state, reason: self._notify("on_state", state, reason)
        )

    # -- notifications -------------------------------------------------

    def subscribe(self, hooks: OrchestratorHooks) -> None:
        self._hooks.append(hooks)

    def _notify(self, name: str, *args: Any) -> None:
        for hooks in list(self._hooks):
            callback = getattr(hooks, name, None)
            if callback is None:
                continue
            self._dispatch(lambda cb=callback: self._safe_call(cb, name, args))

    @staticmethod
    def _safe_call(callback: Callable[..., None], name: str, args: tuple) -> None:
        try:
            callback(*args)
        except Exception as exc:
            logger.debug("Hook %s failed: %s", name, exc)

    def _log(self, message: str) -> None:
        if not message or not message.strip():
            return
        logger.info("%s", message)
        self._notify("on_log", message)

    # -- busy window ---------------------------------------------------

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def _acquire(self) -> None:
        if not self._busy.acquire(blocking=False):
            raise OrchestratorBusyError("An automation run is already in progress.")
        self._notify("on_busy", True)

    def _release(self) -> None:
        self._notify("on_progress", None)
        self._notify("on_busy", False)
        self._busy.release()

    @contextmanager
    def _busy_window(self) -> Iterator[None]:
        self._acquire()
        try:
            yield
        finally:
            self._release()

    def _submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        self._acquire()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="wge-automation"
            )

        def _work() -> Any:
            try:
                return fn(*args)
            finally:
                self._release()

        try:
            return self._executor.submit(_work)
        except RuntimeError:
            self._release()
            raise

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    # -- catalog -------------------------------------------------------

    def load_presets(self) -> list[Preset]:
        """Rebuild the preset catalog and report what was found."""
        presets = self.store.load_all()
        report = self.store.last_report
        if report is not None:
            if not report.directory_exists:
                self._log(f"Manifest directory not found: {report.directory}")
            for error in report.errors:
                self._log(str(error))
            if report.directory_exists and report.is_empty:
                self._log(
                    "No manifests were found. Drop JSON manifest files into "
                    f"{report.directory} to continue."
                )
        return presets

    def select(self, preset_id: str) -> PresetSession:
        """Start a session for ``preset_id`` with fresh Pending rows."""
        if self.store.last_report is None:
            self.load_presets()
        preset = self.store.get(preset_id)
        if preset is None:
            raise PresetNotFoundError(
                f"Unknown preset '{preset_id}'", context={"preset": preset_id}
            )
        session = PresetSession(preset=preset, rows=build_tweak_rows(preset))
        self._notify("on_rows", session.rows)
        return session

    # -- runs ----------------------------------------------------------

    def run(self, session: PresetSession, mode: RunMode) -> RunReport:
        """Apply, preview or revert the session's preset, then refresh status."""
        if mode.is_status_probe:
            raise ValueError("Use refresh_status() for status probes")
        with self._busy_window():
            return self._run_locked(session, mode)

    def submit(self, session: PresetSession, mode: RunMode) -> "Future[RunReport]":
        """Like ``run`` but on a worker thread; raises if a run is in flight."""
        if mode.is_status_probe:
            raise ValueError("Use submit_refresh_status() for status probes")
        return self._submit(self._run_locked, session, mode)

    def refresh_status(self, session: PresetSession) -> RunResult:
        """Probe the backend and reconcile the session rows."""
        with self._busy_window():
            return self._refresh_status_locked(session, "Checking current system status...")

    def submit_refresh_status(self, session: PresetSession) -> "Future[RunResult]":
        return self._submit(
            self._refresh_status_locked, session, "Checking current system status..."
        )

    def refresh(self, session: PresetSession | None = None) -> list[Preset]:
        """Reload manifests and, when a session is given, its status.

        The session is rebuilt from the reloaded manifest, so edits to the
        file show up in its rows. If the manifest is gone the catalog stays
        reloaded and PresetNotFoundError is raised.
        """
        with self._busy_window():
            presets = self.load_presets()
            if session is not None:
                self._rebind(session)
                self._refresh_status_locked(session, "Refreshing tweak status...")
            self._log("Refreshed presets and status information.")
            return presets

    def _rebind(self, session: PresetSession) -> None:
        preset = self.store.get(session.preset_id)
        if preset is None:
            raise PresetNotFoundError(
                f"Preset '{session.preset_id}' is no longer available",
                context={"preset": session.preset_id},
            )
        session.preset = preset
        session.rows = build_tweak_rows(preset)
        self._notify("on_rows", session.rows)

    def _invoke(
        self,
        preset_id: str,
        mode: RunMode,
        handle: Callable[[RunResult], Any],
    ) -> RunResult:
        self.state.transition(OrchestratorState.RUNNING, mode.value)
        try:
            result = self.client.execute(preset_id, mode)
            self.state.transition(OrchestratorState.REPORTED, result.kind)
            handle(result)
            return result
        finally:
            if self.state.state is OrchestratorState.RUNNING:
                self.state.transition(OrchestratorState.REPORTED, "error")
            self.state.transition(OrchestratorState.IDLE)

    def _run_locked(self, session: PresetSession, mode: RunMode) -> RunReport:
        preset = session.preset
        label = mode.action_label
        self._log(f"{label} preset '{preset.name}' ({preset.preset_id})...")
        self._notify("on_progress", f"{label} tweaks...")
        session.results.clear()
        self._notify("on_results", session.results)

        rows: list[ResultRow] = []

        def handle(result: RunResult) -> None:
            rows.extend(self._result_rows(preset, mode, result))

        result = self._invoke(preset.preset_id, mode, handle)
        session.results[:] = rows
        self._notify("on_results", session.results)

        status_result: RunResult | None = None
        if not isinstance(result, LaunchFailureResult):
            status_result = self._refresh_status_locked(session, "Refreshing status...")
        return RunReport(
            mode=mode,
            result=result,
            result_rows=list(session.results),
            status_result=status_result,
        )

    def _result_rows(
        self, preset: Preset, mode: RunMode, result: RunResult
    ) -> list[ResultRow]:
        if isinstance(result, StructuredResult):
            return self._report_structured(mode, result)
        if isinstance(result, FallbackResult):
            self._log_raw_output(result)
            if result.timed_out:
                self._log("Automation timed out and was stopped.")
            self._log(f"Exit code: {result.exit_code}")
            return [
                ResultRow(
                    status="FAIL",
                    display_name=preset.name or preset.preset_id,
                    target="-",
                    message="Automation did not return structured output.",
                    details=f"Exit code {result.exit_code}",
                )
            ]
        self._log(result.reason)
        return [
            ResultRow(
                status="FAIL",
                display_name=preset.name or preset.preset_id,
                target="-",
                message="Automation could not be started.",
                details=result.reason,
            )
        ]

    def _report_structured(
        self, mode: RunMode, result: StructuredResult
    ) -> list[ResultRow]:
        summary = result.summary
        self._log(summary.message or "Preset completed.")
        counts = summary.counts
        if counts is not None:
            self._log(
                f"Totals -> ok: {counts.succeeded}, fail: {counts.failed}, "
                f"skipped: {counts.skipped}, previewed: {counts.what_if}"
            )
        if mode is RunMode.DRY_RUN:
            self._log("Dry run only; no changes saved.")
        elif summary.action_log_path and summary.action_log_path.strip():
            self._log(f"Action log saved to {summary.action_log_path}")
        if result.stderr.strip():
            self._log(f"stderr: {result.stderr.strip()}")
        self._log(f"Exit code: {result.exit_code}")
        return classify(summary.entries)

    def _refresh_status_locked(self, session: PresetSession, progress: str) -> RunResult:
        self._notify("on_progress", progress)

        def handle(result: RunResult) -> None:
            if isinstance(result, StructuredResult):
                reconcile(session.rows, result.summary)
                self._notify("on_rows", session.rows)
            elif isinstance(result, FallbackResult):
                self._log_raw_output(result)
                self._log(f"Status probe exited with {result.exit_code}.")
            else:
                self._log(f"Cannot refresh status: {result.reason}")

        return self._invoke(session.preset_id, RunMode.STATUS, handle)

    def _log_raw_output(self, result: FallbackResult) -> None:
        if result.stdout.strip():
            self._log(result.stdout.strip())
        if result.stderr.strip():
            self._log(f"stderr: {result.stderr.strip()}")
