"""Tests for the preset orchestrator."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from wge_app.api import (
    ActivityLog,
    AutomationSummary,
    FallbackResult,
    LaunchFailureResult,
    ManifestStore,
    NoOpHooks,
    OrchestratorState,
    PresetOrchestrator,
    PresetStatusSummary,
    RunMode,
    StructuredResult,
    TweakStatus,
)
from wge_common.errors import OrchestratorBusyError, PresetNotFoundError


pytestmark = pytest.mark.unit_app


def structured(payload: dict, *, status: bool = False, exit_code: int = 0, stderr: str = "") -> StructuredResult:
    model = PresetStatusSummary if status else AutomationSummary
    return StructuredResult(
        summary=model.model_validate(payload), stdout="{}", stderr=stderr, exit_code=exit_code
    )


STATUS_OK = structured(
    {"entries": [{"tweakId": "t1", "state": "Applied"}, {"tweakId": "t2", "state": "NotApplied"}]},
    status=True,
)


class FakeClient:
    """Returns queued results; optionally blocks until released."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls: list[tuple[str, RunMode]] = []
        self.started = threading.Event()
        self.release: threading.Event | None = None

    def execute(self, preset_id: str, mode: RunMode):
        self.calls.append((preset_id, mode))
        self.started.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        return self.results.pop(0)


class RecordingHooks(NoOpHooks):
    def __init__(self) -> None:
        self.logs: list[str] = []
        self.busy: list[bool] = []
        self.progress: list[str | None] = []
        self.states: list[OrchestratorState] = []
        self.rows_updates = 0
        self.results: list[list] = []

    def on_log(self, message: str) -> None:
        self.logs.append(message)

    def on_busy(self, busy: bool) -> None:
        self.busy.append(busy)

    def on_progress(self, message: str | None) -> None:
        self.progress.append(message)

    def on_state(self, state, reason) -> None:
        self.states.append(state)

    def on_rows(self, rows) -> None:
        self.rows_updates += 1

    def on_results(self, rows) -> None:
        self.results.append(list(rows))


@pytest.fixture
def store(automation_root: Path, write_manifest) -> ManifestStore:
    write_manifest("perf")
    return ManifestStore(automation_root / "manifests")


def _orchestrator(store: ManifestStore, *results):
    client = FakeClient(*results)
    orchestrator = PresetOrchestrator(store, client)
    hooks = RecordingHooks()
    orchestrator.subscribe(hooks)
    return orchestrator, client, hooks


def test_select_builds_pending_rows(store: ManifestStore) -> None:
    orchestrator, client, hooks = _orchestrator(store)

    session = orchestrator.select("perf")

    assert session.preset_id == "perf"
    assert [row.id for row in session.rows] == ["t1", "t2"]
    assert {row.status for row in session.rows} == {TweakStatus.PENDING}
    assert {row.status_details for row in session.rows} == {"Not evaluated yet."}
    assert hooks.rows_updates == 1
    assert client.calls == []


def test_select_unknown_preset_raises(store: ManifestStore) -> None:
    orchestrator, _, _ = _orchestrator(store)

    with pytest.raises(PresetNotFoundError):
        orchestrator.select("nope")


def test_load_presets_reports_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "manifests").mkdir()
    orchestrator, _, hooks = _orchestrator(ManifestStore(tmp_path / "manifests"))

    assert orchestrator.load_presets() == []
    assert hooks.logs == [
        f"No manifests were found. Drop JSON manifest files into {tmp_path / 'manifests'} to continue."
    ]


def test_load_presets_reports_missing_directory_and_bad_files(
    tmp_path: Path, automation_root: Path, write_manifest
) -> None:
    orchestrator, _, hooks = _orchestrator(ManifestStore(tmp_path / "absent"))
    orchestrator.load_presets()
    assert hooks.logs == [f"Manifest directory not found: {tmp_path / 'absent'}"]

    write_manifest("perf")
    write_manifest("broken", raw="{")
    orchestrator, _, hooks = _orchestrator(ManifestStore(automation_root / "manifests"))
    assert [p.preset_id for p in orchestrator.load_presets()] == ["perf"]
    assert len(hooks.logs) == 1
    assert hooks.logs[0].startswith("Could not parse manifest '")


def test_apply_classifies_results_then_refreshes_status(store: ManifestStore) -> None:
    applied = structured(
        {
            "counts": {"total": 2, "succeeded": 1, "failed": 1},
            "actionLogPath": "C:\\logs\\perf.log",
            "entries": [
                {"status": "ok", "tweakName": "Tweak one", "target": "HKLM:A"},
                {"status": "failed", "tweakId": "t2", "errorMessage": "access denied"},
            ],
        },
        stderr="warning: slow\n",
    )
    orchestrator, client, hooks = _orchestrator(store, applied, STATUS_OK)
    session = orchestrator.select("perf")

    report = orchestrator.run(session, RunMode.APPLY)

    assert client.calls == [("perf", RunMode.APPLY), ("perf", RunMode.STATUS)]
    assert [(r.status, r.display_name) for r in report.result_rows] == [("OK", "Tweak one"), ("FAILED", "t2")]
    assert session.results == report.result_rows
    assert report.succeeded is False
    assert report.status_result is STATUS_OK
    assert [row.status for row in session.rows] == [TweakStatus.APPLIED, TweakStatus.STOCK]
    assert hooks.logs == [
        "Applying preset 'Performance' (perf)...",
        "Preset completed.",
        "Totals -> ok: 1, fail: 1, skipped: 0, previewed: 0",
        "Action log saved to C:\\logs\\perf.log",
        "stderr: warning: slow",
        "Exit code: 0",
    ]
    assert hooks.busy == [True, False]
    assert hooks.results[0] == []
    assert orchestrator.state.state is OrchestratorState.IDLE
    assert hooks.states == [
        OrchestratorState.RUNNING, OrchestratorState.REPORTED, OrchestratorState.IDLE,
    ] * 2


def test_dry_run_does_not_report_action_log(store: ManifestStore) -> None:
    previewed = structured(
        {"message": "Dry run finished", "actionLogPath": "C:\\x.log", "counts": {"whatIf": 2}, "entries": []}
    )
    orchestrator, _, hooks = _orchestrator(store, previewed, STATUS_OK)

    report = orchestrator.run(orchestrator.select("perf"), RunMode.DRY_RUN)

    assert "Dry run finished" in hooks.logs
    assert "Totals -> ok: 0, fail: 0, skipped: 0, previewed: 2" in hooks.logs
    assert "Dry run only; no changes saved." in hooks.logs
    assert not any(line.startswith("Action log saved") for line in hooks.logs)
    assert [r.status for r in report.result_rows] == ["INFO"]
    assert report.succeeded is True


def test_fallback_produces_one_fail_row(store: ManifestStore) -> None:
    fallback = FallbackResult(stdout="Access denied.\n", stderr="trace", exit_code=3)
    orchestrator, client, hooks = _orchestrator(store, fallback, STATUS_OK)
    session = orchestrator.select("perf")

    report = orchestrator.run(session, RunMode.REVERT)

    assert len(report.result_rows) == 1
    row = report.result_rows[0]
    assert (row.status, row.display_name, row.target) == ("FAIL", "Performance", "-")
    assert row.message == "Automation did not return structured output."
    assert row.details == "Exit code 3"
    assert hooks.logs[1:] == ["Access denied.", "stderr: trace", "Exit code: 3"]
    assert len(client.calls) == 2
    assert report.succeeded is False


def test_timeout_is_logged(store: ManifestStore) -> None:
    timed_out = FallbackResult(stdout="", stderr="", exit_code=-1, timed_out=True)
    orchestrator, _, hooks = _orchestrator(store, timed_out, STATUS_OK)

    orchestrator.run(orchestrator.select("perf"), RunMode.APPLY)

    assert "Automation timed out and was stopped." in hooks.logs
    assert "Exit code: -1" in hooks.logs


def test_launch_failure_skips_status_refresh(store: ManifestStore) -> None:
    failure = LaunchFailureResult(reason="Automation script missing: C:\\wge.ps1")
    orchestrator, client, hooks = _orchestrator(store, failure)
    session = orchestrator.select("perf")

    report = orchestrator.run(session, RunMode.APPLY)

    assert client.calls == [("perf", RunMode.APPLY)]
    assert report.status_result is None
    assert report.result_rows[0].message == "Automation could not be started."
    assert report.result_rows[0].details == failure.reason
    assert failure.reason in hooks.logs
    assert {row.status for row in session.rows} == {TweakStatus.PENDING}


def test_status_probe_failures_leave_rows_untouched(store: ManifestStore) -> None:
    orchestrator, _, hooks = _orchestrator(
        store,
        FallbackResult(stdout="oops", stderr="", exit_code=2),
        LaunchFailureResult(reason="no shell"),
    )
    session = orchestrator.select("perf")

    orchestrator.refresh_status(session)
    orchestrator.refresh_status(session)

    assert hooks.logs == ["oops", "Status probe exited with 2.", "Cannot refresh status: no shell"]
    assert {row.status for row in session.rows} == {TweakStatus.PENDING}


def test_refresh_reloads_and_reprobes(store: ManifestStore) -> None:
    orchestrator, client, hooks = _orchestrator(store, STATUS_OK)
    session = orchestrator.select("perf")

    presets = orchestrator.refresh(session)

    assert [p.preset_id for p in presets] == ["perf"]
    assert client.calls == [("perf", RunMode.STATUS)]
    assert hooks.logs[-1] == "Refreshed presets and status information."
    assert session.rows[0].status is TweakStatus.APPLIED


def test_refresh_picks_up_edited_manifest(store: ManifestStore, write_manifest) -> None:
    orchestrator, _, hooks = _orchestrator(store, STATUS_OK)
    session = orchestrator.select("perf")
    edited = json.loads((store.directory / "perf.json").read_text(encoding="utf-8"))
    edited["tweaks"].append({"id": "t3", "name": "Tweak three"})
    write_manifest("perf", payload=edited)

    orchestrator.refresh(session)

    assert session.preset.tweak_count == 3
    assert [row.id for row in session.rows] == ["t1", "t2", "t3"]
    assert session.rows[0].status is TweakStatus.APPLIED
    assert hooks.rows_updates >= 2


def test_refresh_raises_when_manifest_was_removed(store: ManifestStore) -> None:
    orchestrator, client, _ = _orchestrator(store)
    session = orchestrator.select("perf")
    (store.directory / "perf.json").unlink()

    with pytest.raises(PresetNotFoundError):
        orchestrator.refresh(session)

    assert store.presets == []
    assert client.calls == []
    assert not orchestrator.busy


def test_status_mode_is_not_a_run(store: ManifestStore) -> None:
    orchestrator, _, _ = _orchestrator(store)
    session = orchestrator.select("perf")

    with pytest.raises(ValueError):
        orchestrator.run(session, RunMode.STATUS)
    with pytest.raises(ValueError):
        orchestrator.submit(session, RunMode.STATUS)


def test_second_run_is_rejected_while_busy(store: ManifestStore) -> None:
    applied = structured({"entries": []})
    orchestrator, client, hooks = _orchestrator(store, applied, STATUS_OK)
    client.release = threading.Event()
    session = orchestrator.select("perf")

    future = orchestrator.submit(session, RunMode.APPLY)
    try:
        assert client.started.wait(timeout=5)
        assert orchestrator.busy is True
        with pytest.raises(OrchestratorBusyError):
            orchestrator.run(session, RunMode.APPLY)
        with pytest.raises(OrchestratorBusyError):
            orchestrator.refresh_status(session)
    finally:
        client.release.set()
    report = future.result(timeout=5)
    orchestrator.shutdown()

    assert report.succeeded is True
    assert orchestrator.busy is False
    assert hooks.busy == [True, False]
    assert len(client.calls) == 2


def test_submit_refresh_status_runs_on_worker(store: ManifestStore) -> None:
    orchestrator, _, _ = _orchestrator(store, STATUS_OK)
    session = orchestrator.select("perf")

    result = orchestrator.submit_refresh_status(session).result(timeout=5)
    orchestrator.shutdown()

    assert result is STATUS_OK
    assert session.rows[1].status is TweakStatus.STOCK


def test_client_error_returns_state_to_idle(store: ManifestStore) -> None:
    class ExplodingClient:
        def execute(self, preset_id, mode):
            raise RuntimeError("backend exploded")

    orchestrator = PresetOrchestrator(store, ExplodingClient())
    session = orchestrator.select("perf")

    with pytest.raises(RuntimeError):
        orchestrator.run(session, RunMode.APPLY)

    assert orchestrator.state.state is OrchestratorState.IDLE
    assert orchestrator.busy is False


def test_notifications_go_through_dispatcher(store: ManifestStore) -> None:
    queued = []
    orchestrator = PresetOrchestrator(store, FakeClient(), dispatcher=queued.append)
    hooks = RecordingHooks()
    orchestrator.subscribe(hooks)

    orchestrator.select("perf")

    assert hooks.rows_updates == 0
    for fn in queued:
        fn()
    assert hooks.rows_updates == 1


def test_activity_log_records_timestamped_lines(store: ManifestStore) -> None:
    orchestrator, _, _ = _orchestrator(store, LaunchFailureResult(reason="no shell"))
    log = ActivityLog()
    orchestrator.subscribe(log)

    orchestrator.run(orchestrator.select("perf"), RunMode.APPLY)

    assert len(log.lines) == 2
    assert log.lines[0].endswith("] Applying preset 'Performance' (perf)...")
    assert log.lines[0].startswith("[")
    assert log.text().endswith("no shell")


def test_failing_hook_does_not_break_run(store: ManifestStore) -> None:
    class BrokenHooks(NoOpHooks):
        def on_log(self, message: str) -> None:
            raise RuntimeError("ui gone")

    orchestrator, _, hooks = _orchestrator(store, LaunchFailureResult(reason="no shell"))
    orchestrator.subscribe(BrokenHooks())

    orchestrator.run(orchestrator.select("perf"), RunMode.APPLY)

    assert hooks.logs[-1] == "no shell"
