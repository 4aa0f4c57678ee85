import json
import subprocess
from collections import defaultdict
from pathlib import Path

import pytest
from rich.console import Console
from rich.table import Table

from wge_app.api import WGESettings

_WGE_ENV_VARS = (
    "WGE_SETTINGS_PATH",
    "WGE_AUTOMATION_ROOT",
    "WGE_MANIFEST_DIR",
    "WGE_POWERSHELL",
    "WGE_BACKEND_TIMEOUT",
    "WGE_LOG_LEVEL",
    "WGE_LOG_JSON",
    "WGE_LOG_FILE",
)

PERF_MANIFEST = {
    "metadata": {
        "id": "perf",
        "name": "Performance",
        "description": "Trim background work.",
        "defaultState": "Enabled",
        "category": "System",
        "tags": ["gaming", "fps"],
    },
    "tweaks": [
        {"id": "t1", "name": "Tweak one", "category": "Services", "riskLevel": "Low"},
        {"id": "t2", "name": "Tweak two", "category": "Registry", "riskLevel": "Medium"},
    ],
}


@pytest.fixture(autouse=True)
def _isolate_wge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _WGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def automation_root(tmp_path: Path) -> Path:
    """Automation folder with an (inert) entry script and an empty manifests dir."""
    root = tmp_path / "Automation"
    (root / "manifests").mkdir(parents=True)
    (root / "wge.ps1").write_text("# automation entry point\n", encoding="utf-8")
    return root


@pytest.fixture
def write_manifest(automation_root: Path):
    def _write(name: str, payload=PERF_MANIFEST, raw: str | None = None) -> Path:
        path = automation_root / "manifests" / f"{name}.json"
        text = raw if raw is not None else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path, automation_root: Path) -> WGESettings:
    powershell = tmp_path / "powershell.exe"
    powershell.write_text("", encoding="utf-8")
    return WGESettings(automation_root=automation_root, powershell_path=powershell)


def completed(stdout="", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    if not isinstance(stdout, str):
        stdout = json.dumps(stdout)
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeRunner:
    """Stand-in for subprocess.run returning queued outcomes in order."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, command, **kwargs):
        self.calls.append((list(command), kwargs))
        if not self.outcomes:
            raise AssertionError(f"Unexpected backend call: {command}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_runner_cls():
    return FakeRunner


@pytest.fixture
def completed_process():
    return completed


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """
    Custom hook to print statistics by marker at the end of the test session.
    """
    _ = (exitstatus, config)  # unused in our reporting helper

    # Defined markers in pyproject.toml
    known_markers = {"unit_common", "unit_app", "unit_ui", "integration"}

    # stats is a dict like {'passed': [Report, ...], 'failed': [...]}
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0})

    for outcome in ["passed", "failed", "skipped"]:
        reports = terminalreporter.stats.get(outcome, [])
        for report in reports:
            # Only count the actual test call, or setup skips
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in known_markers:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    console = Console()
    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")
    table.add_column("Avg (s)", justify="right", style="blue")

    for marker in sorted(marker_stats.keys()):
        stats = marker_stats[marker]
        if stats["total"] > 0:
            avg_duration = stats["duration"] / stats["total"]
            table.add_row(
                marker,
                str(stats["total"]),
                str(stats["passed"]),
                str(stats["failed"]),
                str(stats["skipped"]),
                f"{stats['duration']:.2f}",
                f"{avg_duration:.2f}"
            )

    console.print("\n")
    console.print(table)
