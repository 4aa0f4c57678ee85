"""Presenters for presets, tweak rows and run results."""

from __future__ import annotations

from typing import Iterable, List

from wge_app.api import DisplayTweakRow, Preset, ResultRow, RunReport, StructuredResult
from wge_app.viewmodels import preset_meta_line, preset_rows, result_rows, tweak_rows
from wge_ui.tui.system.models import TableModel


def build_preset_table(presets: Iterable[Preset]) -> TableModel:
    return TableModel(
        title="Presets",
        columns=["Preset", "Name", "Category", "Tweaks", "Tags"],
        rows=preset_rows(presets),
    )


def build_tweak_table(preset: Preset, rows: Iterable[DisplayTweakRow]) -> TableModel:
    return TableModel(
        title=f"Tweaks - {preset.display_name}",
        columns=["ID", "Name", "Category", "Risk", "Status", "Details"],
        rows=tweak_rows(rows),
        status_column=4,
    )


def build_result_table(rows: Iterable[ResultRow], title: str = "Results") -> TableModel:
    return TableModel(
        title=title,
        columns=["Status", "Tweak", "Target", "Message", "Details"],
        rows=result_rows(rows),
        status_column=0,
    )


def render_preset_details(ui, preset: Preset) -> None:
    """Show the preset header (title, description, meta line)."""
    body: List[str] = []
    if preset.metadata.description:
        body.append(preset.metadata.description)
    body.append(preset_meta_line(preset))
    ui.present.panel("\n\n".join(body), title=preset.name)


def render_tweaks(ui, preset: Preset, rows: Iterable[DisplayTweakRow]) -> None:
    ui.tables.show(build_tweak_table(preset, rows))


def render_run_report(ui, report: RunReport) -> bool:
    """
    Render result rows and the closing verdict of a run.

    Returns True when the backend reported no failed commands.
    """
    ui.tables.show(build_result_table(report.result_rows, title=f"Results ({report.mode.value})"))
    result = report.result
    if isinstance(result, StructuredResult):
        counts = result.summary.counts
        if report.succeeded:
            ui.present.success("Preset finished without failures.")
        else:
            failed = counts.failed if counts is not None else 0
            ui.present.error(f"Preset finished with {failed} failed command(s).")
    elif result.kind == "fallback":
        ui.present.error("Automation did not return structured output.")
    else:
        ui.present.error("Automation could not be started.")
    return report.succeeded
