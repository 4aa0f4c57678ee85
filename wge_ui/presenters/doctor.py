"""Presenter for doctor reports."""

from __future__ import annotations

from typing import List

from wge_app.api import DoctorCheckItem, DoctorReport
from wge_ui.tui.system.models import TableModel


def _mark(item: DoctorCheckItem) -> str:
    if item.ok:
        return "✓"
    return "✗" if item.required else "!"


def build_doctor_tables(report: DoctorReport) -> List[TableModel]:
    """One table per check group."""
    return [
        TableModel(
            title=group.title,
            columns=["Item", "Status", "Required"],
            rows=[[item.label, _mark(item), "yes" if item.required else "no"] for item in group.items],
        )
        for group in report.groups
    ]


def render_doctor_report(ui, report: DoctorReport) -> bool:
    """
    Render a doctor report to the provided UI.

    Returns True when every required check passed.
    """
    for table in build_doctor_tables(report):
        ui.tables.show(table)

    for msg in report.info_messages:
        ui.present.info(msg)

    if not report.ok:
        ui.present.error(f"Found {report.total_failures} failures.")
        return False

    ui.present.success("All checks passed.")
    return True
