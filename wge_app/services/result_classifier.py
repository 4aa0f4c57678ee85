"""Turn apply/dry-run/revert entries into uniform result rows."""

from __future__ import annotations

from typing import Iterable

from wge_app.models.automation import AutomationEntry
from wge_app.viewmodels.rows import ResultRow

DETAIL_SEPARATOR = " | "
UNKNOWN_STATUS = "UNK"
UNKNOWN_NAME = "(unknown)"

NO_COMMANDS_ROW = ResultRow(
    status="INFO",
    display_name="No commands",
    target="-",
    message="No commands executed; the preset did not run any commands.",
)


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def build_details(entry: AutomationEntry) -> str:
    parts: list[str] = []
    if _present(entry.skip_reason):
        parts.append(f"skip: {entry.skip_reason}")
    if _present(entry.error_message):
        parts.append(f"error: {entry.error_message}")
    if entry.requires_reboot:
        parts.append("reboot required")
    if entry.requires_elevation:
        parts.append("needs elevation")
    return DETAIL_SEPARATOR.join(parts)


def display_name(entry: AutomationEntry) -> str:
    if _present(entry.tweak_name):
        return entry.tweak_name  # type: ignore[return-value]
    if _present(entry.tweak_id):
        return entry.tweak_id  # type: ignore[return-value]
    return UNKNOWN_NAME


def classify_entry(entry: AutomationEntry) -> ResultRow:
    status = entry.status.strip().upper() if _present(entry.status) else UNKNOWN_STATUS
    return ResultRow(
        status=status,
        display_name=display_name(entry),
        target=entry.target or "",
        message=entry.message or "",
        details=build_details(entry),
    )


def classify(entries: Iterable[AutomationEntry]) -> list[ResultRow]:
    """Classify entries in order; an empty run yields a single INFO row."""
    rows = [classify_entry(entry) for entry in entries]
    return rows or [NO_COMMANDS_ROW]
