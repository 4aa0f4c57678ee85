"""Map status-probe responses onto tweak rows."""

from __future__ import annotations

from typing import Iterable

from wge_app.models.automation import BackendState, PresetStatusSummary, StatusCheck, StatusEntry
from wge_app.viewmodels.rows import DisplayTweakRow, TweakStatus

NO_STATUS_RETURNED = "No status information returned."
NO_CHECKS_DEFINED = "No checks defined."

_STATE_TO_STATUS: dict[BackendState, TweakStatus] = {
    BackendState.APPLIED: TweakStatus.APPLIED,
    BackendState.PARTIAL: TweakStatus.PARTIAL,
    BackendState.NOT_APPLIED: TweakStatus.STOCK,
    BackendState.FAILED: TweakStatus.ERROR,
    BackendState.ERROR: TweakStatus.ERROR,
    BackendState.UNSUPPORTED: TweakStatus.SKIPPED,
    BackendState.PENDING: TweakStatus.PENDING,
    BackendState.UNKNOWN: TweakStatus.UNKNOWN,
}


def map_backend_state(state: str | None) -> TweakStatus:
    """Translate a backend state string; anything unrecognised is Unknown."""
    parsed = BackendState.parse(state)
    if parsed is None:
        return TweakStatus.UNKNOWN
    return _STATE_TO_STATUS[parsed]


def format_check(check: StatusCheck) -> str:
    marker = "[OK]" if check.compliant else "[WARN]"
    desired = check.desired if check.desired and check.desired.strip() else "(unspecified)"
    actual = check.actual if check.actual and check.actual.strip() else "(none)"
    extra = f" ({check.message})" if check.message and check.message.strip() else ""
    return f"{marker} {check.target or ''} -> wanted {desired}, actual {actual}{extra}"


def format_status_details(entry: StatusEntry) -> str:
    lines: list[str] = []
    if entry.message and entry.message.strip():
        lines.append(entry.message)
    lines.extend(format_check(check) for check in entry.checks)
    return "\n".join(lines) if lines else NO_CHECKS_DEFINED


def build_status_lookup(entries: Iterable[StatusEntry]) -> dict[str, StatusEntry]:
    """Index entries by lower-cased tweak id; later duplicates win."""
    lookup: dict[str, StatusEntry] = {}
    for entry in entries:
        key = (entry.tweak_id or "").strip()
        if not key:
            continue
        lookup[key.lower()] = entry
    return lookup


def reconcile(
    rows: list[DisplayTweakRow], summary: PresetStatusSummary
) -> list[DisplayTweakRow]:
    """Recompute status and details of every row in place and return the rows."""
    lookup = build_status_lookup(summary.entries)
    for row in rows:
        entry = lookup.get(row.id.lower())
        if entry is None:
            row.status = TweakStatus.UNKNOWN
            row.status_details = NO_STATUS_RETURNED
            continue
        row.status = map_backend_state(entry.state)
        row.status_details = format_status_details(entry)
    return rows
