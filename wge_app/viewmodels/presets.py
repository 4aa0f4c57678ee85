"""View-model helpers for presets, tweak rows and results (UI-agnostic)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from wge_app.interfaces import NoOpHooks
from wge_app.models.manifest import Preset
from wge_app.viewmodels.rows import DisplayTweakRow, ResultRow

META_SEPARATOR = "  •  "


def preset_tags_label(preset: Preset) -> str:
    tags = preset.metadata.tags
    return ", ".join(tags) if tags else "No tags"


def preset_meta_line(preset: Preset) -> str:
    meta = preset.metadata
    parts = (
        f"ID: {meta.id}",
        f"Category: {meta.category}",
        f"Tweaks: {preset.tweak_count}",
        f"Default state: {meta.default_state}",
        f"Tags: {preset_tags_label(preset)}",
    )
    return META_SEPARATOR.join(parts)


def preset_rows(presets: Iterable[Preset]) -> list[list[str]]:
    return [
        [
            preset.preset_id,
            preset.display_name,
            preset.metadata.category,
            str(preset.tweak_count),
            preset_tags_label(preset),
        ]
        for preset in presets
    ]


def tweak_rows(rows: Iterable[DisplayTweakRow]) -> list[list[str]]:
    return [
        [
            row.id,
            row.name,
            row.category,
            row.risk_level,
            row.status.value,
            row.status_details,
        ]
        for row in rows
    ]


def result_rows(rows: Iterable[ResultRow]) -> list[list[str]]:
    return [
        [row.status, row.display_name, row.target, row.message, row.details]
        for row in rows
    ]


def format_log_line(message: str, now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M:%SZ")
    return f"[{stamp}] {message}"


class ActivityLog(NoOpHooks):
    """Timestamped record of orchestrator messages; usable as a hook."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def on_log(self, message: str) -> None:
        if not message or not message.strip():
            return
        self.lines.append(format_log_line(message))

    def text(self) -> str:
        return "\n".join(self.lines)
