from __future__ import annotations

from typing import Protocol

from wge_ui.tui.system.protocols import Presenter

# Activity lines starting with these prefixes are shown as warnings.
WARNING_PREFIXES = (
    "stderr:",
    "cannot ",
    "automation timed out",
    "manifest directory not found",
    "could not parse manifest",
    "skipping manifest",
)


def activity_level(message: str) -> str:
    """Pick the presenter level for one orchestrator activity line."""
    lowered = message.strip().lower()
    if lowered.startswith(WARNING_PREFIXES):
        return "warning"
    return "info"


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...

    def emit_panel(self, message: str, title: str | None, border_style: str | None) -> None: ...

    def emit_rule(self, title: str) -> None: ...


class PresenterBase(Presenter):
    """Route presenter calls to a sink, tagging each with its level."""

    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.emit("info", message)

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def success(self, message: str) -> None:
        self._sink.emit("success", message)

    def activity(self, message: str) -> None:
        if message and message.strip():
            self._sink.emit(activity_level(message), message)

    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        self._sink.emit_panel(message, title, border_style)

    def rule(self, title: str) -> None:
        self._sink.emit_rule(title)
