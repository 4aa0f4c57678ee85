"""Command-line and terminal UI for the preset orchestrator."""

from wge_ui.cli import app, main

__all__ = ["app", "main"]
