"""Dependency wiring for the CLI."""

from wge_ui.wiring.dependencies import UIContext

__all__ = ["UIContext"]
