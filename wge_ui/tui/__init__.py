"""
UI adapter package providing Rich-based and headless renderers.
"""

from wge_ui.tui.system.facade import TUI
from wge_ui.tui.system.headless import HeadlessUI
from wge_ui.tui.system.protocols import UI, Form, Presenter, Progress, TablePresenter

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "TablePresenter",
    "Presenter",
    "Form",
    "Progress",
]
