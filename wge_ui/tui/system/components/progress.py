from typing import ContextManager

from rich.console import Console

from wge_ui.tui.core import theme
from wge_ui.tui.system.protocols import Progress


class RichProgress(Progress):
    """Spinner shown while the backend runs; backend calls can take minutes."""

    def __init__(self, console: Console):
        self._console = console

    def status(self, message: str) -> ContextManager[None]:
        return self._console.status(message, spinner="dots", spinner_style=theme.RICH_ACCENT)
