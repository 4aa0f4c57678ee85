from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule

from wge_ui.tui.core import theme
from wge_ui.tui.system.components.presenter_base import PresenterBase, PresenterSink


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        # backend output may contain square brackets
        self._console.print(theme.presenter_message(level, escape(message)))

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._console.print(Panel(escape(message), title=title, border_style=border_style))

    def emit_rule(self, title: str) -> None:
        self._console.print(Rule(title))


class RichPresenter(PresenterBase):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichPresenterSink(console))
