from typing import Sequence

from wge_app.api import NoOpHooks, ResultRow
from wge_ui.tui.system.protocols import UI


class UIHooksAdapter(NoOpHooks):
    """Forwards orchestrator activity messages to the UI presenter."""

    def __init__(self, tui: UI):
        self.tui = tui
        self.last_results: list[ResultRow] = []

    def on_log(self, message: str) -> None:
        self.tui.present.activity(message)

    def on_results(self, rows: Sequence[ResultRow]) -> None:
        self.last_results = list(rows)
