from rich.console import Console
from rich.prompt import Confirm

from wge_ui.tui.system.protocols import Form


class RichForm(Form):
    def __init__(self, console: Console):
        self._console = console

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return Confirm.ask(prompt, console=self._console, default=default)
