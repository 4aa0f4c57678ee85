from typing import ContextManager, Protocol

from wge_ui.tui.system.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def activity(self, message: str) -> None: ...
    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None: ...
    def rule(self, title: str) -> None: ...


class Form(Protocol):
    def confirm(self, prompt: str, default: bool = True) -> bool: ...


class Progress(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
    form: Form
    progress: Progress
