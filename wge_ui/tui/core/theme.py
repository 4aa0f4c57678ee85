from __future__ import annotations

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

RICH_STATUS_COLORS: dict[str, str] = {
    "applied": "green",
    "partial": "yellow",
    "stock": "dim",
    "error": "red",
    "skipped": "dim",
    "pending": "cyan",
    "unknown": "magenta",
    "ok": "green",
    "success": "green",
    "succeeded": "green",
    "whatif": "cyan",
    "info": "blue",
    "fail": "red",
    "failed": "red",
}

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)
