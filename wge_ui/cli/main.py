"""
Command-line interface for the preset orchestrator.

Lists preset manifests, probes tweak status and runs the automation backend
in apply, dry-run or revert mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from wge_ui.cli.commands.doctor import create_doctor_app
from wge_ui.cli.commands.presets import register_preset_commands
from wge_ui.cli.commands.run import register_run_commands
from wge_ui.wiring.dependencies import UIContext, configure_logging

# Initialize global context (lazy)
ctx_store = UIContext()

doctor_app = create_doctor_app(ctx_store)

app = typer.Typer(help="Apply, preview and revert Windows tweak presets.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force headless output (useful in CI).",
    ),
    settings: Optional[Path] = typer.Option(
        None,
        "--settings",
        "-s",
        help="Settings file; defaults to WGE_SETTINGS_PATH or ~/.config/wge/settings.json.",
    ),
    automation_root: Optional[Path] = typer.Option(
        None,
        "--automation-root",
        help="Directory holding wge.ps1 and the manifests folder.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(force=True, debug=debug)
    ctx_store.headless = headless
    ctx_store.settings_path = settings
    ctx_store.automation_root = automation_root
    ctx_store.reset()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_preset_commands(app, ctx_store)
register_run_commands(app, ctx_store)
app.add_typer(doctor_app, name="doctor")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
