from __future__ import annotations

import typer

from wge_app.api import RunMode
from wge_common.errors import WGEError
from wge_ui.cli.commands.presets import open_session
from wge_ui.presenters.presets import render_preset_details, render_run_report, render_tweaks
from wge_ui.wiring.dependencies import UIContext


def revert_prompt(preset_name: str) -> str:
    return (
        f"This will restore the original Windows settings for the '{preset_name}' preset. "
        "A system restart may be required for some changes to take effect. "
        "Are you sure you want to revert all changes?"
    )


def register_run_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register apply, dry-run and revert on the given Typer app."""

    def _run(preset: str, mode: RunMode, confirm: bool = False) -> None:
        session = open_session(ctx, preset)
        render_preset_details(ctx.ui, session.preset)
        if confirm and not ctx.ui.form.confirm(revert_prompt(session.preset.name), default=False):
            ctx.ui.present.warning("Revert cancelled.")
            raise typer.Exit(1)
        ctx.ui.present.rule(f"{mode.action_label} {session.preset.display_name}")
        try:
            with ctx.ui.progress.status(f"{mode.action_label} tweaks..."):
                report = ctx.orchestrator.run(session, mode)
        except WGEError as exc:
            ctx.ui.present.error(str(exc))
            raise typer.Exit(1)
        render_tweaks(ctx.ui, session.preset, session.rows)
        if not render_run_report(ctx.ui, report):
            raise typer.Exit(1)

    @app.command("apply")
    def apply(
        preset: str = typer.Argument(..., help="Preset id to apply."),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Preview the changes without touching the system.",
        ),
    ) -> None:
        """Apply every supported tweak in a preset."""
        _run(preset, RunMode.DRY_RUN if dry_run else RunMode.APPLY)

    @app.command("dry-run")
    def dry_run(
        preset: str = typer.Argument(..., help="Preset id to preview."),
    ) -> None:
        """Preview a preset; nothing is changed."""
        _run(preset, RunMode.DRY_RUN)

    @app.command("revert")
    def revert(
        preset: str = typer.Argument(..., help="Preset id to revert."),
        yes: bool = typer.Option(
            False,
            "--yes",
            "-y",
            help="Skip the confirmation prompt.",
        ),
    ) -> None:
        """Restore the settings a preset changed."""
        _run(preset, RunMode.REVERT, confirm=not yes)
