from __future__ import annotations

from typing import Optional

import typer

from wge_app.api import PresetSession, StructuredResult
from wge_common.errors import WGEError
from wge_ui.presenters.presets import build_preset_table, render_preset_details, render_tweaks
from wge_ui.wiring.dependencies import UIContext


def open_session(ctx: UIContext, preset_id: str) -> PresetSession:
    """Select a preset or exit with an error message."""
    try:
        return ctx.orchestrator.select(preset_id)
    except WGEError as exc:
        ctx.ui.present.error(str(exc))
        raise typer.Exit(1)


def register_preset_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register catalog and status commands on the given Typer app."""

    @app.command("list")
    def list_presets() -> None:
        """List presets found in the manifest directory."""
        try:
            presets = ctx.orchestrator.load_presets()
        except WGEError as exc:
            ctx.ui.present.error(str(exc))
            raise typer.Exit(1)
        if not presets:
            ctx.ui.present.warning(
                f"No presets found under {ctx.settings.resolved_manifest_dir}"
            )
            return
        ctx.ui.tables.show(build_preset_table(presets))

    @app.command("show")
    def show_preset(
        preset: str = typer.Argument(..., help="Preset id (manifest file name without .json)."),
        no_status: bool = typer.Option(
            False,
            "--no-status",
            help="Skip the status probe and show tweaks as Pending.",
        ),
    ) -> None:
        """Show preset details and its tweaks with their current status."""
        session = open_session(ctx, preset)
        render_preset_details(ctx.ui, session.preset)
        if not no_status:
            with ctx.ui.progress.status("Checking current system status..."):
                ctx.orchestrator.refresh_status(session)
        render_tweaks(ctx.ui, session.preset, session.rows)

    @app.command("status")
    def preset_status(
        preset: str = typer.Argument(..., help="Preset id to probe."),
    ) -> None:
        """Probe the backend for the live state of every tweak in a preset."""
        session = open_session(ctx, preset)
        with ctx.ui.progress.status("Checking current system status..."):
            result = ctx.orchestrator.refresh_status(session)
        render_tweaks(ctx.ui, session.preset, session.rows)
        if not isinstance(result, StructuredResult):
            raise typer.Exit(1)

    @app.command("refresh")
    def refresh(
        preset: Optional[str] = typer.Argument(
            None, help="Preset whose status should be probed after reloading."
        ),
    ) -> None:
        """Reload manifests and optionally re-probe one preset."""
        session = open_session(ctx, preset) if preset else None
        try:
            with ctx.ui.progress.status("Refreshing presets..."):
                presets = ctx.orchestrator.refresh(session)
        except WGEError as exc:
            ctx.ui.present.error(str(exc))
            raise typer.Exit(1)
        if presets:
            ctx.ui.tables.show(build_preset_table(presets))
        if session is not None:
            render_tweaks(ctx.ui, session.preset, session.rows)
