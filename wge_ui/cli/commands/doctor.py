from __future__ import annotations

import typer

from wge_ui.presenters.doctor import render_doctor_report
from wge_ui.wiring.dependencies import UIContext


def create_doctor_app(ctx: UIContext) -> typer.Typer:
    """Build the doctor Typer app, wired to the given context."""
    app = typer.Typer(help="Check environment health and prerequisites.", no_args_is_help=False)

    @app.callback(invoke_without_command=True)
    def doctor_root(typer_ctx: typer.Context) -> None:
        if typer_ctx.invoked_subcommand is None:
            report = ctx.doctor_service.check_all()
            ok = render_doctor_report(ctx.ui, report)
            if not ok:
                raise typer.Exit(1)

    @app.command("backend")
    def doctor_backend() -> None:
        """Check PowerShell and the automation script."""
        report = ctx.doctor_service.check_backend()
        if not render_doctor_report(ctx.ui, report):
            raise typer.Exit(1)

    @app.command("manifests")
    def doctor_manifests() -> None:
        """Check the manifest directory and which manifests load."""
        report = ctx.doctor_service.check_manifests()
        if not render_doctor_report(ctx.ui, report):
            raise typer.Exit(1)

    @app.command("python")
    def doctor_python() -> None:
        """Check Python dependencies."""
        report = ctx.doctor_service.check_python()
        if not render_doctor_report(ctx.ui, report):
            raise typer.Exit(1)

    return app
