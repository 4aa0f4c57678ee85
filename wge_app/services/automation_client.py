"""Invoke the PowerShell automation backend and parse its JSON result.

The backend is an independently evolving script. Anything it prints that
does not validate against the expected document degrades to a fallback
result holding the raw output, so callers can still show something useful.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from wge_app.models.automation import AutomationSummary, PresetStatusSummary
from wge_app.services.run_types import (
    FallbackResult,
    LaunchFailureResult,
    RunMode,
    RunResult,
    StructuredResult,
)
from wge_app.services.settings import WGESettings
from wge_common.errors import (
    BackendLaunchError,
    BackendUnavailable,
    OutputParseError,
    error_to_payload,
)

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = -1

_HOST_FLAGS = ("-NoLogo", "-NoProfile", "-ExecutionPolicy", "Bypass")
_MODE_FLAGS: dict[RunMode, tuple[str, ...]] = {
    RunMode.APPLY: ("-SkipUnsupported", "-AsJson"),
    RunMode.DRY_RUN: ("-SkipUnsupported", "-AsJson", "-DryRun"),
    RunMode.REVERT: ("-SkipUnsupported", "-AsJson", "-Revert"),
    RunMode.STATUS: ("-Status", "-AsJson"),
}


def build_backend_arguments(script_path: Path, preset_id: str, mode: RunMode) -> list[str]:
    """Return the order-significant argument list passed to PowerShell."""
    return [
        *_HOST_FLAGS,
        "-File",
        str(script_path),
        "-Preset",
        preset_id,
        *_MODE_FLAGS[mode],
    ]


def parse_backend_output(
    stdout: str, mode: RunMode
) -> AutomationSummary | PresetStatusSummary:
    """Validate trimmed stdout against the document type for ``mode``."""
    text = stdout.strip().lstrip("\ufeff")
    if not text:
        raise OutputParseError("Backend produced no output")
    model = PresetStatusSummary if mode.is_status_probe else AutomationSummary
    try:
        return model.model_validate(json.loads(text))
    except (ValueError, RecursionError, ValidationError) as exc:
        raise OutputParseError(
            f"Backend output is not a valid {model.__name__}",
            context={"mode": mode.value},
            cause=exc,
        ) from exc


class AutomationClient:
    """Single-shot runner for the automation backend.

    No retries are attempted: one call is one spawn of the backend.
    """

    def __init__(
        self,
        settings: WGESettings,
        runner_fn: Optional[Callable[..., Any]] = None,
    ) -> None:
        """
        Args:
            settings: Resolved automation paths and timeout.
            runner_fn: Optional ``subprocess.run`` replacement for testing.
        """
        self.settings = settings
        self._runner_fn = runner_fn or subprocess.run

    def resolve_backend(self) -> tuple[Path, Path]:
        """Return (powershell, script) or raise BackendUnavailable."""
        powershell = self.settings.resolved_powershell_path
        if powershell is None or not powershell.is_file():
            raise BackendUnavailable(
                "Unable to locate Windows PowerShell 5.1. "
                "Make sure you run this on Windows 10 or newer.",
                context={"powershell": powershell},
            )
        script = self.settings.script_path
        if not script.is_file():
            raise BackendUnavailable(
                f"Automation script missing: {script}", context={"script": script}
            )
        return powershell, script

    def execute(self, preset_id: str, mode: RunMode) -> RunResult:
        """Run the backend for ``preset_id`` and classify what came back."""
        try:
            powershell, script = self.resolve_backend()
        except BackendUnavailable as exc:
            logger.warning(
                "Automation backend unavailable: %s", exc, extra=error_to_payload(exc)
            )
            return LaunchFailureResult(reason=str(exc), error=exc)

        command = [str(powershell), *build_backend_arguments(script, preset_id, mode)]
        timeout = self.settings.effective_timeout
        logger.info("Running automation backend for preset %s (%s)", preset_id, mode.value)
        logger.debug("Backend command: %s", command)
        try:
            completed = self._runner_fn(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8-sig",
                errors="replace",
                cwd=str(script.parent),
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            logger.error("Automation backend timed out after %ss", timeout)
            return FallbackResult(
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
                exit_code=TIMEOUT_EXIT_CODE,
                parse_error=OutputParseError(
                    f"Backend timed out after {timeout} seconds",
                    context={"timeout": timeout},
                ),
                timed_out=True,
            )
        except OSError as exc:
            error = BackendLaunchError(
                f"Could not start automation backend: {exc}",
                context={"command": command},
                cause=exc,
            )
            logger.error("%s", error, extra=error_to_payload(error))
            return LaunchFailureResult(reason=str(error), error=error)

        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        exit_code = completed.returncode
        try:
            summary = parse_backend_output(stdout, mode)
        except OutputParseError as exc:
            logger.info(
                "Falling back to raw backend output: %s", exc, extra=error_to_payload(exc)
            )
            return FallbackResult(
                stdout=stdout, stderr=stderr, exit_code=exit_code, parse_error=exc
            )
        return StructuredResult(
            summary=summary, stdout=stdout, stderr=stderr, exit_code=exit_code
        )


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8-sig", errors="replace")
    return value
