"""Tagged result types returned by the automation client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from wge_app.models.automation import AutomationSummary, PresetStatusSummary
from wge_common.errors import OutputParseError, WGEError


class RunMode(str, Enum):
    """Request modes understood by the automation backend."""

    APPLY = "apply"
    DRY_RUN = "dry_run"
    REVERT = "revert"
    STATUS = "status"

    @property
    def is_status_probe(self) -> bool:
        return self is RunMode.STATUS

    @property
    def action_label(self) -> str:
        return {
            RunMode.APPLY: "Applying",
            RunMode.DRY_RUN: "Previewing",
            RunMode.REVERT: "Reverting",
            RunMode.STATUS: "Checking",
        }[self]


SummaryT = TypeVar("SummaryT", AutomationSummary, PresetStatusSummary)


@dataclass(frozen=True)
class StructuredResult(Generic[SummaryT]):
    """Backend ran and printed a document matching the expected schema."""

    summary: SummaryT
    stdout: str
    stderr: str
    exit_code: int

    kind = "structured"


@dataclass(frozen=True)
class FallbackResult:
    """Backend ran but its stdout could not be parsed; raw text is kept."""

    stdout: str
    stderr: str
    exit_code: int
    parse_error: OutputParseError | None = None
    timed_out: bool = False

    kind = "fallback"


@dataclass(frozen=True)
class LaunchFailureResult:
    """Backend was never spawned, or could not be spawned."""

    reason: str
    error: WGEError | None = None

    kind = "launch_failure"


RunResult = Union[StructuredResult, FallbackResult, LaunchFailureResult]
