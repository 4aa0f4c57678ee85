"""Documents emitted on stdout by the automation backend."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from wge_app.models._wire import WireModel, drop_null_items


class AutomationCounts(WireModel):
    """Per-run totals; trusted as reported, not cross-checked."""

    total: int = Field(default=0, ge=0)
    succeeded: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    what_if: int = Field(default=0, ge=0)


class AutomationEntry(WireModel):
    """One command outcome from an apply, dry-run or revert."""

    status: str | None = None
    tweak_id: str | None = None
    tweak_name: str | None = None
    command_type: str | None = None
    target: str | None = None
    message: str | None = None
    requires_reboot: bool = False
    requires_elevation: bool = False
    skipped: bool = False
    skip_reason: str | None = None
    error_message: str | None = None


class AutomationSummary(WireModel):
    """Apply/dry-run/revert response document."""

    preset_id: str | None = None
    preset_name: str | None = None
    manifest_path: str | None = None
    dry_run: bool = False
    action_log_path: str | None = None
    counts: AutomationCounts | None = None
    entries: list[AutomationEntry] = Field(default_factory=list)
    message: str | None = None

    @field_validator("entries", mode="before")
    @classmethod
    def drop_null_entries(cls, value: Any) -> Any:
        return drop_null_items(value)


class StatusCheck(WireModel):
    """A single desired-versus-actual comparison."""

    target: str | None = None
    compliant: bool = False
    desired: str | None = None
    actual: str | None = None
    message: str | None = None


class StatusEntry(WireModel):
    """Compliance report for one tweak."""

    tweak_id: str | None = None
    tweak_name: str | None = None
    state: str | None = None
    message: str | None = None
    checks: list[StatusCheck] = Field(default_factory=list)

    @field_validator("checks", mode="before")
    @classmethod
    def drop_null_checks(cls, value: Any) -> Any:
        return drop_null_items(value)


class PresetStatusSummary(WireModel):
    """Status-probe response document."""

    preset_id: str | None = None
    preset_name: str | None = None
    message: str | None = None
    entries: list[StatusEntry] = Field(default_factory=list)

    @field_validator("entries", mode="before")
    @classmethod
    def drop_null_entries(cls, value: Any) -> Any:
        return drop_null_items(value)


class BackendState(str, Enum):
    """States a status probe may report for a tweak."""

    APPLIED = "applied"
    PARTIAL = "partial"
    NOT_APPLIED = "notapplied"
    FAILED = "failed"
    ERROR = "error"
    UNSUPPORTED = "unsupported"
    PENDING = "pending"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "BackendState | None":
        """Return the matching state, or None for missing/unrecognised text."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
