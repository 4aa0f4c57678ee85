"""Presentation-facing row records (UI-agnostic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wge_app.models.manifest import Preset, TweakDefinition

NOT_EVALUATED = "Not evaluated yet."


class TweakStatus(str, Enum):
    """Display status of a tweak row."""

    APPLIED = "Applied"
    PARTIAL = "Partial"
    STOCK = "Stock"
    ERROR = "Error"
    SKIPPED = "Skipped"
    PENDING = "Pending"
    UNKNOWN = "Unknown"


@dataclass(eq=False)
class DisplayTweakRow:
    """A tweak plus its mutable display status.

    Rows compare by identity so that in-place status updates keep any
    selection a presentation layer holds on them.
    """

    tweak: TweakDefinition
    status: TweakStatus = TweakStatus.PENDING
    status_details: str = NOT_EVALUATED

    @property
    def id(self) -> str:
        return self.tweak.id

    @property
    def name(self) -> str:
        return self.tweak.name

    @property
    def category(self) -> str:
        return self.tweak.category

    @property
    def default_behavior(self) -> str:
        return self.tweak.default_behavior

    @property
    def when_disabled(self) -> str:
        return self.tweak.when_disabled

    @property
    def risk_level(self) -> str:
        return self.tweak.risk_level


@dataclass(frozen=True)
class ResultRow:
    """One line of an apply/dry-run/revert result view."""

    status: str
    display_name: str
    target: str
    message: str
    details: str = ""


def build_tweak_rows(preset: Preset) -> list[DisplayTweakRow]:
    """Fresh rows for a newly selected preset, all Pending."""
    return [DisplayTweakRow(tweak=tweak) for tweak in preset.tweaks]
