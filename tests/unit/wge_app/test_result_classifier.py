"""Tests for turning backend entries into result rows."""

from __future__ import annotations

import pytest

from wge_app.models import AutomationEntry
from wge_app.services.result_classifier import NO_COMMANDS_ROW, build_details, classify
from wge_app.viewmodels.rows import ResultRow


pytestmark = pytest.mark.unit_app


def _entry(**payload) -> AutomationEntry:
    return AutomationEntry.model_validate(payload)


def test_empty_run_yields_single_info_row() -> None:
    rows = classify([])

    assert rows == [NO_COMMANDS_ROW]
    assert rows[0].status == "INFO"
    assert "No commands executed" in rows[0].message


def test_failed_entry_falls_back_to_tweak_id() -> None:
    entry = _entry(status="failed", tweakId="t2", target="HKLM:X", message="Set value",
                   errorMessage="access denied", requiresElevation=True)

    assert classify([entry]) == [
        ResultRow(
            status="FAILED",
            display_name="t2",
            target="HKLM:X",
            message="Set value",
            details="error: access denied | needs elevation",
        )
    ]


def test_details_follow_fixed_order() -> None:
    entry = _entry(skipReason="unsupported build", errorMessage="x", requiresReboot=True,
                   requiresElevation=True)

    assert build_details(entry) == (
        "skip: unsupported build | error: x | reboot required | needs elevation"
    )


def test_missing_fields_get_placeholders() -> None:
    row = classify([_entry(tweakName="  ", skipReason="   ")])[0]

    assert row.status == "UNK"
    assert row.display_name == "(unknown)"
    assert row.target == ""
    assert row.details == ""


def test_order_and_name_preference_are_kept() -> None:
    rows = classify([
        _entry(status="ok", tweakName="First", tweakId="a"),
        _entry(status="WhatIf", tweakId="b"),
        _entry(status="skipped", tweakName="Third", skipped=True, skipReason="not needed"),
    ])

    assert [(r.status, r.display_name) for r in rows] == [
        ("OK", "First"),
        ("WHATIF", "b"),
        ("SKIPPED", "Third"),
    ]
    assert rows[2].details == "skip: not needed"
