"""UI-agnostic viewmodel helpers for presentation layers."""

from wge_app.viewmodels.presets import (
    ActivityLog,
    format_log_line,
    preset_meta_line,
    preset_rows,
    preset_tags_label,
    result_rows,
    tweak_rows,
)
from wge_app.viewmodels.rows import (
    DisplayTweakRow,
    ResultRow,
    TweakStatus,
    build_tweak_rows,
)

__all__ = [
    "ActivityLog",
    "DisplayTweakRow",
    "ResultRow",
    "TweakStatus",
    "build_tweak_rows",
    "format_log_line",
    "preset_meta_line",
    "preset_rows",
    "preset_tags_label",
    "result_rows",
    "tweak_rows",
]
