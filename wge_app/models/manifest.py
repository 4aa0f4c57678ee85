"""Preset manifest documents and the in-memory preset catalog entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from wge_app.models._wire import WireModel, drop_null_items


class ManifestMetadata(WireModel):
    """Descriptive header of a preset manifest."""

    id: str = ""
    name: str = ""
    description: str = ""
    default_state: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()

    @field_validator("tags", mode="before")
    @classmethod
    def drop_null_tags(cls, value: Any) -> Any:
        return drop_null_items(value)


class TweakDefinition(WireModel):
    """A single tweak as declared in a manifest."""

    id: str = ""
    name: str = ""
    category: str = ""
    default_behavior: str = ""
    when_disabled: str = ""
    risk_level: str = ""


class ManifestDocument(WireModel):
    """Raw manifest file contents; ``metadata`` is None when absent."""

    metadata: ManifestMetadata | None = None
    tweaks: list[TweakDefinition] = Field(default_factory=list)

    @field_validator("tweaks", mode="before")
    @classmethod
    def drop_null_tweaks(cls, value: Any) -> Any:
        return drop_null_items(value)


@dataclass(frozen=True)
class Preset:
    """A loaded manifest.

    ``preset_id`` is the manifest file's base name and is what the backend
    receives; ``metadata.id`` is only used for display.
    """

    preset_id: str
    metadata: ManifestMetadata
    tweaks: tuple[TweakDefinition, ...] = ()
    file_path: Path | None = None

    @property
    def tweak_count(self) -> int:
        return len(self.tweaks)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def display_name(self) -> str:
        return f"{self.metadata.name} ({self.metadata.id})"

    @classmethod
    def from_document(cls, document: ManifestDocument, path: Path) -> "Preset":
        """Build a preset, defaulting id and name to the file's base name."""
        if document.metadata is None:
            raise ValueError("manifest has no metadata section")
        stem = path.stem
        metadata = document.metadata.model_copy(
            update={
                "id": document.metadata.id or stem,
                "name": document.metadata.name or stem,
            }
        )
        return cls(
            preset_id=stem,
            metadata=metadata,
            tweaks=tuple(document.tweaks),
            file_path=path,
        )
