"""Load preset manifests from a directory into an in-memory catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from wge_app.models.manifest import ManifestDocument, Preset
from wge_common.errors import ManifestParseError

logger = logging.getLogger(__name__)

MANIFEST_PATTERN = "*.json"


@dataclass
class ManifestLoadReport:
    """Outcome of the last directory scan."""

    directory: Path
    directory_exists: bool = True
    presets: list[Preset] = field(default_factory=list)
    errors: list[ManifestParseError] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.presets


class ManifestStore:
    """Catalog of presets rebuilt wholesale on every load."""

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = directory
        self._presets: list[Preset] = []
        self.last_report: ManifestLoadReport | None = None

    @property
    def presets(self) -> list[Preset]:
        return list(self._presets)

    def load_all(self, directory: Optional[Path] = None) -> list[Preset]:
        """Parse every manifest in ``directory``; bad files are skipped, never raised."""
        target = Path(directory or self.directory or ".")
        report = ManifestLoadReport(directory=target)
        if not target.is_dir():
            logger.warning("Manifest directory not found: %s", target)
            report.directory_exists = False
        else:
            for path in self._manifest_files(target):
                try:
                    report.presets.append(load_manifest(path))
                except ManifestParseError as exc:
                    logger.warning("%s", exc)
                    report.errors.append(exc)
            if report.is_empty:
                logger.info("No manifests found in %s", target)
        self._presets = report.presets
        self.last_report = report
        return self.presets

    def get(self, preset_id: str) -> Preset | None:
        """Find a preset by its file-derived id (case-insensitive)."""
        wanted = preset_id.lower()
        for preset in self._presets:
            if preset.preset_id.lower() == wanted:
                return preset
        return None

    @staticmethod
    def _manifest_files(directory: Path) -> Iterable[Path]:
        return sorted(p for p in directory.glob(MANIFEST_PATTERN) if p.is_file())


def load_manifest(path: Path) -> Preset:
    """Parse one manifest file into a Preset or raise ManifestParseError."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8-sig"))
        document = ManifestDocument.model_validate(payload)
    except (OSError, ValueError, RecursionError, ValidationError) as exc:
        raise ManifestParseError(
            f"Could not parse manifest '{path}': {exc}",
            context={"path": path},
            cause=exc,
        ) from exc
    if document.metadata is None:
        raise ManifestParseError(
            f"Skipping manifest with missing metadata: {path}",
            context={"path": path},
        )
    return Preset.from_document(document, path)
