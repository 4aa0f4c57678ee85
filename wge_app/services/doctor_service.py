"""
Service for checking that the automation backend can be used (doctor).
"""

import importlib
import platform
from typing import List, Optional, Tuple

from wge_app.services.doctor_types import DoctorCheckGroup, DoctorCheckItem, DoctorReport
from wge_app.services.manifest_store import ManifestStore
from wge_app.services.settings import WGESettings

PYTHON_DEPENDENCIES = ("pydantic", "structlog", "typer", "rich")


class DoctorService:
    """Check local prerequisites for running presets."""

    def __init__(
        self,
        settings: WGESettings,
        store: Optional[ManifestStore] = None,
    ):
        self.settings = settings
        self.store = store or ManifestStore(settings.resolved_manifest_dir)

    def _check_import(self, name: str) -> bool:
        try:
            importlib.import_module(name)
            return True
        except ImportError:
            return False

    @staticmethod
    def _build_check_group(
        title: str, items: List[Tuple[str, bool, bool]]
    ) -> DoctorCheckGroup:
        return DoctorCheckGroup(
            title, [DoctorCheckItem(label, ok, required) for label, ok, required in items]
        )

    def check_backend(self) -> DoctorReport:
        """Check the PowerShell executable and automation script."""
        powershell = self.settings.resolved_powershell_path
        script = self.settings.script_path
        group = self._build_check_group(
            "Automation Backend",
            [
                (
                    f"PowerShell ({powershell or 'not found'})",
                    powershell is not None and powershell.is_file(),
                    True,
                ),
                (f"Automation script ({script})", script.is_file(), True),
            ],
        )
        timeout = self.settings.effective_timeout
        info = [
            "Backend timeout: "
            + (f"{timeout:g}s" if timeout else "disabled (waits indefinitely)")
        ]
        return DoctorReport(groups=[group], info_messages=info)

    def check_manifests(self) -> DoctorReport:
        """Check the manifest directory and how many manifests load."""
        directory = self.settings.resolved_manifest_dir
        presets = self.store.load_all(directory)
        errors = self.store.last_report.errors if self.store.last_report else []
        group = self._build_check_group(
            "Preset Manifests",
            [
                (f"Manifest directory ({directory})", directory.is_dir(), True),
                (f"Loadable manifests: {len(presets)}", bool(presets), True),
                (f"Skipped manifests: {len(errors)}", not errors, False),
            ],
        )
        return DoctorReport(groups=[group], info_messages=[str(error) for error in errors])

    def check_python(self) -> DoctorReport:
        """Check Python dependencies."""
        group = self._build_check_group(
            "Python Dependencies",
            [(name, self._check_import(name), True) for name in PYTHON_DEPENDENCIES],
        )
        info = (
            f"Python: {platform.python_version()} ({platform.python_implementation()}) "
            f"on {platform.system()} {platform.release()}"
        )
        return DoctorReport(groups=[group], info_messages=[info])

    def check_all(self) -> DoctorReport:
        """Run all checks."""
        return DoctorReport.merge(
            [self.check_python(), self.check_backend(), self.check_manifests()]
        )
