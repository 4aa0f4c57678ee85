"""Settings model and file-system repository for automation paths."""

from __future__ import annotations

import json
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from wge_common.config.env import parse_float_env, parse_path_env
from wge_common.errors import ConfigurationError

DEFAULT_SETTINGS_NAME = "settings.json"
DEFAULT_SCRIPT_NAME = "wge.ps1"
DEFAULT_TIMEOUT_SECONDS = 900.0


def default_powershell_path() -> Path | None:
    """Locate Windows PowerShell 5.1, or a PowerShell on PATH elsewhere."""
    if sys.platform == "win32":
        system_root = os.environ.get("SystemRoot") or os.environ.get("SYSTEMROOT")
        if not system_root:
            return None
        return (
            Path(system_root)
            / "System32"
            / "WindowsPowerShell"
            / "v1.0"
            / "powershell.exe"
        )
    for candidate in ("pwsh", "powershell"):
        found = shutil.which(candidate)
        if found:
            return Path(found)
    return None


class WGESettings(BaseModel):
    """Where the automation backend and preset manifests live."""

    automation_root: Path = Field(
        default_factory=lambda: Path.cwd() / "Automation",
        description="Directory holding the automation script and manifests",
    )
    manifest_dir: Optional[Path] = Field(
        default=None, description="Preset manifest directory (defaults to <root>/manifests)"
    )
    script_name: str = Field(
        default=DEFAULT_SCRIPT_NAME, description="Automation entry-point script name"
    )
    powershell_path: Optional[Path] = Field(
        default=None, description="PowerShell executable (auto-detected when unset)"
    )
    timeout_seconds: Optional[float] = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        ge=0,
        description="Backend wait deadline in seconds; 0 or null waits forever",
    )

    @property
    def resolved_manifest_dir(self) -> Path:
        return self.manifest_dir or self.automation_root / "manifests"

    @property
    def script_path(self) -> Path:
        return self.automation_root / self.script_name

    @property
    def resolved_powershell_path(self) -> Path | None:
        return self.powershell_path or default_powershell_path()

    @property
    def effective_timeout(self) -> float | None:
        return self.timeout_seconds or None


class SettingsRepository:
    """Resolve and persist settings files in the local filesystem."""

    def __init__(self, config_home: Optional[Path] = None) -> None:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        self.config_home = (config_home or base) / "wge"
        self.default_target = self.config_home / DEFAULT_SETTINGS_NAME

    def resolve_settings_path(self, settings_path: Optional[Path]) -> Optional[Path]:
        if settings_path is not None:
            return Path(settings_path).expanduser()
        env_path = parse_path_env(os.environ.get("WGE_SETTINGS_PATH"))
        if env_path is not None:
            return env_path
        if self.default_target.exists():
            return self.default_target
        return None

    def load(self, settings_path: Optional[Path] = None) -> WGESettings:
        """Load settings from disk (if any) and apply environment overrides."""
        path = self.resolve_settings_path(settings_path)
        data: dict = {}
        if path is not None:
            data = self._read(path)
        data.update(self._env_overrides())
        try:
            return WGESettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid settings", context={"path": path}, cause=exc
            ) from exc

    @staticmethod
    def _read(path: Path) -> dict:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot read settings file {path}: {exc}",
                context={"path": path},
                cause=exc,
            ) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(
                f"Settings file {path} must contain a JSON object",
                context={"path": path},
            )
        return payload

    @staticmethod
    def _env_overrides() -> dict:
        overrides: dict = {}
        root = parse_path_env(os.environ.get("WGE_AUTOMATION_ROOT"))
        if root is not None:
            overrides["automation_root"] = root
        manifest_dir = parse_path_env(os.environ.get("WGE_MANIFEST_DIR"))
        if manifest_dir is not None:
            overrides["manifest_dir"] = manifest_dir
        powershell = parse_path_env(os.environ.get("WGE_POWERSHELL"))
        if powershell is not None:
            overrides["powershell_path"] = powershell
        timeout = parse_float_env(os.environ.get("WGE_BACKEND_TIMEOUT"))
        if timeout is not None:
            overrides["timeout_seconds"] = timeout
        return overrides
