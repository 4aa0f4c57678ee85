from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from wge_app.api import (
    AutomationClient,
    DoctorService,
    ManifestStore,
    PresetOrchestrator,
    SettingsRepository,
    WGESettings,
)
from wge_common.api import configure_logging
from wge_ui.tui.adapters.hooks_adapter import UIHooksAdapter
from wge_ui.tui.system.facade import TUI
from wge_ui.tui.system.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False
    settings_path: Optional[Path] = None
    automation_root: Optional[Path] = None
    runner_fn: Optional[Callable[..., Any]] = None  # subprocess.run replacement for tests

    # Lazily initialized services
    _ui: Optional[UI] = None
    _settings: Optional[WGESettings] = None
    _store: Optional[ManifestStore] = None
    _orchestrator: Optional[PresetOrchestrator] = None
    _doctor_service: Optional[DoctorService] = None
    _hooks: Optional[UIHooksAdapter] = None
    _ui_injected: bool = False

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from wge_ui.tui.system.headless import HeadlessUI
                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value
        self._ui_injected = True
        self._hooks = None

    @property
    def settings(self) -> WGESettings:
        if self._settings is None:
            settings = SettingsRepository().load(self.settings_path)
            if self.automation_root is not None:
                settings = settings.model_copy(update={"automation_root": self.automation_root})
            self._settings = settings
        return self._settings

    @settings.setter
    def settings(self, value: WGESettings):
        self._settings = value

    @property
    def store(self) -> ManifestStore:
        if self._store is None:
            self._store = ManifestStore(self.settings.resolved_manifest_dir)
        return self._store

    @store.setter
    def store(self, value: ManifestStore):
        self._store = value

    @property
    def hooks(self) -> UIHooksAdapter:
        if self._hooks is None:
            self._hooks = UIHooksAdapter(self.ui)
        return self._hooks

    @property
    def orchestrator(self) -> PresetOrchestrator:
        if self._orchestrator is None:
            orchestrator = PresetOrchestrator(self.store, AutomationClient(self.settings, runner_fn=self.runner_fn))
            orchestrator.subscribe(self.hooks)
            self._orchestrator = orchestrator
        return self._orchestrator

    @orchestrator.setter
    def orchestrator(self, value: PresetOrchestrator):
        value.subscribe(self.hooks)
        self._orchestrator = value

    @property
    def doctor_service(self) -> DoctorService:
        if self._doctor_service is None:
            self._doctor_service = DoctorService(self.settings, store=self.store)
        return self._doctor_service

    @doctor_service.setter
    def doctor_service(self, value: DoctorService):
        self._doctor_service = value

    def reset(self) -> None:
        """Drop cached services so new CLI options take effect.

        A UI assigned through the ``ui`` setter is kept; a lazily built one
        is rebuilt so a changed ``headless`` flag applies.
        """
        if not self._ui_injected:
            self._ui = None
        self._hooks = None
        self._settings = None
        self._store = None
        self._orchestrator = None
        self._doctor_service = None


__all__ = [
    "UIContext",
    "configure_logging",
]
