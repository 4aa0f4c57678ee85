"""Invocation state machine owned by the orchestrator."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class OrchestratorState(str, Enum):
    """Per-invocation lifecycle states."""

    IDLE = "idle"
    RUNNING = "running"
    REPORTED = "reported"


_ALLOWED_TRANSITIONS = {
    OrchestratorState.IDLE: {OrchestratorState.RUNNING},
    OrchestratorState.RUNNING: {OrchestratorState.REPORTED},
    OrchestratorState.REPORTED: {OrchestratorState.IDLE},
}


class RunStateMachine:
    """Thread-safe invocation state tracker.

    ``reason`` holds the mode while running and the outcome kind
    (structured, fallback, launch_failure) once reported.
    """

    def __init__(self) -> None:
        self._state = OrchestratorState.IDLE
        self._lock = threading.RLock()
        self._reason: Optional[str] = None
        self._callbacks: list[Callable[[OrchestratorState, Optional[str]], None]] = []

    @property
    def state(self) -> OrchestratorState:
        with self._lock:
            return self._state

    @property
    def reason(self) -> Optional[str]:
        with self._lock:
            return self._reason

    def register_callback(
        self, callback: Callable[[OrchestratorState, Optional[str]], None]
    ) -> None:
        """Register a callback invoked on every transition."""
        self._callbacks.append(callback)

    def transition(
        self, new_state: OrchestratorState, reason: Optional[str] = None
    ) -> OrchestratorState:
        """Attempt a state transition; raise ValueError if invalid."""
        with self._lock:
            allowed = _ALLOWED_TRANSITIONS.get(self._state, set())
            if new_state not in allowed:
                raise ValueError(f"Invalid transition {self._state} -> {new_state}")
            self._state = new_state
            self._reason = reason
            for cb in list(self._callbacks):
                try:
                    cb(self._state, self._reason)
                except Exception as exc:
                    logger.debug("State callback failed: %s", exc)
            return self._state
