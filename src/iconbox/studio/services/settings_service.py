"""Display settings service."""

from __future__ import annotations

from iconbox.library.models import DisplaySettings

from ..state import BridgeState
from ..utils.decorators import bridge_command


class SettingsService:
    def __init__(self, state: BridgeState):
        self._state = state

    @bridge_command
    def get_settings(self) -> DisplaySettings:
        return self._state.get_library().get_settings()

    @bridge_command
    def save_setting(self, key: str, value: str) -> None:
        self._state.get_library().save_setting(key, value)
