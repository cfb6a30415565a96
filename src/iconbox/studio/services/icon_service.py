"""Icon listing, search and per-icon edits."""

from __future__ import annotations

from typing import Any

from iconbox.library.models import Icon

from ..state import BridgeState
from ..utils.decorators import bridge_command


class IconService:
    def __init__(self, state: BridgeState):
        self._state = state

    @bridge_command
    def get_all_icons(self) -> list[Icon]:
        return self._state.get_library().get_all_icons()

    @bridge_command
    def get_favorite_icons(self) -> list[Icon]:
        return self._state.get_library().get_favorite_icons()

    @bridge_command
    def get_icons(self, collection_id: str) -> list[Icon]:
        return self._state.get_library().get_icons(collection_id)

    @bridge_command
    def get_view_icons(
        self, view: dict[str, Any] | None = None, query: str | None = None
    ) -> list[Icon]:
        """Icons for ``{"kind": "all"|"favorites"|"collection", "collection_id": ...}``."""
        return self._state.get_library().get_view_icons(view, query)

    @bridge_command
    def get_total_icon_count(self) -> int:
        return self._state.get_library().get_total_icon_count()

    @bridge_command
    def get_favorite_count(self) -> int:
        return self._state.get_library().get_favorite_count()

    @bridge_command
    def toggle_favorite(self, icon_id: str) -> bool:
        return self._state.get_library().toggle_favorite(icon_id)

    @bridge_command
    def update_icon_tags(self, icon_id: str, tags: list[str]) -> None:
        self._state.get_library().update_icon_tags(icon_id, tags)

    @bridge_command
    def delete_icon(self, icon_id: str) -> None:
        self._state.get_library().delete_icon(icon_id)
