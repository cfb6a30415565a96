"""Python bridge exposed to JavaScript - thin facade delegating to services.

Every method returns ``{"success", "data", "error", "code"}``.
"""

from __future__ import annotations

from typing import Any

from iconbox.library.service import LibraryService

from .services.collection_service import CollectionService
from .services.icon_service import IconService
from .services.settings_service import SettingsService
from .state import BridgeState
from .utils.folder_picker import FolderPicker


class LibraryBridge:
    """API exposed to the frontend via PyWebView."""

    def __init__(
        self,
        library: LibraryService | None = None,
        picker: FolderPicker | None = None,
    ):
        self._state = BridgeState(library=library)
        if picker is not None:
            self._state.picker = picker
        self._collections = CollectionService(self._state)
        self._icons = IconService(self._state)
        self._settings = SettingsService(self._state)

    def set_window(self, window):
        self._state.window = window

    # ===========================================================================
    # Collections
    # ===========================================================================
    def get_collections(self) -> dict:
        return self._collections.get_collections()

    def get_collection_path(self, collection_id: str) -> dict:
        return self._collections.get_collection_path(collection_id)

    def create_collection(self, name: str, parent_id: str | None = None) -> dict:
        return self._collections.create_collection(name, parent_id)

    def rename_collection(self, collection_id: str, new_name: str) -> dict:
        return self._collections.rename_collection(collection_id, new_name)

    def move_collection(self, collection_id: str, new_parent_id: str | None = None) -> dict:
        return self._collections.move_collection(collection_id, new_parent_id)

    def delete_collection(self, collection_id: str) -> dict:
        return self._collections.delete_collection(collection_id)

    # ===========================================================================
    # Imports
    # ===========================================================================
    def import_folder(self, parent_id: str | None = None, path: str | None = None) -> dict:
        return self._collections.import_folder(parent_id, path)

    def import_icons(self, collection_id: str, paths: list[str]) -> dict:
        return self._collections.import_icons(collection_id, paths)

    def cancel_import(self) -> dict:
        return self._collections.cancel_import()

    # ===========================================================================
    # Icons
    # ===========================================================================
    def get_all_icons(self) -> dict:
        return self._icons.get_all_icons()

    def get_favorite_icons(self) -> dict:
        return self._icons.get_favorite_icons()

    def get_icons(self, collection_id: str) -> dict:
        return self._icons.get_icons(collection_id)

    def get_view_icons(self, view: dict[str, Any] | None = None, query: str | None = None) -> dict:
        return self._icons.get_view_icons(view, query)

    def get_total_icon_count(self) -> dict:
        return self._icons.get_total_icon_count()

    def get_favorite_count(self) -> dict:
        return self._icons.get_favorite_count()

    def toggle_favorite(self, icon_id: str) -> dict:
        return self._icons.toggle_favorite(icon_id)

    def update_icon_tags(self, icon_id: str, tags: list[str]) -> dict:
        return self._icons.update_icon_tags(icon_id, tags)

    def delete_icon(self, icon_id: str) -> dict:
        return self._icons.delete_icon(icon_id)

    # ===========================================================================
    # Settings
    # ===========================================================================
    def get_settings(self) -> dict:
        return self._settings.get_settings()

    def save_setting(self, key: str, value: str) -> dict:
        return self._settings.save_setting(key, value)
