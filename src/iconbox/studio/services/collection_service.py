"""Collection management and import service."""

from __future__ import annotations

from pathlib import Path

from iconbox.config.logging import get_logger
from iconbox.library.models import Collection, Icon

from ..state import BridgeState
from ..utils.decorators import bridge_command

logger = get_logger(__name__)


class CollectionService:
    """Collection CRUD plus folder and file imports."""

    def __init__(self, state: BridgeState):
        self._state = state

    @bridge_command
    def get_collections(self) -> list[Collection]:
        return self._state.get_library().get_collections()

    @bridge_command
    def get_collection_path(self, collection_id: str) -> list[Collection]:
        return self._state.get_library().get_collection_path(collection_id)

    @bridge_command
    def create_collection(self, name: str, parent_id: str | None = None) -> Collection:
        return self._state.get_library().create_collection(name, parent_id)

    @bridge_command
    def rename_collection(self, collection_id: str, new_name: str) -> None:
        self._state.get_library().rename_collection(collection_id, new_name)

    @bridge_command
    def move_collection(self, collection_id: str, new_parent_id: str | None = None) -> None:
        self._state.get_library().move_collection(collection_id, new_parent_id)

    @bridge_command
    def delete_collection(self, collection_id: str) -> None:
        self._state.get_library().delete_collection(collection_id)

    @bridge_command
    def import_folder(
        self, parent_id: str | None = None, path: str | None = None
    ) -> Collection | None:
        """Import a folder chosen in the native dialog (or given as path).
        Returns None when the user dismisses the dialog."""
        folder = Path(path) if path else self._state.picker.pick_folder(self._state.window)
        if folder is None:
            logger.debug("Folder import dismissed")
            return None
        return self._state.get_library().import_folder(folder, parent_id)

    @bridge_command
    def import_icons(self, collection_id: str, paths: list[str]) -> list[Icon]:
        return self._state.get_library().import_icons(collection_id, paths)

    @bridge_command
    def cancel_import(self) -> int:
        return self._state.get_library().cancel_imports()
