"""Folder selection for imports."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from iconbox.config.logging import get_logger

logger = get_logger(__name__)


class FolderPicker(Protocol):
    def pick_folder(self, window: object) -> Path | None:
        """Ask the user for a folder. None means the dialog was dismissed."""
        ...


class WebviewFolderPicker:
    """Native folder dialog through the pywebview window."""

    def pick_folder(self, window: object) -> Path | None:
        import webview

        if window is None:
            logger.warning("No window attached, cannot open folder dialog")
            return None
        result = window.create_file_dialog(webview.FOLDER_DIALOG)  # type: ignore[attr-defined]
        if not result:
            return None
        first = result[0] if isinstance(result, (list, tuple)) else result
        return Path(first)
