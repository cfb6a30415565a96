"""Shared state for bridge services."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from iconbox.library.service import LibraryService

from .utils.folder_picker import FolderPicker, WebviewFolderPicker


@dataclass
class BridgeState:
    """Shared state across bridge services."""

    library: LibraryService | None = None
    window: object = None
    picker: FolderPicker = field(default_factory=WebviewFolderPicker)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def get_library(self) -> LibraryService:
        """The library service, opened on first use."""
        with self._lock:
            if self.library is None:
                self.library = LibraryService()
            return self.library
