"""JSON persistence for the library snapshot and display settings.
Files live in the configured data directory:
    library.json   collections + icons (SVG markup stored as text)
    settings.json  display settings as a string key/value map
    library.lock   cross-process write lock
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout
from pydantic import ValidationError

from iconbox.constants import LIBRARY_FILE_NAME, LOCK_FILE_NAME, SETTINGS_FILE_NAME
from iconbox.exceptions import StorageError
from iconbox.utils.file_utils import read_json, write_atomically, write_model

from .models import LibraryIndex, LibrarySnapshot

logger = logging.getLogger(__name__)
LOCK_TIMEOUT_SECONDS = 10.0


class LibraryStorage:
    """Load and save the library documents under one data directory."""

    def __init__(self, data_dir: Path):
        self._dir = Path(data_dir)
        self._file_lock: FileLock | None = None

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def library_path(self) -> Path:
        return self._dir / LIBRARY_FILE_NAME

    @property
    def settings_path(self) -> Path:
        return self._dir / SETTINGS_FILE_NAME

    @property
    def lock_path(self) -> Path:
        return self._dir / LOCK_FILE_NAME

    def _lock(self) -> FileLock:
        self._dir.mkdir(parents=True, exist_ok=True)
        if self._file_lock is None:
            self._file_lock = FileLock(self.lock_path, timeout=LOCK_TIMEOUT_SECONDS)
        return self._file_lock

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the cross-process lock. Re-entrant within a thread, so saves inside it
        do not block. Raises StorageError if another process holds it too long."""
        try:
            lock = self._lock()
            lock.acquire()
        except Timeout as e:
            raise StorageError("Library is locked by another process", details=str(e))
        try:
            yield
        finally:
            lock.release()

    def library_stamp(self) -> tuple[int, int, int] | None:
        """Identity of library.json on disk, None when it does not exist.
        Every save replaces the file, so any write by anyone changes the stamp."""
        try:
            st = self.library_path.stat()
        except FileNotFoundError:
            return None
        return (st.st_ino, st.st_mtime_ns, st.st_size)

    # Library document
    def load_snapshot(self) -> LibrarySnapshot:
        """Load the library, returning an empty one if missing or unreadable.
        An unreadable file is moved aside first so the next save cannot destroy it."""
        p = self.library_path
        try:
            data = read_json(p)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._quarantine(p, e)
            return LibrarySnapshot()
        except OSError as e:
            raise StorageError(f"Cannot read {p.name}", details=str(e))
        if data is None:
            logger.debug("No library at %s, starting empty", p)
            return LibrarySnapshot()
        try:
            idx = LibraryIndex.model_validate(data)
        except ValidationError as e:
            self._quarantine(p, e)
            return LibrarySnapshot()
        logger.debug(
            "Loaded library with %d collections and %d icons", len(idx.collections), len(idx.icons)
        )
        return LibrarySnapshot.from_index(idx)

    def save_snapshot(self, snapshot: LibrarySnapshot) -> None:
        """Persist a snapshot atomically. Raises StorageError on failure."""
        try:
            with self.locked():
                write_model(self.library_path, snapshot.to_index())
        except StorageError:
            raise
        except OSError as e:
            raise StorageError("Failed to save library", details=str(e))
        logger.debug(
            "Saved library with %d collections and %d icons",
            len(snapshot.collections),
            len(snapshot.icons),
        )

    def _quarantine(self, p: Path, err: Exception) -> None:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        bad = p.with_name(f"{p.name}.corrupt-{ts}")
        logger.error("Unreadable library file %s (%s), moved to %s", p, err, bad.name)
        try:
            p.replace(bad)
        except OSError as e:
            raise StorageError(f"Cannot move aside unreadable {p.name}", details=str(e))

    # Settings document
    def load_settings(self) -> dict[str, str]:
        p = self.settings_path
        try:
            data = read_json(p)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Invalid settings file, using defaults: %s", e)
            return {}
        except OSError as e:
            raise StorageError(f"Cannot read {p.name}", details=str(e))
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def save_settings(self, values: dict[str, str]) -> None:
        try:
            with self.locked():
                write_atomically(self.settings_path, json.dumps(values, indent=2, sort_keys=True))
        except StorageError:
            raise
        except OSError as e:
            raise StorageError("Failed to save settings", details=str(e))
