"""Library command surface.

LibraryService is the only writer in a process. Every mutation runs under the
writer lock and the data directory file lock, reloads library.json if another
process saved it meanwhile, derives a new snapshot, persists it and only then
publishes it with a single assignment. Reads use whatever snapshot is published
at the time and take no lock. A failure at any step leaves the published snapshot as it was.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator

from iconbox.config.settings import Settings, get_settings

from .catalog import IconCatalog, build_folder_records, icon_from_file
from .models import Collection, DisplaySettings, Icon, LibrarySnapshot
from .scanner import check_cancelled, read_svgs, scan_folder
from .search import filter_icons
from .settings_store import SettingsStore
from .storage import LibraryStorage
from .tree import CollectionTree, repair
from .views import View, resolve

logger = logging.getLogger(__name__)


class LibraryService:
    """Collections, icons and display settings for one data directory."""

    def __init__(self, storage: LibraryStorage | None = None, config: Settings | None = None):
        self._config = config or get_settings()
        self._storage = storage or LibraryStorage(self._config.data_dir)
        self._write_lock = threading.Lock()
        self._snapshot: LibrarySnapshot | None = None
        self._stamp: tuple[int, int, int] | None = None
        with self._storage.locked():
            self._sync()
        self._settings = SettingsStore(self._storage, strict=self._config.strict_settings)
        self._imports: set[threading.Event] = set()
        self._imports_lock = threading.Lock()

    @property
    def storage(self) -> LibraryStorage:
        return self._storage

    @property
    def snapshot(self) -> LibrarySnapshot:
        """The latest published snapshot."""
        return self._snapshot

    def _sync(self) -> None:
        """Load library.json unless it is unchanged since our last load or save.
        Caller must hold the file lock."""
        if self._snapshot is not None and self._storage.library_stamp() == self._stamp:
            return
        snapshot, fixes = repair(self._storage.load_snapshot())
        if fixes:
            self._storage.save_snapshot(snapshot)
        if self._snapshot is not None:
            logger.debug("Library changed on disk, reloaded")
        self._snapshot = snapshot
        self._stamp = self._storage.library_stamp()

    @contextmanager
    def _writing(self) -> Iterator[LibrarySnapshot]:
        """Hold the writer lock and the file lock, yielding the latest state on disk.
        Another process may have saved since our last commit."""
        with self._write_lock, self._storage.locked():
            self._sync()
            yield self._snapshot

    def _commit(self, snapshot: LibrarySnapshot) -> None:
        """Persist then publish. Caller must be inside _writing()."""
        self._storage.save_snapshot(snapshot)
        self._stamp = self._storage.library_stamp()
        self._snapshot = snapshot

    # Collections
    def get_collections(self) -> list[Collection]:
        return CollectionTree(self._snapshot).list_all()

    def get_collection(self, collection_id: str) -> Collection:
        return CollectionTree(self._snapshot).get(collection_id)

    def get_collection_path(self, collection_id: str) -> list[Collection]:
        """Breadcrumb from the root down to collection_id."""
        return CollectionTree(self._snapshot).breadcrumb(collection_id)

    def create_collection(self, name: str, parent_id: str | None = None) -> Collection:
        with self._writing() as current:
            snapshot, c = CollectionTree(current).create(name, parent_id)
            self._commit(snapshot)
        logger.info("Created collection %s (%s)", c.name, c.id)
        return c

    def rename_collection(self, collection_id: str, new_name: str) -> Collection:
        with self._writing() as current:
            snapshot, c = CollectionTree(current).rename(collection_id, new_name)
            self._commit(snapshot)
        logger.info("Renamed collection %s to %s", collection_id, c.name)
        return CollectionTree(snapshot).get(collection_id)

    def move_collection(self, collection_id: str, new_parent_id: str | None = None) -> Collection:
        with self._writing() as current:
            snapshot, _ = CollectionTree(current).move(collection_id, new_parent_id)
            self._commit(snapshot)
        logger.info("Moved collection %s under %s", collection_id, new_parent_id or "(root)")
        return CollectionTree(snapshot).get(collection_id)

    def delete_collection(self, collection_id: str) -> None:
        with self._writing() as current:
            snapshot, cids, icon_ids = CollectionTree(current).delete(collection_id)
            self._commit(snapshot)
        logger.info(
            "Deleted collection %s with %d collections and %d icons",
            collection_id,
            len(cids),
            len(icon_ids),
        )

    # Icons
    def get_all_icons(self) -> list[Icon]:
        return IconCatalog(self._snapshot).all_icons()

    def get_favorite_icons(self) -> list[Icon]:
        return IconCatalog(self._snapshot).favorite_icons()

    def get_icons(self, collection_id: str) -> list[Icon]:
        return IconCatalog(self._snapshot).icons_by_collection(collection_id)

    def get_icon(self, icon_id: str) -> Icon:
        return IconCatalog(self._snapshot).require(icon_id)

    def get_view_icons(
        self, view: View | dict[str, Any] | None = None, query: str | None = None
    ) -> list[Icon]:
        """Icons for a view, narrowed by a search query."""
        v = view if isinstance(view, View) else View.from_dict(view)
        return list(filter_icons(resolve(self._snapshot, v), query))

    def get_total_icon_count(self) -> int:
        return IconCatalog(self._snapshot).total_count()

    def get_favorite_count(self) -> int:
        return IconCatalog(self._snapshot).favorite_count()

    def toggle_favorite(self, icon_id: str) -> bool:
        """Flip an icon's favorite flag. Returns the new value."""
        with self._writing() as current:
            snapshot, icon = IconCatalog(current).toggle_favorite(icon_id)
            self._commit(snapshot)
        logger.info("Icon %s favorite=%s", icon_id, icon.favorite)
        return icon.favorite

    def update_icon_tags(self, icon_id: str, tags: Iterable[str]) -> Icon:
        with self._writing() as current:
            snapshot, icon = IconCatalog(current).update_tags(icon_id, tags)
            self._commit(snapshot)
        logger.info("Icon %s tags=%s", icon_id, list(icon.tags))
        return icon

    def delete_icon(self, icon_id: str) -> None:
        with self._writing() as current:
            snapshot, icon = IconCatalog(current).delete(icon_id)
            self._commit(snapshot)
        logger.info("Deleted icon %s (%s)", icon.name, icon_id)

    # Imports
    @contextmanager
    def _import_job(self, cancel: threading.Event | None) -> Iterator[threading.Event]:
        ev = cancel or threading.Event()
        with self._imports_lock:
            self._imports.add(ev)
        try:
            yield ev
        finally:
            with self._imports_lock:
                self._imports.discard(ev)

    def cancel_imports(self) -> int:
        """Signal every running import to stop before it commits. Returns how many were running."""
        with self._imports_lock:
            running = list(self._imports)
        for ev in running:
            ev.set()
        if running:
            logger.info("Cancelling %d running import(s)", len(running))
        return len(running)

    def import_folder(
        self,
        path: Path | str,
        parent_id: str | None = None,
        cancel: threading.Event | None = None,
    ) -> Collection:
        """Import a folder of SVGs as a new collection (under parent_id if given).

        The folder is scanned and read without holding the writer lock; the
        resulting collections and icons are committed in one step.
        Raises:
            CollectionNotFoundError: parent_id does not exist (checked again at commit).
            LibraryIOError: A file or folder could not be read. Nothing is imported.
            ImportCancelledError: Cancelled before the commit. Nothing is imported.
        """
        if parent_id is not None:
            with self._writing() as current:
                CollectionTree(current).require(parent_id)
        with self._import_job(cancel) as ev:
            folder = scan_folder(path, subfolders=self._config.import_subfolders, cancel=ev)
            root, collections, icons = build_folder_records(folder, parent_id)
            with self._writing() as current:
                check_cancelled(ev)
                snapshot = IconCatalog(current).import_batch(collections, icons)
                self._commit(snapshot)
        logger.info(
            "Imported %s: %d collections, %d icons", folder.path, len(collections), len(icons)
        )
        return CollectionTree(snapshot).get(root.id)

    def import_icons(
        self,
        collection_id: str,
        paths: Iterable[Path | str],
        cancel: threading.Event | None = None,
    ) -> list[Icon]:
        """Import specific SVG files into an existing collection, all or nothing."""
        with self._writing() as current:
            CollectionTree(current).require(collection_id)
        with self._import_job(cancel) as ev:
            files = read_svgs(paths, cancel=ev)
            icons = [icon_from_file(f, collection_id) for f in files]
            with self._writing() as current:
                check_cancelled(ev)
                snapshot = IconCatalog(current).import_batch([], icons)
                self._commit(snapshot)
        logger.info("Imported %d icons into %s", len(icons), collection_id)
        return icons

    # Settings
    def get_settings(self) -> DisplaySettings:
        return self._settings.get()

    def save_setting(self, key: str, value: str) -> DisplaySettings:
        with self._write_lock:
            return self._settings.set(key, value)
