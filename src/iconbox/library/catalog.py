"""Icon records: membership, favorite/tag state and catalog queries."""

from __future__ import annotations

from typing import Iterable

from iconbox.exceptions import CollectionNotFoundError, IconNotFoundError

from .models import Collection, Icon, LibrarySnapshot
from .scanner import ScannedFile, ScannedFolder
from .tree import CollectionTree


def normalize_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Trim tags, drop empties and duplicates (case-sensitive, first one wins)."""
    out: list[str] = []
    seen: set[str] = set()
    for t in tags or ():
        s = str(t).strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return tuple(out)


def icon_sort_key(i: Icon) -> tuple:
    return (i.name.lower(), i.created_at, i.id)


def icon_from_file(f: ScannedFile, collection_id: str) -> Icon:
    return Icon(
        name=f.name,
        path=str(f.path),
        svg_content=f.content,
        collection_id=collection_id,
        file_size=f.size,
    )


def build_folder_records(
    folder: ScannedFolder, parent_id: str | None = None
) -> tuple[Collection, list[Collection], list[Icon]]:
    """Turn a scanned folder tree into new collection and icon records.
    Returns:
        (root collection, all new collections root first, all new icons).
    """
    collections: list[Collection] = []
    icons: list[Icon] = []
    stack: list[tuple[ScannedFolder, str | None]] = [(folder, parent_id)]
    while stack:
        node, pid = stack.pop()
        c = Collection(name=node.name.strip() or "Imported", parent_id=pid)
        collections.append(c)
        icons.extend(icon_from_file(f, c.id) for f in node.files)
        stack.extend((s, c.id) for s in reversed(node.subfolders))
    return collections[0], collections, icons


class IconCatalog:
    """Queries and derive-new-snapshot operations over one snapshot's icons."""

    def __init__(self, snapshot: LibrarySnapshot):
        self._snapshot = snapshot
        self._tree = CollectionTree(snapshot)

    def _sorted(self, icons: Iterable[Icon]) -> list[Icon]:
        return sorted(icons, key=icon_sort_key)

    # Queries
    def require(self, icon_id: str) -> Icon:
        i = self._snapshot.icons.get(icon_id)
        if i is None:
            raise IconNotFoundError(f"Icon '{icon_id}' not found")
        return i

    def all_icons(self) -> list[Icon]:
        return self._sorted(self._snapshot.icons.values())

    def favorite_icons(self) -> list[Icon]:
        return self._sorted(i for i in self._snapshot.icons.values() if i.favorite)

    def icons_by_collection(self, collection_id: str) -> list[Icon]:
        """Icons directly in a collection (descendants are not included)."""
        self._tree.require(collection_id)
        return self._sorted(
            i for i in self._snapshot.icons.values() if i.collection_id == collection_id
        )

    def total_count(self) -> int:
        return len(self._snapshot.icons)

    def favorite_count(self) -> int:
        return sum(1 for i in self._snapshot.icons.values() if i.favorite)

    # Mutations
    def import_batch(
        self, collections: Iterable[Collection], icons: Iterable[Icon]
    ) -> LibrarySnapshot:
        """Add new collections and icons in one step.
        Every reference must resolve to an existing or a newly added collection.
        Raises:
            CollectionNotFoundError: A parent or owning collection is missing.
        """
        new_cs = list(collections)
        new_icons = list(icons)
        known = set(self._snapshot.collections) | {c.id for c in new_cs}
        missing = [c.parent_id for c in new_cs if c.parent_id and c.parent_id not in known]
        missing += [i.collection_id for i in new_icons if i.collection_id not in known]
        if missing:
            raise CollectionNotFoundError(f"Collection '{missing[0]}' not found")
        return self._snapshot.evolve(
            collections=[*self._snapshot.collections.values(), *new_cs],
            icons=[*self._snapshot.icons.values(), *new_icons],
        )

    def toggle_favorite(self, icon_id: str) -> tuple[LibrarySnapshot, Icon]:
        i = self.require(icon_id)
        updated = i.model_copy(update={"favorite": not i.favorite})
        return self._replace(updated), updated

    def update_tags(self, icon_id: str, tags: Iterable[str]) -> tuple[LibrarySnapshot, Icon]:
        i = self.require(icon_id)
        updated = i.model_copy(update={"tags": normalize_tags(tags)})
        return self._replace(updated), updated

    def delete(self, icon_id: str) -> tuple[LibrarySnapshot, Icon]:
        i = self.require(icon_id)
        kept = [x for x in self._snapshot.icons.values() if x.id != icon_id]
        return self._snapshot.evolve(icons=kept), i

    def _replace(self, icon: Icon) -> LibrarySnapshot:
        icons = dict(self._snapshot.icons)
        icons[icon.id] = icon
        return self._snapshot.evolve(icons=icons.values())
