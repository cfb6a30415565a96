"""Collection forest operations.

Collections live in a flat id -> record mapping. The parent -> children index
is derived on demand and every walk is iterative, so cascading deletes and
cycle checks never recurse through linked nodes.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from functools import cached_property

from iconbox.exceptions import CollectionNotFoundError, InvalidArgumentError

from .models import Collection, LibrarySnapshot

logger = logging.getLogger(__name__)


def clean_name(name: str | None, what: str = "Collection") -> str:
    """Trim a name, rejecting empty results."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidArgumentError(f"{what} name is required")
    return cleaned


def collection_sort_key(c: Collection) -> tuple:
    return (c.name.lower(), c.created_at, c.id)


class CollectionTree:
    """Read and derive-new-snapshot operations over one snapshot's collections."""

    def __init__(self, snapshot: LibrarySnapshot):
        self._snapshot = snapshot

    @property
    def snapshot(self) -> LibrarySnapshot:
        return self._snapshot

    @cached_property
    def _children(self) -> dict[str | None, list[str]]:
        index: dict[str | None, list[str]] = {}
        for c in sorted(self._snapshot.collections.values(), key=collection_sort_key):
            index.setdefault(c.parent_id, []).append(c.id)
        return index

    @cached_property
    def _counts(self) -> Counter:
        return Counter(i.collection_id for i in self._snapshot.icons.values())

    def _with_count(self, c: Collection) -> Collection:
        return c.model_copy(update={"icon_count": self._counts.get(c.id, 0)})

    # Queries
    def exists(self, collection_id: str | None) -> bool:
        return collection_id is not None and collection_id in self._snapshot.collections

    def require(self, collection_id: str) -> Collection:
        """Return the stored record or raise CollectionNotFoundError."""
        c = self._snapshot.collections.get(collection_id)
        if c is None:
            raise CollectionNotFoundError(f"Collection '{collection_id}' not found")
        return c

    def get(self, collection_id: str) -> Collection:
        """Return one collection with a fresh icon_count."""
        return self._with_count(self.require(collection_id))

    def list_all(self) -> list[Collection]:
        """Every collection with a fresh icon_count, sorted by name."""
        cs = sorted(self._snapshot.collections.values(), key=collection_sort_key)
        return [self._with_count(c) for c in cs]

    def children(self, collection_id: str | None = None) -> list[Collection]:
        """Direct children of a collection, or the roots when collection_id is None."""
        if collection_id is not None:
            self.require(collection_id)
        ids = self._children.get(collection_id, [])
        return [self._with_count(self._snapshot.collections[cid]) for cid in ids]

    def descendant_ids(self, collection_id: str) -> list[str]:
        """Ids of every collection below collection_id, breadth first."""
        self.require(collection_id)
        out: list[str] = []
        queue = deque(self._children.get(collection_id, []))
        while queue:
            cid = queue.popleft()
            out.append(cid)
            queue.extend(self._children.get(cid, []))
        return out

    def descendants(self, collection_id: str) -> list[Collection]:
        ids = self.descendant_ids(collection_id)
        return [self._with_count(self._snapshot.collections[cid]) for cid in ids]

    def ancestor_ids(self, collection_id: str) -> list[str]:
        """Ids from the parent up to the root. Stops if the stored chain is already cyclic."""
        c = self.require(collection_id)
        out: list[str] = []
        seen = {c.id}
        pid = c.parent_id
        while pid is not None and pid in self._snapshot.collections and pid not in seen:
            out.append(pid)
            seen.add(pid)
            pid = self._snapshot.collections[pid].parent_id
        return out

    def breadcrumb(self, collection_id: str) -> list[Collection]:
        """Root-first path ending at collection_id."""
        ids = list(reversed(self.ancestor_ids(collection_id))) + [collection_id]
        return [self._with_count(self._snapshot.collections[cid]) for cid in ids]

    def would_create_cycle(self, collection_id: str, new_parent_id: str | None) -> bool:
        """True if making new_parent_id the parent of collection_id closes a loop."""
        if new_parent_id is None:
            return False
        if new_parent_id == collection_id:
            return True
        return collection_id in self.ancestor_ids(new_parent_id)

    # Mutations (each returns a new snapshot; this tree is left unchanged)
    def create(
        self, name: str, parent_id: str | None = None
    ) -> tuple[LibrarySnapshot, Collection]:
        cleaned = clean_name(name)
        if parent_id is not None:
            self.require(parent_id)
        c = Collection(name=cleaned, parent_id=parent_id)
        snap = self._snapshot.evolve(collections=[*self._snapshot.collections.values(), c])
        return snap, c

    def rename(self, collection_id: str, new_name: str) -> tuple[LibrarySnapshot, Collection]:
        cleaned = clean_name(new_name)
        c = self.require(collection_id).model_copy(update={"name": cleaned})
        return self._replace(c), c

    def move(
        self, collection_id: str, new_parent_id: str | None
    ) -> tuple[LibrarySnapshot, Collection]:
        c = self.require(collection_id)
        if new_parent_id is not None:
            self.require(new_parent_id)
        if self.would_create_cycle(collection_id, new_parent_id):
            raise InvalidArgumentError(
                "Cannot move a collection inside itself",
                details=f"{collection_id} -> {new_parent_id}",
            )
        moved = c.model_copy(update={"parent_id": new_parent_id})
        return self._replace(moved), moved

    def delete(self, collection_id: str) -> tuple[LibrarySnapshot, set[str], set[str]]:
        """Remove a collection, its descendants and all their icons.
        Returns:
            (new snapshot, removed collection ids, removed icon ids).
        """
        doomed = {collection_id, *self.descendant_ids(collection_id)}
        kept_cs = [c for c in self._snapshot.collections.values() if c.id not in doomed]
        kept_icons = []
        removed_icons: set[str] = set()
        for i in self._snapshot.icons.values():
            if i.collection_id in doomed:
                removed_icons.add(i.id)
            else:
                kept_icons.append(i)
        return self._snapshot.evolve(collections=kept_cs, icons=kept_icons), doomed, removed_icons

    def _replace(self, c: Collection) -> LibrarySnapshot:
        cs = dict(self._snapshot.collections)
        cs[c.id] = c
        return self._snapshot.evolve(collections=cs.values())


def repair(snapshot: LibrarySnapshot) -> tuple[LibrarySnapshot, list[str]]:
    """Restore the forest and membership invariants of a loaded snapshot.

    Collections whose parent is missing or whose parent chain loops are promoted
    to roots; icons pointing at missing collections are dropped.
    Returns:
        (repaired snapshot, human readable list of fixes).
    """
    fixes: list[str] = []
    cs = dict(snapshot.collections)
    for cid in list(cs):
        c = cs[cid]
        if c.parent_id is not None and c.parent_id not in cs:
            fixes.append(f"collection {cid} had missing parent {c.parent_id}")
            cs[cid] = c.model_copy(update={"parent_id": None})
    for cid in sorted(cs):
        cur = cid
        seen = {cid}
        pid = cs[cid].parent_id
        while pid is not None:
            if pid in seen:
                fixes.append(f"collection {cur} closed a parent cycle")
                cs[cur] = cs[cur].model_copy(update={"parent_id": None})
                break
            seen.add(pid)
            cur = pid
            pid = cs[pid].parent_id
    icons = []
    for i in snapshot.icons.values():
        if i.collection_id in cs:
            icons.append(i)
        else:
            fixes.append(f"icon {i.id} referenced missing collection {i.collection_id}")
    for f in fixes:
        logger.warning("Library repair: %s", f)
    if not fixes:
        return snapshot, fixes
    return LibrarySnapshot.build(cs.values(), icons), fixes
