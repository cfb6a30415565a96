"""View selection: which icon set the consumer is looking at."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from iconbox.exceptions import InvalidArgumentError

from .catalog import IconCatalog
from .models import Icon, LibrarySnapshot


class ViewKind(str, Enum):
    """Top-level filters over the catalog."""

    ALL = "all"
    FAVORITES = "favorites"
    COLLECTION = "collection"


@dataclass(frozen=True)
class View:
    kind: ViewKind = ViewKind.ALL
    collection_id: str | None = None

    def __post_init__(self):
        if self.kind is ViewKind.COLLECTION and not self.collection_id:
            raise InvalidArgumentError("A collection view needs a collection id")

    @classmethod
    def all(cls) -> View:
        return cls(ViewKind.ALL)

    @classmethod
    def favorites(cls) -> View:
        return cls(ViewKind.FAVORITES)

    @classmethod
    def collection(cls, collection_id: str) -> View:
        return cls(ViewKind.COLLECTION, collection_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> View:
        """Parse ``{"kind": ..., "collection_id": ...}``; None means all icons."""
        if not data:
            return cls.all()
        raw = data.get("kind", ViewKind.ALL.value)
        try:
            kind = ViewKind(raw)
        except ValueError:
            raise InvalidArgumentError(f"Unknown view kind: {raw}")
        return cls(kind, data.get("collection_id") or data.get("collectionId"))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "collection_id": self.collection_id}


def resolve(snapshot: LibrarySnapshot, view: View) -> list[Icon]:
    """Return the icon set for a view from one snapshot."""
    catalog = IconCatalog(snapshot)
    if view.kind is ViewKind.FAVORITES:
        return catalog.favorite_icons()
    if view.kind is ViewKind.COLLECTION:
        return catalog.icons_by_collection(view.collection_id)  # type: ignore[arg-type]
    return catalog.all_icons()
