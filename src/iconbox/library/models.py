"""Library data models.

Records are frozen: a change always produces a new record (``model_copy``) and
a new :class:`LibrarySnapshot`, so a published snapshot never changes under a
reader.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from iconbox.constants import (
    COLLECTION_COLORS,
    DEFAULT_ICON_SIZE,
    DEFAULT_THEME,
    LIBRARY_FORMAT_VERSION,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a unique record id."""
    return str(uuid.uuid4())


def random_color() -> str:
    """Pick a display color for a new collection."""
    return random.choice(COLLECTION_COLORS)


class Collection(BaseModel):
    """A named node in the collection forest."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Unique collection id")
    name: str = Field(description="Display name, never empty")
    parent_id: str | None = Field(default=None, description="Parent collection id, None for roots")
    color: str = Field(default_factory=random_color, description="Display hint, opaque to the core")
    created_at: datetime = Field(default_factory=_utcnow, description="When it was created")
    icon_count: int = Field(
        default=0,
        description="Derived number of icons directly in this collection; never persisted",
    )

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class Icon(BaseModel):
    """A single SVG asset record."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Unique icon id")
    name: str = Field(description="Source file stem")
    path: str = Field(default="", description="Origin filesystem path (informational)")
    svg_content: str = Field(description="Raw SVG markup")
    tags: tuple[str, ...] = Field(default=(), description="Unique tags, insertion ordered")
    collection_id: str = Field(description="Owning collection id")
    created_at: datetime = Field(default_factory=_utcnow, description="When it was imported")
    file_size: int = Field(default=0, ge=0, description="Source file size in bytes")
    favorite: bool = Field(default=False, description="Favorite flag")

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class DisplaySettings(BaseModel):
    """Presentation preferences. Passed through to the UI, never interpreted here."""

    theme: str = Field(default=DEFAULT_THEME, description="UI theme name")
    icon_size: int = Field(default=DEFAULT_ICON_SIZE, description="Grid icon size in pixels")
    tint_color: str | None = Field(default=None, description="Icon tint, None for original colors")


class LibraryIndex(BaseModel):
    """On-disk document holding every collection and icon.
    Stored at {data_dir}/library.json"""

    version: str = Field(default=LIBRARY_FORMAT_VERSION, description="Document format version")
    collections: List[Collection] = Field(default_factory=list)
    icons: List[Icon] = Field(default_factory=list)

    @field_serializer("collections")
    def _drop_derived_counts(self, collections: List[Collection]) -> list[dict]:
        return [c.model_dump(mode="json", exclude={"icon_count"}) for c in collections]


def _freeze(records: Iterable) -> Mapping:
    return MappingProxyType({r.id: r for r in records})


@dataclass(frozen=True)
class LibrarySnapshot:
    """An immutable, internally consistent view of the whole library."""

    collections: Mapping[str, Collection] = field(default_factory=lambda: MappingProxyType({}))
    icons: Mapping[str, Icon] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(
        cls, collections: Iterable[Collection] = (), icons: Iterable[Icon] = ()
    ) -> LibrarySnapshot:
        return cls(collections=_freeze(collections), icons=_freeze(icons))

    def evolve(
        self,
        collections: Iterable[Collection] | None = None,
        icons: Iterable[Icon] | None = None,
    ) -> LibrarySnapshot:
        """Return a copy with the given record sets replaced."""
        changes: dict = {}
        if collections is not None:
            changes["collections"] = _freeze(collections)
        if icons is not None:
            changes["icons"] = _freeze(icons)
        return replace(self, **changes)

    def to_index(self) -> LibraryIndex:
        return LibraryIndex(
            collections=list(self.collections.values()), icons=list(self.icons.values())
        )

    @classmethod
    def from_index(cls, index: LibraryIndex) -> LibrarySnapshot:
        return cls.build(index.collections, index.icons)
