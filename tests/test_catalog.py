"""Tests for icon catalog queries and edits."""

from __future__ import annotations

from pathlib import Path

import pytest

from iconbox.exceptions import CollectionNotFoundError, IconNotFoundError
from iconbox.library.catalog import (
    IconCatalog,
    build_folder_records,
    icon_from_file,
    normalize_tags,
)
from iconbox.library.models import Collection, Icon, LibrarySnapshot
from iconbox.library.scanner import ScannedFile, ScannedFolder


@pytest.fixture
def catalog() -> IconCatalog:
    cs = [Collection(id="c1", name="One"), Collection(id="c2", name="Two")]
    icons = [
        Icon(id="i1", name="bell", svg_content="<svg/>", collection_id="c1"),
        Icon(id="i2", name="Arrow", svg_content="<svg/>", collection_id="c1", favorite=True),
        Icon(id="i3", name="camera", svg_content="<svg/>", collection_id="c2"),
    ]
    return IconCatalog(LibrarySnapshot.build(cs, icons))


def _file(name: str) -> ScannedFile:
    return ScannedFile(path=Path(f"/x/{name}.svg"), name=name, content="<svg/>", size=6)


class TestNormalizeTags:
    def test_trims_and_dedupes(self):
        assert normalize_tags([" ui ", "ui", "", "  ", "Nav", "nav"]) == ("ui", "Nav", "nav")

    def test_none_is_empty(self):
        assert normalize_tags(None) == ()


class TestQueries:
    def test_all_icons_sorted_by_name(self, catalog: IconCatalog):
        assert [i.name for i in catalog.all_icons()] == ["Arrow", "bell", "camera"]

    def test_favorites(self, catalog: IconCatalog):
        assert [i.id for i in catalog.favorite_icons()] == ["i2"]
        assert catalog.favorite_count() == 1

    def test_by_collection(self, catalog: IconCatalog):
        assert [i.id for i in catalog.icons_by_collection("c1")] == ["i2", "i1"]
        assert catalog.icons_by_collection("c2")[0].id == "i3"

    def test_by_missing_collection(self, catalog: IconCatalog):
        with pytest.raises(CollectionNotFoundError):
            catalog.icons_by_collection("nope")

    def test_total_count(self, catalog: IconCatalog):
        assert catalog.total_count() == len(catalog.all_icons()) == 3

    def test_require_missing(self, catalog: IconCatalog):
        with pytest.raises(IconNotFoundError):
            catalog.require("nope")


class TestEdits:
    def test_toggle_favorite_twice_restores(self, catalog: IconCatalog):
        snap, icon = catalog.toggle_favorite("i1")
        assert icon.favorite is True
        snap2, icon2 = IconCatalog(snap).toggle_favorite("i1")
        assert icon2.favorite is False
        assert snap2.icons["i1"] == catalog.require("i1")

    def test_update_tags_replaces(self, catalog: IconCatalog):
        snap, icon = catalog.update_tags("i1", ["alert", " alert ", "ui"])
        assert icon.tags == ("alert", "ui")
        assert snap.icons["i1"].tags == ("alert", "ui")
        assert catalog.require("i1").tags == ()

    def test_delete(self, catalog: IconCatalog):
        snap, removed = catalog.delete("i3")
        assert removed.id == "i3"
        assert "i3" not in snap.icons
        assert len(snap.icons) == 2

    def test_edit_missing_icon(self, catalog: IconCatalog):
        with pytest.raises(IconNotFoundError):
            catalog.toggle_favorite("nope")
        with pytest.raises(IconNotFoundError):
            catalog.delete("nope")


class TestImportBatch:
    def test_adds_collections_and_icons(self, catalog: IconCatalog):
        new = Collection(name="New", parent_id="c1")
        icons = [icon_from_file(_file("zap"), new.id)]
        snap = catalog.import_batch([new], icons)
        assert new.id in snap.collections
        assert len(snap.icons) == 4

    def test_existing_collection_target(self, catalog: IconCatalog):
        snap = catalog.import_batch([], [icon_from_file(_file("zap"), "c2")])
        assert len(IconCatalog(snap).icons_by_collection("c2")) == 2

    def test_unknown_reference_rejected(self, catalog: IconCatalog):
        with pytest.raises(CollectionNotFoundError):
            catalog.import_batch([], [icon_from_file(_file("zap"), "gone")])
        with pytest.raises(CollectionNotFoundError):
            catalog.import_batch([Collection(name="X", parent_id="gone")], [])


class TestBuildFolderRecords:
    def test_mirrors_folder_tree(self):
        folder = ScannedFolder(
            path=Path("/x/Root"),
            name="Root",
            files=[_file("a")],
            subfolders=[
                ScannedFolder(
                    path=Path("/x/Root/Sub"), name="Sub", files=[_file("b"), _file("c")]
                )
            ],
        )
        root, collections, icons = build_folder_records(folder, parent_id="p")
        assert root.name == "Root"
        assert root.parent_id == "p"
        assert [c.name for c in collections] == ["Root", "Sub"]
        assert collections[1].parent_id == root.id
        names = {c.id: [i.name for i in icons if i.collection_id == c.id] for c in collections}
        assert names == {root.id: ["a"], collections[1].id: ["b", "c"]}
        assert icons[0].file_size == 6
        assert icons[0].path == str(Path("/x/a.svg"))
