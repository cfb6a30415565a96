"""Tests for SVG folder scanning."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest
from conftest import SVG, write_svgs

from iconbox.exceptions import ImportCancelledError, LibraryIOError
from iconbox.library.scanner import is_svg, read_svg, read_svgs, scan_folder


class TestIsSvg:
    @pytest.mark.parametrize("name", ["a.svg", "b.SVG", "c.Svg"])
    def test_svg_suffix_any_case(self, name):
        assert is_svg(Path(name))

    @pytest.mark.parametrize("name", ["a.png", "svg", "a.svg.bak"])
    def test_other_files(self, name):
        assert not is_svg(Path(name))


class TestReadSvg:
    def test_reads_text_and_size(self, tmp_path: Path):
        (p,) = write_svgs(tmp_path, "bell")
        f = read_svg(p)
        assert f.name == "bell"
        assert f.content == SVG
        assert f.size == len(SVG.encode("utf-8"))

    def test_strips_bom(self, tmp_path: Path):
        p = tmp_path / "bom.svg"
        p.write_bytes(b"\xef\xbb\xbf<svg/>")
        assert read_svg(p).content == "<svg/>"

    def test_rejects_non_utf8(self, tmp_path: Path):
        p = tmp_path / "bad.svg"
        p.write_bytes(b"\xff\xfe\x00<")
        with pytest.raises(LibraryIOError):
            read_svg(p)


class TestReadSvgs:
    def test_reads_in_order(self, tmp_path: Path):
        paths = write_svgs(tmp_path, "b", "a")
        assert [f.name for f in read_svgs(paths)] == ["b", "a"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(LibraryIOError):
            read_svgs([tmp_path / "nope.svg"])

    def test_non_svg_rejected(self, tmp_path: Path):
        p = tmp_path / "x.png"
        p.write_bytes(b"png")
        with pytest.raises(LibraryIOError):
            read_svgs([p])


class TestScanFolder:
    """Tests for scan_folder."""

    def test_mirrors_subfolders(self, svg_folder: Path):
        top = scan_folder(svg_folder)
        assert top.name == "Feather"
        assert [f.name for f in top.files] == ["arrow", "bell", "camera"]
        assert [s.name for s in top.subfolders] == ["Social"]
        assert [f.name for f in top.subfolders[0].files] == ["github", "twitter"]
        assert top.file_count == 5

    def test_flat_mode_collects_everything_at_top(self, svg_folder: Path):
        top = scan_folder(svg_folder, subfolders=False)
        assert top.subfolders == []
        assert len(top.files) == 5

    def test_ignores_hidden_and_non_svg(self, tmp_path: Path):
        write_svgs(tmp_path / "root", "a")
        write_svgs(tmp_path / "root" / ".hidden", "b")
        (tmp_path / "root" / ".c.svg").write_text(SVG)
        (tmp_path / "root" / "notes.txt").write_text("hi")
        top = scan_folder(tmp_path / "root")
        assert [f.name for f in top.files] == ["a"]
        assert top.subfolders == []

    def test_prunes_folders_without_svgs(self, tmp_path: Path):
        root = tmp_path / "root"
        write_svgs(root, "a")
        (root / "empty" / "deeper").mkdir(parents=True)
        write_svgs(root / "outer" / "inner", "z")
        top = scan_folder(root)
        assert [s.name for s in top.subfolders] == ["outer"]
        assert top.subfolders[0].files == []
        assert [s.name for s in top.subfolders[0].subfolders] == ["inner"]

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(LibraryIOError):
            scan_folder(tmp_path / "nope")

    def test_cancelled(self, svg_folder: Path):
        ev = threading.Event()
        ev.set()
        with pytest.raises(ImportCancelledError):
            scan_folder(svg_folder, cancel=ev)
