"""Shared fixtures for iconbox tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from iconbox.config.settings import Settings
from iconbox.library.service import LibraryService
from iconbox.library.storage import LibraryStorage

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0h24v24H0z"/></svg>'


def write_svgs(folder: Path, *names: str) -> list[Path]:
    """Create small SVG files in folder and return their paths."""
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        p = folder / f"{name}.svg"
        p.write_text(SVG, encoding="utf-8")
        paths.append(p)
    return paths


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def config(data_dir: Path) -> Settings:
    return Settings(data_dir=data_dir, strict_settings=True, import_subfolders=True)


@pytest.fixture
def storage(data_dir: Path) -> LibraryStorage:
    return LibraryStorage(data_dir)


@pytest.fixture
def service(storage: LibraryStorage, config: Settings) -> LibraryService:
    return LibraryService(storage=storage, config=config)


@pytest.fixture
def svg_folder(tmp_path: Path) -> Path:
    """A folder with three SVGs at the top and one nested subfolder."""
    root = tmp_path / "Feather"
    write_svgs(root, "arrow", "bell", "camera")
    write_svgs(root / "Social", "github", "twitter")
    return root
