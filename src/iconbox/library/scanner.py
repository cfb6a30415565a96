"""SVG discovery for imports.

Scanning touches only the filesystem, never the library, so it runs without
the library's writer lock. A ``threading.Event`` lets callers cancel between
files.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from iconbox.constants import SVG_EXTS
from iconbox.exceptions import ImportCancelledError, LibraryIOError

logger = logging.getLogger(__name__)


@dataclass
class ScannedFile:
    path: Path
    name: str
    content: str
    size: int


@dataclass
class ScannedFolder:
    """One folder of a scan; becomes one collection on import."""

    path: Path
    name: str
    files: list[ScannedFile] = field(default_factory=list)
    subfolders: list["ScannedFolder"] = field(default_factory=list)

    def walk(self) -> list["ScannedFolder"]:
        """This folder and every subfolder, parents before children."""
        out: list[ScannedFolder] = []
        stack = [self]
        while stack:
            node = stack.pop()
            out.append(node)
            stack.extend(reversed(node.subfolders))
        return out

    @property
    def file_count(self) -> int:
        return sum(len(f.files) for f in self.walk())


def is_svg(path: Path) -> bool:
    return path.suffix.lower() in SVG_EXTS


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def check_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise ImportCancelledError("Import cancelled")


def read_svg(path: Path) -> ScannedFile:
    """Read one SVG file as text. Raises LibraryIOError if it cannot be read or decoded."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise LibraryIOError(f"Cannot read {path.name}", details=str(e))
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise LibraryIOError(f"{path.name} is not UTF-8 text", details=str(e))
    return ScannedFile(path=path, name=path.stem, content=text, size=len(data))


def read_svgs(
    paths: Iterable[Path | str], cancel: threading.Event | None = None
) -> list[ScannedFile]:
    """Read an explicit list of SVG files, rejecting anything that is not one."""
    out = []
    for p in paths:
        check_cancelled(cancel)
        p = Path(p)
        if not p.is_file():
            raise LibraryIOError(f"File not found: {p}")
        if not is_svg(p):
            raise LibraryIOError(f"Not an SVG file: {p.name}")
        out.append(read_svg(p))
    return out


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        raise LibraryIOError(f"Cannot list folder {path}", details=str(e))


def scan_folder(
    root: Path | str,
    subfolders: bool = True,
    cancel: threading.Event | None = None,
) -> ScannedFolder:
    """Discover and read every SVG under root.

    Args:
        root: Folder chosen by the user.
        subfolders: Mirror nested folders as child nodes. When False every SVG
            found at any depth is attached to the root node.
        cancel: Checked before each directory and file.
    Returns:
        The root node. Subfolders holding no SVGs at any depth are pruned.
    Raises:
        LibraryIOError: The root is missing or any entry cannot be read.
        ImportCancelledError: ``cancel`` was set during the scan.
    """
    root = Path(root)
    if not root.is_dir():
        raise LibraryIOError(f"Folder not found: {root}")
    top = ScannedFolder(path=root, name=root.resolve().name or "Imported")
    stack = [top]
    visited: list[ScannedFolder] = []
    while stack:
        check_cancelled(cancel)
        node = stack.pop()
        visited.append(node)
        target = node if subfolders else top
        dirs = []
        for entry in _list_dir(node.path):
            if _is_hidden(entry):
                continue
            if entry.is_dir():
                if entry.is_symlink():
                    logger.debug("Skipping symlinked folder %s", entry)
                    continue
                dirs.append(entry)
            elif entry.is_file() and is_svg(entry):
                check_cancelled(cancel)
                target.files.append(read_svg(entry))
        for d in reversed(dirs):
            child = ScannedFolder(path=d, name=d.name)
            if subfolders:
                node.subfolders.insert(0, child)
            stack.append(child)
    if subfolders:
        # Children are visited after their parents, so walking backwards prunes bottom-up.
        for node in reversed(visited):
            node.subfolders = [s for s in node.subfolders if s.files or s.subfolders]
    logger.debug("Scanned %s: %d SVG files", root, top.file_count)
    return top
