"""File helpers for durable JSON documents."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def write_atomically(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` so readers see the old or the new file, never a mix.

    The text goes to ``<name>.tmp`` beside the target, is flushed and fsynced,
    then moved over the target with ``os.replace``. The temp file is removed
    if anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def write_model(path: Path, model: BaseModel) -> None:
    """Atomically write a pydantic model as indented JSON."""
    write_atomically(path, model.model_dump_json(indent=2))


def read_json(path: Path) -> Any | None:
    """Read a JSON document, returning None when the file does not exist."""
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))
