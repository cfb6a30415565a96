"""Persisted display preferences."""

from __future__ import annotations

import logging
import re

from iconbox.constants import DEFAULT_ICON_SIZE, DEFAULT_THEME, ICON_SIZES, SETTING_KEYS, THEMES
from iconbox.exceptions import InvalidArgumentError

from .models import DisplaySettings
from .storage import LibraryStorage

logger = logging.getLogger(__name__)
HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class SettingsStore:
    """Key/value store behind :class:`DisplaySettings`.

    Values are kept as strings on disk. ``set`` validates; ``get`` is lenient and
    falls back to the default for any stored value it cannot parse.
    ``set`` re-reads the file under the data directory lock, so keys saved by
    another process are kept. Callers in one process serialize ``set`` calls
    (the library service holds its writer lock).
    """

    def __init__(self, storage: LibraryStorage, strict: bool = True):
        self._storage = storage
        self._strict = strict
        self._values: dict[str, str] | None = None

    def _raw(self) -> dict[str, str]:
        if self._values is None:
            self._values = self._storage.load_settings()
        return self._values

    def get(self) -> DisplaySettings:
        raw = self._raw()
        theme = raw.get("theme") or DEFAULT_THEME
        size = DEFAULT_ICON_SIZE
        if "icon_size" in raw:
            try:
                size = int(raw["icon_size"])
            except ValueError:
                logger.warning("Ignoring stored icon_size %r", raw["icon_size"])
        tint = raw.get("tint_color") or None
        return DisplaySettings(theme=theme, icon_size=size, tint_color=tint)

    def set(self, key: str, value: str) -> DisplaySettings:
        """Validate and persist one setting. Nothing changes if validation or the write fails."""
        stored = self.validate(key, value)
        with self._storage.locked():
            values = self._storage.load_settings()
            values[key] = stored
            self._storage.save_settings(values)
        self._values = values
        logger.info("Saved setting %s=%r", key, stored)
        return self.get()

    def validate(self, key: str, value: str | None) -> str:
        """Return the string to store for key, or raise InvalidArgumentError."""
        if key not in SETTING_KEYS:
            raise InvalidArgumentError(
                f"Unknown setting: {key}", details=f"expected one of {', '.join(SETTING_KEYS)}"
            )
        v = (value or "").strip()
        if key == "tint_color":
            if v and self._strict and not HEX_COLOR.match(v):
                raise InvalidArgumentError(f"Invalid tint color: {value}")
            return v
        if key == "icon_size":
            if not (v.isascii() and v.isdigit()):
                raise InvalidArgumentError(f"Invalid icon size: {value}")
            size = int(v)
            if size <= 0 or (self._strict and size not in ICON_SIZES):
                raise InvalidArgumentError(
                    f"Invalid icon size: {value}",
                    details=f"allowed sizes: {', '.join(str(s) for s in ICON_SIZES)}",
                )
            return str(size)
        if not v or (self._strict and v not in THEMES):
            raise InvalidArgumentError(f"Invalid theme: {value}")
        return v
