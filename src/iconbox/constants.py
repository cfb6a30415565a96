"""Shared constants (single source of truth)."""

SVG_EXTS = {".svg"}

# Collection colors are a display hint only; the core never interprets them.
COLLECTION_COLORS = (
    "#e94560",
    "#00d9ff",
    "#00ff88",
    "#ff6b35",
    "#a855f7",
    "#f59e0b",
    "#10b981",
    "#3b82f6",
    "#ec4899",
    "#8b5cf6",
)

THEMES = ("light", "dark")
ICON_SIZES = (32, 48, 64, 80, 96)
SETTING_KEYS = ("theme", "icon_size", "tint_color")

DEFAULT_THEME = "light"
DEFAULT_ICON_SIZE = 64

LIBRARY_FILE_NAME = "library.json"
SETTINGS_FILE_NAME = "settings.json"
LOCK_FILE_NAME = "library.lock"
LIBRARY_FORMAT_VERSION = "1.0"
