"""SVG icon library: collections, icons, search, views and display settings."""

from .models import Collection, DisplaySettings, Icon, LibrarySnapshot
from .search import filter_icons
from .service import LibraryService
from .storage import LibraryStorage
from .views import View, ViewKind

__all__ = [
    "Collection",
    "DisplaySettings",
    "Icon",
    "LibrarySnapshot",
    "LibraryService",
    "LibraryStorage",
    "View",
    "ViewKind",
    "filter_icons",
]
