"""Studio bridge services."""

from .collection_service import CollectionService
from .icon_service import IconService
from .settings_service import SettingsService

__all__ = ["CollectionService", "IconService", "SettingsService"]
