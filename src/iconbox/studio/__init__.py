"""Webview bridge over the icon library."""

from .bridge import LibraryBridge

__all__ = ["LibraryBridge"]
