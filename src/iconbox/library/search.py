"""Name/tag substring filtering."""

from __future__ import annotations

from typing import Sequence

from .models import Icon


def matches(icon: Icon, needle: str) -> bool:
    """Case-insensitive substring test on the name or any tag. ``needle`` must be lowercase."""
    if needle in icon.name.lower():
        return True
    return any(needle in t.lower() for t in icon.tags)


def filter_icons(icons: Sequence[Icon], query: str | None) -> Sequence[Icon]:
    """Filter icons by a search query, keeping their relative order.

    A blank query returns ``icons`` itself.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return icons
    return [i for i in icons if matches(i, needle)]
