"""Heading lookups by identity and cursor position."""

from __future__ import annotations

from collections.abc import Sequence

from .types import HeadingEntry


def find_heading(headings: Sequence[HeadingEntry], heading_id: str | None) -> HeadingEntry | None:
    """Resolve ``heading_id`` against ``headings``."""
    if heading_id is None:
        return None
    for heading in headings:
        if heading.id == heading_id:
            return heading
    return None


def find_active_heading_id(headings: Sequence[HeadingEntry], position: int) -> str | None:
    """Return the heading owning ``position``.

    That is the last heading starting at or before ``position``; positions above
    the first heading fall back to the first heading.
    """
    if not headings:
        return None

    candidate: HeadingEntry | None = None
    for heading in headings:
        if heading.start <= position:
            candidate = heading
        else:
            break
    return (candidate or headings[0]).id
