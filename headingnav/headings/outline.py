"""Plain-text heading outline for non-interactive output."""

from __future__ import annotations

from collections.abc import Sequence

from .types import HeadingEntry


def format_outline(headings: Sequence[HeadingEntry]) -> str:
    """Render headings as an indented ``H{level} L{line} text`` outline."""
    rows = [f"{'  ' * (h.level - 1)}H{h.level} L{h.line + 1} {h.text}" for h in headings]
    return "".join(f"{row}\n" for row in rows)
