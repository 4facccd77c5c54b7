"""Heading filtering and reselection for the navigator popup."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..headings import HeadingEntry


@dataclass(frozen=True)
class FilterResult:
    """Filtered heading view plus the selection that survives filtering."""

    filtered: tuple[HeadingEntry, ...]
    selected_id: str | None


def matches_filter(heading: HeadingEntry, needle: str) -> bool:
    """Return whether normalized ``needle`` occurs in the heading text."""
    return needle in heading.text.casefold()


def apply_filter(
    headings: Sequence[HeadingEntry],
    filter_text: str,
    previous_selected_id: str | None,
) -> FilterResult:
    """Filter ``headings`` by case-insensitive substring and reselect.

    A blank filter keeps every heading. The previous selection is kept when it
    survives the filter, otherwise the first match is selected; an empty
    result clears the selection.
    """
    needle = filter_text.strip().casefold()
    if needle:
        filtered = tuple(heading for heading in headings if matches_filter(heading, needle))
    else:
        filtered = tuple(headings)

    if not filtered:
        return FilterResult(filtered=filtered, selected_id=None)
    if previous_selected_id is not None and any(heading.id == previous_selected_id for heading in filtered):
        return FilterResult(filtered=filtered, selected_id=previous_selected_id)
    return FilterResult(filtered=filtered, selected_id=filtered[0].id)
