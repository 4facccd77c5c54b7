"""Shared heading datatypes."""

from __future__ import annotations

from dataclasses import dataclass


def heading_id_for(start: int) -> str:
    """Return the stable identity used for a heading starting at ``start``."""
    return f"heading-{start}"


@dataclass(frozen=True)
class HeadingEntry:
    """Normalized heading record used by the navigator and outline output.

    ``start``/``end`` form the half-open offset range of the heading's source
    span and ``line`` is the zero-based line of ``start``.
    """

    id: str
    text: str
    level: int
    start: int
    end: int
    line: int

    @property
    def label(self) -> str:
        """Short level/line label shown next to the heading text."""
        return f"H{self.level} · line {self.line + 1}"
