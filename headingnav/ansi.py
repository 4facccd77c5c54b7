"""Cell-width arithmetic for styled terminal rows.

Escape sequences pass through untouched and occupy no cells; tabs, wide
CJK characters, and combining marks are measured the way terminals draw them.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
ELLIPSIS = "…"


def cell_width(ch: str, col: int) -> int:
    """Cells drawn for ``ch`` when it starts at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1


def iter_cells(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(chunk, cells)`` pairs; escapes come through as zero-cell chunks.

    Tabs are yielded already expanded to spaces.
    """
    col = 0
    pos = 0
    while pos < len(text):
        if text[pos] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, pos)
            if match is not None:
                yield match.group(0), 0
                pos = match.end()
                continue
        ch = text[pos]
        width = cell_width(ch, col)
        yield (" " * width if ch == "\t" else ch), width
        col += width
        pos += 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    return sum(width for _, width in iter_cells(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` to ``max_cols`` cells, keeping escapes seen before the cut.

    A wide character that would straddle the limit is dropped whole.
    """
    if max_cols <= 0:
        return ""
    out: list[str] = []
    used = 0
    for chunk, width in iter_cells(text):
        if width and used + width > max_cols:
            break
        out.append(chunk)
        used += width
        if used >= max_cols:
            break
    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` cells and pad the remainder with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def truncate_text(text: str, max_cols: int) -> str:
    """Shorten plain ``text`` to ``max_cols`` cells, ending with an ellipsis."""
    if display_width(text) <= max_cols:
        return text
    if max_cols <= 0:
        return ""
    return clip_ansi_line(text, max_cols - 1) + ELLIPSIS
