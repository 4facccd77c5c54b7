"""Heading extraction from markdown document text.

Walks the block tree in document order and keeps ATX/Setext headings with
non-empty visible text. Parse failures never escape to callers.
"""

from __future__ import annotations

import logging

from .blocks import ATX_HEADING, SETEXT_HEADING, iter_blocks, parse_block_tree
from .line_index import LineIndex
from .text import heading_plain_text
from .types import HeadingEntry, heading_id_for

LOGGER = logging.getLogger(__name__)

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
SETEXT_LEVELS = frozenset({1, 2})


def _accepts_level(kind: str, level: int) -> bool:
    if kind == SETEXT_HEADING:
        return level in SETEXT_LEVELS
    return MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL


def extract_headings(text: str) -> list[HeadingEntry]:
    """Return the document's headings ordered by start offset.

    Any failure while parsing is logged and yields an empty list.
    """
    try:
        line_index = LineIndex(text)
        headings: list[HeadingEntry] = []
        for block in iter_blocks(parse_block_tree(text), line_index):
            if block.kind not in (ATX_HEADING, SETEXT_HEADING):
                continue
            if not _accepts_level(block.kind, block.level):
                continue
            if block.end <= block.start:
                continue
            heading_text = heading_plain_text(block.node)
            if not heading_text:
                continue
            headings.append(
                HeadingEntry(
                    id=heading_id_for(block.start),
                    text=heading_text,
                    level=block.level,
                    start=block.start,
                    end=block.end,
                    line=line_index.line_for(block.start),
                )
            )
        return headings
    except Exception:
        LOGGER.exception("Failed to extract headings; continuing with an empty outline")
        return []
