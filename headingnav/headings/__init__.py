"""Heading outline extraction and lookup helpers."""

from .extractor import extract_headings
from .line_index import LineIndex, build_line_resolver
from .lookup import find_active_heading_id, find_heading
from .outline import format_outline
from .types import HeadingEntry, heading_id_for

__all__ = [
    "HeadingEntry",
    "LineIndex",
    "build_line_resolver",
    "extract_headings",
    "find_active_heading_id",
    "find_heading",
    "format_outline",
    "heading_id_for",
]
