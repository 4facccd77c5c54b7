"""Offset-to-line resolution for document text.

Line starts are collected once in a single linear pass.
Lookups are a binary search over those starts.
"""

from __future__ import annotations

from bisect import bisect_right


class LineIndex:
    """Sorted line-start table for one immutable text snapshot."""

    def __init__(self, text: str) -> None:
        """Record the start offset of every line in ``text``."""
        self.text = text
        starts = [0]
        find = text.find
        pos = find("\n")
        while pos >= 0:
            starts.append(pos + 1)
            pos = find("\n", pos + 1)
        self._starts = starts

    def __call__(self, offset: int) -> int:
        return self.line_for(offset)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_for(self, offset: int) -> int:
        """Return zero-based line containing ``offset``.

        Offsets are clamped into ``[0, len(text)]``; ``len(text)`` resolves to
        the last line.
        """
        clamped = max(0, min(offset, len(self.text)))
        return bisect_right(self._starts, clamped) - 1

    def line_start(self, line: int) -> int:
        """Return the offset of the first character on ``line``."""
        clamped = max(0, min(line, len(self._starts) - 1))
        return self._starts[clamped]

    def line_end(self, line: int) -> int:
        """Return the offset just past the last character of ``line``.

        The line terminator (``\\n`` or ``\\r\\n``) is not included.
        """
        clamped = max(0, min(line, len(self._starts) - 1))
        if clamped + 1 < len(self._starts):
            end = self._starts[clamped + 1] - 1
        else:
            end = len(self.text)
        if end > self._starts[clamped] and self.text[end - 1] == "\r":
            end -= 1
        return end

    def line_text(self, line: int) -> str:
        """Return the text of ``line`` without its terminator."""
        return self.text[self.line_start(line) : self.line_end(line)]


def build_line_resolver(text: str) -> LineIndex:
    """Build a resolver mapping character offsets to zero-based line numbers."""
    return LineIndex(text)
