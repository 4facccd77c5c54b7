"""Terminal-backed document view implementing the host editor interface.

Geometry is measured in rows: every source line occupies one row and the
scroll offset is the first visible line. Like a virtualized editor, only
rows near the viewport are laid out; ``coords_at`` reports ``None`` for
rows outside the window computed by the last ``refresh_layout`` call.
"""

from __future__ import annotations

from collections.abc import Callable

from ..headings import LineIndex
from ..viewport import Alignment, VerticalSpan


DEFAULT_OVERSCAN_ROWS = 40


class TerminalDocumentView:
    """In-memory document with cursor, scroll offset, and highlight range."""

    def __init__(
        self,
        text: str,
        client_height: int = 24,
        *,
        container_top: int = 0,
        overscan_rows: int = DEFAULT_OVERSCAN_ROWS,
    ) -> None:
        self._text = text
        self._line_index = LineIndex(text)
        self._selection = (0, 0)
        self._scroll_top = 0
        self._client_height = max(1, int(client_height))
        self.container_top = container_top
        self.overscan_rows = max(0, overscan_rows)
        self.highlight: tuple[int, int] | None = None
        self._layout_window = (0, 0)
        self._document_listeners: list[Callable[[], None]] = []
        self._selection_listeners: list[Callable[[], None]] = []
        self.refresh_layout()

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_index(self) -> LineIndex:
        return self._line_index

    @property
    def selection(self) -> tuple[int, int]:
        return self._selection

    @property
    def cursor_line(self) -> int:
        return self._line_index.line_for(self._selection[0])

    @property
    def scroll_top(self) -> float:
        return float(self._scroll_top)

    @scroll_top.setter
    def scroll_top(self, value: float) -> None:
        self._scroll_top = self._clamp_scroll(int(round(value)))

    @property
    def scroll_height(self) -> float:
        return float(self._line_index.line_count)

    @property
    def client_height(self) -> float:
        return float(self._client_height)

    @property
    def first_visible_line(self) -> int:
        return self._scroll_top

    def container_rect(self) -> VerticalSpan:
        return VerticalSpan(top=self.container_top, bottom=self.container_top + self._client_height)

    def resize(self, client_height: int) -> None:
        """Apply a new viewport height and keep the scroll offset valid."""
        self._client_height = max(1, int(client_height))
        self._scroll_top = self._clamp_scroll(self._scroll_top)

    def refresh_layout(self) -> None:
        """Lay out rows around the current viewport (called after rendering)."""
        start = max(0, self._scroll_top - self.overscan_rows)
        end = min(self._line_index.line_count, self._scroll_top + self._client_height + self.overscan_rows)
        self._layout_window = (start, end)

    def is_laid_out(self, line: int) -> bool:
        start, end = self._layout_window
        return start <= line < end

    def coords_at(self, offset: int) -> VerticalSpan | None:
        """Return the screen rows covered by ``offset``, or ``None`` if not laid out."""
        line = self._line_index.line_for(offset)
        if not self.is_laid_out(line):
            return None
        top = self.container_top + (line - self._scroll_top)
        return VerticalSpan(top=top, bottom=top + 1)

    def dispatch(
        self,
        *,
        selection: tuple[int, int] | None = None,
        scroll_into_view: int | None = None,
        y: Alignment = Alignment.NEAREST,
    ) -> None:
        """Apply a selection and/or scroll request as one update."""
        selection_changed = False
        if selection is not None:
            normalized = self._normalize_selection(selection)
            selection_changed = normalized != self._selection
            self._selection = normalized
        if scroll_into_view is not None:
            self._scroll_line_into_view(self._line_index.line_for(scroll_into_view), y)
        if selection_changed:
            self._notify(self._selection_listeners)

    def set_highlight(self, span: tuple[int, int] | None) -> None:
        self.highlight = span

    def on_document_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._subscribe(self._document_listeners, callback)

    def on_selection_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._subscribe(self._selection_listeners, callback)

    def replace_text(self, text: str) -> None:
        """Swap in new document text, keeping cursor and scroll in range."""
        if text == self._text:
            return
        self._text = text
        self._line_index = LineIndex(text)
        self._selection = self._normalize_selection(self._selection)
        self._scroll_top = self._clamp_scroll(self._scroll_top)
        if self.highlight is not None:
            self.highlight = None
        self.refresh_layout()
        self._notify(self._document_listeners)

    def move_cursor_lines(self, delta: int) -> None:
        """Move the cursor to the start of the line ``delta`` rows away."""
        target_line = max(0, min(self.cursor_line + delta, self._line_index.line_count - 1))
        offset = self._line_index.line_start(target_line)
        self.dispatch(selection=(offset, offset), scroll_into_view=offset)

    def scroll_by(self, rows: int) -> None:
        self._scroll_top = self._clamp_scroll(self._scroll_top + rows)

    def _normalize_selection(self, selection: tuple[int, int]) -> tuple[int, int]:
        limit = len(self._text)
        start, end = (max(0, min(value, limit)) for value in selection)
        return (start, end) if start <= end else (end, start)

    def _max_scroll(self) -> int:
        return max(0, self._line_index.line_count - self._client_height)

    def _clamp_scroll(self, value: int) -> int:
        return max(0, min(value, self._max_scroll()))

    def _scroll_line_into_view(self, line: int, y: Alignment) -> None:
        rows = self._client_height
        if y is Alignment.TOP:
            target = line
        elif y is Alignment.CENTER:
            target = line - rows // 2
        elif line < self._scroll_top:
            target = line
        elif line >= self._scroll_top + rows:
            target = line - rows + 1
        else:
            target = self._scroll_top
        self._scroll_top = self._clamp_scroll(target)

    @staticmethod
    def _subscribe(listeners: list[Callable[[], None]], callback: Callable[[], None]) -> Callable[[], None]:
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    @staticmethod
    def _notify(listeners: list[Callable[[], None]]) -> None:
        for listener in list(listeners):
            listener()
