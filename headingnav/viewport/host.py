"""Host editor and scheduler interfaces consumed by viewport synchronization.

Geometry is expressed in the host's own vertical units (pixels for a GUI
editor, rows for the terminal view). Screen coordinates grow downwards.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Alignment(str, Enum):
    """Vertical placement requested for a navigation target."""

    TOP = "top"
    CENTER = "center"
    NEAREST = "nearest"


@dataclass(frozen=True)
class VerticalSpan:
    """Top/bottom screen coordinates of a rectangle."""

    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred-callback source driven by the host event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class EditorView(Protocol):
    """Narrow view of the host editor used by the navigator.

    ``selection`` is a ``(from, to)`` pair with ``from <= to``; the cursor head
    is ``selection[0]`` once collapsed. ``dispatch`` applies the selection and
    the scroll-into-view request as one combined effect.
    """

    @property
    def text(self) -> str: ...

    @property
    def selection(self) -> tuple[int, int]: ...

    def dispatch(
        self,
        *,
        selection: tuple[int, int] | None = None,
        scroll_into_view: int | None = None,
        y: Alignment = Alignment.NEAREST,
    ) -> None: ...

    def coords_at(self, offset: int) -> VerticalSpan | None: ...

    def container_rect(self) -> VerticalSpan: ...

    @property
    def scroll_top(self) -> float: ...

    @scroll_top.setter
    def scroll_top(self, value: float) -> None: ...

    @property
    def scroll_height(self) -> float: ...

    @property
    def client_height(self) -> float: ...

    def set_highlight(self, span: tuple[int, int] | None) -> None: ...

    def on_document_changed(self, callback: Callable[[], None]) -> Callable[[], None]: ...

    def on_selection_changed(self, callback: Callable[[], None]) -> Callable[[], None]: ...


def max_scroll_top(view: EditorView) -> float:
    """Return the largest valid scroll offset for ``view``."""
    return max(0.0, float(view.scroll_height) - float(view.client_height))


def clamp_scroll_top(view: EditorView, value: float) -> float:
    """Clamp ``value`` into ``[0, scroll_height - client_height]``."""
    return max(0.0, min(float(value), max_scroll_top(view)))
