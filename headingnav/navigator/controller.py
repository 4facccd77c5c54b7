"""Heading navigator popup state machine.

The controller owns filter text, the filtered view, and the highlighted
entry for one open/close cycle. Side effects (cursor moves, scrolling,
restoring the viewport) are delegated to injected callbacks so the state
machine stays deterministic and testable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..headings import HeadingEntry, find_heading
from .dimensions import DEFAULT_PANEL_DIMENSIONS, PanelDimensions, normalize_panel_dimensions
from .filtering import apply_filter

LOGGER = logging.getLogger(__name__)

ENTER_KEYS = frozenset({"ENTER", "ENTER_CR", "ENTER_LF"})
NEXT_KEYS = frozenset({"DOWN", "TAB", "CTRL_N"})
PREVIOUS_KEYS = frozenset({"UP", "SHIFT_TAB", "CTRL_P"})


class NavigatorPhase(Enum):
    CLOSED = "closed"
    OPEN = "open"


class CloseReason(str, Enum):
    """Why the popup closed; only cancellation restores the prior viewport."""

    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"
    CANCELLED = "cancelled"

    @property
    def restores_viewport(self) -> bool:
        return self is CloseReason.CANCELLED


@dataclass(frozen=True)
class NavigatorCallbacks:
    """Side effects requested by :class:`NavigatorController`."""

    on_preview: Callable[[HeadingEntry], None]
    on_select: Callable[[HeadingEntry], None]
    on_close: Callable[[CloseReason], None]


@dataclass
class NavigatorState:
    """Mutable popup state; discarded on close."""

    headings: tuple[HeadingEntry, ...] = ()
    filter_text: str = ""
    filtered: tuple[HeadingEntry, ...] = ()
    selected_id: str | None = None
    last_previewed_id: str | None = None
    list_start: int = 0


class NavigatorController:
    """Filterable heading list with preview/confirm/cancel semantics."""

    def __init__(
        self,
        callbacks: NavigatorCallbacks,
        dimensions: PanelDimensions = DEFAULT_PANEL_DIMENSIONS,
    ) -> None:
        self.callbacks = callbacks
        self.dimensions = normalize_panel_dimensions(dimensions.width, dimensions.max_height_ratio)
        self.state: NavigatorState | None = None

    @property
    def phase(self) -> NavigatorPhase:
        return NavigatorPhase.OPEN if self.state is not None else NavigatorPhase.CLOSED

    def is_open(self) -> bool:
        return self.state is not None

    def set_display_options(self, width: object, max_height_ratio: object) -> PanelDimensions:
        """Clamp and store popup width/max-height options."""
        self.dimensions = normalize_panel_dimensions(width, max_height_ratio)
        return self.dimensions

    def selected_heading(self) -> HeadingEntry | None:
        """Return the highlighted entry resolved against the full heading list."""
        if self.state is None:
            return None
        return find_heading(self.state.headings, self.state.selected_id)

    def selected_index(self) -> int:
        """Return the highlighted entry's index in the filtered view, or ``-1``."""
        state = self.state
        if state is None or state.selected_id is None:
            return -1
        for idx, heading in enumerate(state.filtered):
            if heading.id == state.selected_id:
                return idx
        return -1

    def open(self, headings: Sequence[HeadingEntry], active_id: str | None) -> None:
        """Open (or reopen) the popup with ``active_id`` highlighted."""
        self.state = NavigatorState(headings=tuple(headings), selected_id=active_id)
        self._refilter()
        LOGGER.debug("navigator opened with %d headings", len(self.state.headings))
        self._notify_preview()

    def update(
        self,
        headings: Sequence[HeadingEntry],
        active_id: str | None,
        preserve_filter: bool = True,
    ) -> None:
        """Replace the heading list while open without issuing a preview."""
        state = self.state
        if state is None:
            return
        state.headings = tuple(headings)
        if not preserve_filter:
            state.filter_text = ""
        if active_id is not None:
            state.selected_id = active_id
        self._refilter()
        self._mark_previewed()

    def set_filter_text(self, text: str) -> None:
        """Refilter with ``text`` and preview the resulting selection."""
        state = self.state
        if state is None:
            return
        state.filter_text = text
        state.list_start = 0
        self._refilter()
        self._notify_preview()

    def move_selection(self, delta: int) -> bool:
        """Move the highlight cyclically by ``delta`` within the filtered view."""
        state = self.state
        if state is None:
            return False
        if not state.filtered:
            state.selected_id = None
            state.last_previewed_id = None
            return False

        count = len(state.filtered)
        current = self.selected_index()
        next_index = (current + delta + count) % count if current >= 0 else 0
        state.selected_id = state.filtered[next_index].id
        self._notify_preview()
        return True

    def confirm_selection(self) -> bool:
        """Hand the highlighted heading to ``on_select``; the caller closes."""
        heading = self.selected_heading()
        if heading is None:
            return False
        self.callbacks.on_select(heading)
        return True

    def choose(self, heading_id: str) -> bool:
        """Highlight ``heading_id`` (e.g. a clicked row) and confirm it."""
        state = self.state
        if state is None or find_heading(state.headings, heading_id) is None:
            return False
        state.selected_id = heading_id
        return self.confirm_selection()

    def close(self, reason: CloseReason = CloseReason.DISMISSED) -> None:
        """Discard popup state and report ``reason`` to ``on_close``."""
        if self.state is None:
            return
        self.state = None
        LOGGER.debug("navigator closed (%s)", reason.value)
        self.callbacks.on_close(reason)

    def handle_key(self, key: str) -> bool:
        """Apply one decoded key while open, returning whether it was consumed."""
        state = self.state
        if state is None:
            return False
        if key in NEXT_KEYS:
            self.move_selection(1)
            return True
        if key in PREVIOUS_KEYS:
            self.move_selection(-1)
            return True
        if key in ENTER_KEYS:
            self.confirm_selection()
            return True
        if key == "ESC":
            self.close(CloseReason.CANCELLED)
            return True
        if key == "BACKSPACE":
            if state.filter_text:
                self.set_filter_text(state.filter_text[:-1])
            return True
        if key == "CTRL_U":
            self.set_filter_text("")
            return True
        if len(key) == 1 and key.isprintable():
            self.set_filter_text(state.filter_text + key)
            return True
        return False

    def list_window(self, max_rows: int) -> tuple[int, tuple[HeadingEntry, ...]]:
        """Return ``(start, rows)`` of the filtered view keeping the highlight visible."""
        state = self.state
        if state is None:
            return 0, ()
        rows = max(1, max_rows)
        selected = self.selected_index()
        if selected >= 0:
            if selected < state.list_start:
                state.list_start = selected
            elif selected >= state.list_start + rows:
                state.list_start = selected - rows + 1
        state.list_start = max(0, min(state.list_start, max(0, len(state.filtered) - rows)))
        return state.list_start, state.filtered[state.list_start : state.list_start + rows]

    def _refilter(self) -> None:
        state = self.state
        assert state is not None
        result = apply_filter(state.headings, state.filter_text, state.selected_id)
        state.filtered = result.filtered
        state.selected_id = result.selected_id

    def _notify_preview(self) -> None:
        """Fire ``on_preview`` once per newly highlighted heading."""
        state = self.state
        assert state is not None
        if state.selected_id is None:
            state.last_previewed_id = None
            return
        if state.selected_id == state.last_previewed_id:
            return
        heading = find_heading(state.headings, state.selected_id)
        if heading is None:
            state.last_previewed_id = None
            return
        state.last_previewed_id = heading.id
        self.callbacks.on_preview(heading)

    def _mark_previewed(self) -> None:
        """Treat the current selection as already previewed (external moves)."""
        state = self.state
        assert state is not None
        heading = find_heading(state.headings, state.selected_id)
        state.last_previewed_id = heading.id if heading is not None else None
