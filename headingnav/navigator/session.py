"""Per-view wiring between the host editor, the popup, and scroll sync.

One session owns the heading list, the navigator controller, the scroll
synchronizer, and the pre-navigation snapshot for a single document view.
Host notifications keep the open popup in step with edits and cursor moves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..headings import HeadingEntry, extract_headings, find_active_heading_id
from ..viewport import AlignmentPolicy, EditorView, Scheduler, ScrollSynchronizer, ViewportSnapshot
from .controller import CloseReason, NavigatorCallbacks, NavigatorController
from .dimensions import DEFAULT_PANEL_DIMENSIONS, PanelDimensions

LOGGER = logging.getLogger(__name__)


class HeadingNavigatorSession:
    """Heading navigator bound to one document view."""

    def __init__(
        self,
        view: EditorView,
        scheduler: Scheduler,
        *,
        dimensions: PanelDimensions = DEFAULT_PANEL_DIMENSIONS,
        policy: AlignmentPolicy | None = None,
    ) -> None:
        self.view = view
        self.policy = policy or AlignmentPolicy()
        self.sync = ScrollSynchronizer(view, scheduler, self.policy)
        self.controller = NavigatorController(
            NavigatorCallbacks(
                on_preview=self._on_preview,
                on_select=self._on_select,
                on_close=self._on_close,
            ),
            dimensions,
        )
        self.headings: list[HeadingEntry] = extract_headings(view.text)
        self._snapshot: ViewportSnapshot | None = None
        self._unsubscribers: list[Callable[[], None]] = [
            view.on_document_changed(self._handle_document_changed),
            view.on_selection_changed(self._handle_selection_changed),
        ]

    def is_open(self) -> bool:
        return self.controller.is_open()

    def toggle(self, dimensions: PanelDimensions | None = None) -> None:
        """Open the popup, or dismiss it when already open."""
        if dimensions is not None:
            self.controller.set_display_options(dimensions.width, dimensions.max_height_ratio)
        if self.controller.is_open():
            self.close_panel(CloseReason.DISMISSED)
        else:
            self.open_panel()

    def open_panel(self) -> None:
        """Snapshot the viewport and open the popup on the active heading."""
        self.headings = extract_headings(self.view.text)
        self._snapshot = self.sync.capture_snapshot()
        active_id = find_active_heading_id(self.headings, self.view.selection[0])
        self.controller.open(self.headings, active_id)
        if not self.headings:
            self.view.set_highlight(None)

    def close_panel(self, reason: CloseReason = CloseReason.DISMISSED) -> None:
        self.controller.close(reason)

    def dispose(self) -> None:
        """Unsubscribe from the host and drop pending timers."""
        self.controller.close(CloseReason.DISMISSED)
        self.sync.cancel()
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def _on_preview(self, heading: HeadingEntry) -> None:
        self.view.set_highlight((heading.start, heading.end))
        self.sync.navigate(heading.start, heading.end, self.policy.preview_alignment)

    def _on_select(self, heading: HeadingEntry) -> None:
        LOGGER.debug("jumping to %s (%r)", heading.id, heading.text)
        self.controller.close(CloseReason.CONFIRMED)
        self.sync.navigate(heading.start, heading.end, self.policy.confirm_alignment)

    def _on_close(self, reason: CloseReason) -> None:
        snapshot = self._snapshot
        self._snapshot = None
        self.view.set_highlight(None)
        if reason.restores_viewport and snapshot is not None:
            self.sync.restore_snapshot(snapshot)
        else:
            self.sync.cancel()

    def _handle_document_changed(self) -> None:
        self.headings = extract_headings(self.view.text)
        self._refresh_open_panel()

    def _handle_selection_changed(self) -> None:
        self._refresh_open_panel()

    def _refresh_open_panel(self) -> None:
        if not self.controller.is_open():
            return
        active_id = find_active_heading_id(self.headings, self.view.selection[0])
        self.controller.update(self.headings, active_id, preserve_filter=True)
        selected = self.controller.selected_heading()
        self.view.set_highlight((selected.start, selected.end) if selected is not None else None)
