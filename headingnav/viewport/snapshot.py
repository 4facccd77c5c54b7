"""Viewport snapshots taken before navigation and restored on cancel."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .alignment import measure_span
from .host import EditorView, clamp_scroll_top

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportSnapshot:
    """Cursor range plus where it sat inside the scroll container.

    ``block_top_offset`` is measured from the container top and
    ``block_bottom_offset`` from the container bottom; both are ``None`` when
    the range was not measurable. ``scroll_top`` is the raw fallback.
    """

    selection_from: int
    selection_to: int
    block_top_offset: float | None
    block_bottom_offset: float | None
    scroll_top: float


def capture_viewport_snapshot(view: EditorView) -> ViewportSnapshot:
    """Record the current cursor range and its on-screen offset."""
    selection_from, selection_to = view.selection
    scroll_top = float(view.scroll_top)
    try:
        measurement = measure_span(view, selection_from, selection_to)
    except Exception:
        LOGGER.warning("Could not measure cursor range for viewport snapshot", exc_info=True)
        measurement = None

    if measurement is None:
        return ViewportSnapshot(selection_from, selection_to, None, None, scroll_top)
    return ViewportSnapshot(
        selection_from=selection_from,
        selection_to=selection_to,
        block_top_offset=measurement.span_top,
        block_bottom_offset=measurement.client_height - measurement.span_bottom,
        scroll_top=scroll_top,
    )


def restored_scroll_top(view: EditorView, snapshot: ViewportSnapshot) -> float | None:
    """Return the clamped scroll offset reproducing the snapshot's block offset.

    ``None`` means the range cannot be measured right now.
    """
    if snapshot.block_top_offset is None:
        return None
    measurement = measure_span(view, snapshot.selection_from, snapshot.selection_to)
    if measurement is None:
        return None
    return clamp_scroll_top(view, measurement.scroll_top + measurement.span_top - snapshot.block_top_offset)


def restore_viewport_snapshot(view: EditorView, snapshot: ViewportSnapshot) -> bool:
    """Restore cursor and scroll position captured in ``snapshot``.

    The cursor range is always restored first. Returns ``True`` when the scroll
    offset was recomputed from live geometry, ``False`` when the raw captured
    offset was used instead.
    """
    view.dispatch(selection=(snapshot.selection_from, snapshot.selection_to))

    try:
        target = restored_scroll_top(view, snapshot)
    except Exception:
        LOGGER.warning("Failed to recompute viewport geometry; restoring raw scroll offset", exc_info=True)
        target = None

    if target is not None:
        view.scroll_top = target
        return True

    try:
        view.scroll_top = clamp_scroll_top(view, snapshot.scroll_top)
    except Exception:
        LOGGER.warning("Failed to restore original scroll offset", exc_info=True)
    return False
