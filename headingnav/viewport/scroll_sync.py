"""Cursor placement plus bounded scroll verification for one document view.

A navigation collapses the cursor onto the target, asks the host to scroll
it into view, then re-measures on later event-loop turns and corrects the
scroll offset until the target sits at the requested alignment. At most one
verification sequence is pending per synchronizer; a newer navigation
cancels the older one.
"""

from __future__ import annotations

import logging

from .alignment import (
    AlignmentPolicy,
    StepAction,
    VerificationPhase,
    measure_span,
    plan_step,
)
from .host import Alignment, EditorView, Scheduler, TimerHandle, clamp_scroll_top
from .snapshot import ViewportSnapshot, capture_viewport_snapshot, restore_viewport_snapshot

LOGGER = logging.getLogger(__name__)


class ScrollSynchronizer:
    """Per-view owner of the pending verification timer."""

    def __init__(self, view: EditorView, scheduler: Scheduler, policy: AlignmentPolicy | None = None) -> None:
        self.view = view
        self.scheduler = scheduler
        self.policy = policy or AlignmentPolicy()
        self.phase = VerificationPhase.IDLE
        self._pending: TimerHandle | None = None
        self._target: int | None = None
        self._target_end: int | None = None
        self._alignment = Alignment.TOP

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        """Drop any scheduled verification attempt."""
        pending = self._pending
        self._pending = None
        self._target = None
        self._target_end = None
        if pending is not None:
            pending.cancel()
        self.phase = VerificationPhase.IDLE

    def navigate(self, start: int, end: int | None = None, alignment: Alignment = Alignment.TOP) -> None:
        """Place the cursor at ``start`` and keep ``[start, end]`` aligned.

        The cursor move is applied immediately; scroll alignment is verified on
        later event-loop turns.
        """
        self.cancel()
        self._target = start
        self._target_end = start if end is None else max(start, end)
        self._alignment = alignment
        self.view.dispatch(selection=(start, start), scroll_into_view=start, y=alignment)
        self.phase = VerificationPhase.MEASURING
        self._schedule(0, 0)

    def capture_snapshot(self) -> ViewportSnapshot:
        """Capture the pre-navigation viewport for a later cancel."""
        return capture_viewport_snapshot(self.view)

    def restore_snapshot(self, snapshot: ViewportSnapshot) -> bool:
        """Cancel pending work and restore ``snapshot`` exactly."""
        self.cancel()
        return restore_viewport_snapshot(self.view, snapshot)

    def _schedule(self, attempt: int, settled: int) -> None:
        delay = self.policy.delay_for(attempt)
        self._pending = self.scheduler.call_later(delay, lambda: self._run_attempt(attempt, settled))

    def _run_attempt(self, attempt: int, settled: int) -> None:
        self._pending = None
        target = self._target
        if target is None:
            return
        if self.view.selection[0] != target:
            # Superseded by a newer cursor move.
            self.cancel()
            return

        target_end = self._target_end if self._target_end is not None else target
        measurement = measure_span(self.view, target, target_end)
        step = plan_step(attempt, settled, measurement, self._alignment, self.policy)
        self.phase = step.phase

        if step.action is StepAction.REQUEST_SCROLL:
            self.view.dispatch(scroll_into_view=target, y=self._alignment)
        elif step.action is StepAction.SET_SCROLL and step.scroll_top is not None:
            self.view.scroll_top = clamp_scroll_top(self.view, step.scroll_top)

        if step.next_attempt is not None:
            self._schedule(step.next_attempt, step.settled)
            return

        if step.phase is VerificationPhase.EXHAUSTED:
            LOGGER.warning(
                "Could not align offset %d (%s) after %d attempts; cursor left in place",
                target,
                self._alignment.value,
                self.policy.max_attempts,
            )
        self._target = None
        self._target_end = None
