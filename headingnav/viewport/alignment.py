"""Pure alignment math and the verification transition function.

``plan_step`` maps one verification attempt plus its measurement to the
action the synchronizer should take next. Nothing here touches timers or
the host view beyond the read-only ``measure_span`` helper.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .host import Alignment, EditorView, max_scroll_top

DEFAULT_TOLERANCE = 4.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_SETTLE_CHECKS = 1
DEFAULT_DELAYS = (0.016, 0.06, 0.2)


class VerificationPhase(Enum):
    IDLE = "idle"
    MEASURING = "measuring"
    CORRECTING = "correcting"
    EXHAUSTED = "exhausted"


class StepAction(Enum):
    NONE = "none"
    REQUEST_SCROLL = "request_scroll"
    SET_SCROLL = "set_scroll"


@dataclass(frozen=True)
class AlignmentPolicy:
    """Tunable retry budget and alignment targets.

    ``delays[i]`` is the wait before attempt ``i``; attempts beyond the tuple
    reuse its last value. ``settle_checks`` extra aligned observations are
    required before the sequence stops watching for late layout shifts.
    ``tolerance`` is in the host's scroll units: pixels for editor views,
    rows for the terminal view.
    """

    tolerance: float = DEFAULT_TOLERANCE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    settle_checks: int = DEFAULT_SETTLE_CHECKS
    delays: tuple[float, ...] = DEFAULT_DELAYS
    preview_alignment: Alignment = Alignment.TOP
    confirm_alignment: Alignment = Alignment.CENTER
    top_margin: float = 0.0

    def delay_for(self, attempt: int) -> float:
        if not self.delays:
            return 0.0
        return max(0.0, self.delays[max(0, min(attempt, len(self.delays) - 1))])


@dataclass(frozen=True)
class Measurement:
    """Target span relative to the scroll container's visible top."""

    span_top: float
    span_bottom: float
    scroll_top: float
    client_height: float
    max_scroll_top: float


@dataclass(frozen=True)
class VerificationStep:
    """Outcome of one attempt: what to do now and whether to try again."""

    phase: VerificationPhase
    action: StepAction
    scroll_top: float | None = None
    next_attempt: int | None = None
    settled: int = 0


def measure_span(view: EditorView, start: int, end: int) -> Measurement | None:
    """Measure ``[start, end]`` against the container, ``None`` if not laid out."""
    start_rect = view.coords_at(start)
    end_rect = start_rect if end == start else view.coords_at(end)
    if start_rect is None or end_rect is None:
        return None
    container = view.container_rect()
    return Measurement(
        span_top=start_rect.top - container.top,
        span_bottom=max(start_rect.bottom, end_rect.bottom) - container.top,
        scroll_top=float(view.scroll_top),
        client_height=float(view.client_height),
        max_scroll_top=max_scroll_top(view),
    )


def desired_scroll_top(measurement: Measurement, alignment: Alignment, top_margin: float = 0.0) -> float:
    """Return the clamped scroll offset that places the span as requested."""
    current = measurement.scroll_top
    if alignment is Alignment.TOP:
        target = current + measurement.span_top - top_margin
    elif alignment is Alignment.CENTER:
        span_center = (measurement.span_top + measurement.span_bottom) / 2
        target = current + span_center - measurement.client_height / 2
    else:
        span_height = measurement.span_bottom - measurement.span_top
        if measurement.span_top < 0 or span_height > measurement.client_height:
            target = current + measurement.span_top
        elif measurement.span_bottom > measurement.client_height:
            target = current + measurement.span_bottom - measurement.client_height
        else:
            target = current
    return max(0.0, min(target, measurement.max_scroll_top))


def is_aligned(measurement: Measurement, alignment: Alignment, policy: AlignmentPolicy) -> bool:
    """Return whether no correction beyond ``policy.tolerance`` is possible."""
    target = desired_scroll_top(measurement, alignment, policy.top_margin)
    return abs(target - measurement.scroll_top) <= policy.tolerance


def plan_step(
    attempt: int,
    settled: int,
    measurement: Measurement | None,
    alignment: Alignment,
    policy: AlignmentPolicy,
) -> VerificationStep:
    """Transition one verification attempt to its action and follow-up."""
    is_last = attempt + 1 >= max(1, policy.max_attempts)

    if measurement is None:
        if is_last:
            return VerificationStep(VerificationPhase.EXHAUSTED, StepAction.REQUEST_SCROLL)
        return VerificationStep(
            VerificationPhase.MEASURING,
            StepAction.REQUEST_SCROLL,
            next_attempt=attempt + 1,
        )

    if is_aligned(measurement, alignment, policy):
        settled += 1
        if is_last or settled > policy.settle_checks:
            return VerificationStep(VerificationPhase.IDLE, StepAction.NONE, settled=settled)
        return VerificationStep(
            VerificationPhase.MEASURING,
            StepAction.NONE,
            next_attempt=attempt + 1,
            settled=settled,
        )

    target = desired_scroll_top(measurement, alignment, policy.top_margin)
    if is_last:
        return VerificationStep(VerificationPhase.EXHAUSTED, StepAction.SET_SCROLL, scroll_top=target)
    return VerificationStep(
        VerificationPhase.CORRECTING,
        StepAction.SET_SCROLL,
        scroll_top=target,
        next_attempt=attempt + 1,
    )
