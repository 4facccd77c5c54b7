"""Viewport synchronization: host interfaces, alignment, snapshots."""

from .alignment import (
    AlignmentPolicy,
    Measurement,
    StepAction,
    VerificationPhase,
    VerificationStep,
    desired_scroll_top,
    measure_span,
    plan_step,
)
from .host import Alignment, EditorView, Scheduler, TimerHandle, VerticalSpan, clamp_scroll_top
from .scroll_sync import ScrollSynchronizer
from .snapshot import ViewportSnapshot, capture_viewport_snapshot, restore_viewport_snapshot

__all__ = [
    "Alignment",
    "AlignmentPolicy",
    "EditorView",
    "Measurement",
    "Scheduler",
    "ScrollSynchronizer",
    "StepAction",
    "TimerHandle",
    "VerificationPhase",
    "VerificationStep",
    "VerticalSpan",
    "ViewportSnapshot",
    "capture_viewport_snapshot",
    "clamp_scroll_top",
    "desired_scroll_top",
    "measure_span",
    "plan_step",
    "restore_viewport_snapshot",
]
