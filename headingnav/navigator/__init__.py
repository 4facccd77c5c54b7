"""Heading navigator popup: filtering, state machine, and view session."""

from .controller import (
    CloseReason,
    NavigatorCallbacks,
    NavigatorController,
    NavigatorPhase,
    NavigatorState,
)
from .dimensions import (
    DEFAULT_PANEL_DIMENSIONS,
    PanelDimensions,
    normalize_panel_dimensions,
    normalize_panel_height_percentage,
    normalize_panel_height_ratio,
    normalize_panel_width,
)
from .filtering import FilterResult, apply_filter
from .session import HeadingNavigatorSession

__all__ = [
    "CloseReason",
    "DEFAULT_PANEL_DIMENSIONS",
    "FilterResult",
    "HeadingNavigatorSession",
    "NavigatorCallbacks",
    "NavigatorController",
    "NavigatorPhase",
    "NavigatorState",
    "PanelDimensions",
    "apply_filter",
    "normalize_panel_dimensions",
    "normalize_panel_height_percentage",
    "normalize_panel_height_ratio",
    "normalize_panel_width",
]
