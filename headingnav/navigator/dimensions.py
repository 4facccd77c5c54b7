"""Popup display-option bounds and normalization.

Caller-supplied sizes are never trusted: every value is clamped here before
the popup uses it. Normalizers report whether the input had to change.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MIN_PANEL_WIDTH = 240
MAX_PANEL_WIDTH = 640
MIN_PANEL_HEIGHT_PERCENTAGE = 40
MAX_PANEL_HEIGHT_PERCENTAGE = 90

DEFAULT_PANEL_WIDTH = 320
DEFAULT_PANEL_MAX_HEIGHT_RATIO = 0.75
DEFAULT_PANEL_HEIGHT_PERCENTAGE = round(DEFAULT_PANEL_MAX_HEIGHT_RATIO * 100)

MIN_PANEL_HEIGHT_RATIO = MIN_PANEL_HEIGHT_PERCENTAGE / 100
MAX_PANEL_HEIGHT_RATIO = MAX_PANEL_HEIGHT_PERCENTAGE / 100


@dataclass(frozen=True)
class PanelDimensions:
    """Popup width in pixels and maximum height relative to the viewport."""

    width: int = DEFAULT_PANEL_WIDTH
    max_height_ratio: float = DEFAULT_PANEL_MAX_HEIGHT_RATIO


DEFAULT_PANEL_DIMENSIONS = PanelDimensions()


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def _as_number(raw: object) -> float | None:
    """Return ``raw`` as a finite number, rejecting bools and non-numbers."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if not math.isfinite(raw):
        return None
    return raw


def normalize_panel_width(raw: object) -> tuple[int, bool]:
    """Clamp a width in pixels to ``[MIN_PANEL_WIDTH, MAX_PANEL_WIDTH]``."""
    value = _as_number(raw)
    if value is None:
        return DEFAULT_PANEL_WIDTH, True
    clamped = int(clamp(round(value), MIN_PANEL_WIDTH, MAX_PANEL_WIDTH))
    return clamped, clamped != value


def normalize_panel_height_percentage(raw: object) -> tuple[int, bool]:
    """Clamp a max-height percentage to the allowed whole-percent range."""
    value = _as_number(raw)
    if value is None:
        return DEFAULT_PANEL_HEIGHT_PERCENTAGE, True
    clamped = int(clamp(round(value), MIN_PANEL_HEIGHT_PERCENTAGE, MAX_PANEL_HEIGHT_PERCENTAGE))
    return clamped, clamped != value


def normalize_panel_height_ratio(raw: object) -> tuple[float, bool]:
    """Clamp a max-height ratio to ``[MIN_PANEL_HEIGHT_RATIO, MAX_PANEL_HEIGHT_RATIO]``."""
    value = _as_number(raw)
    if value is None:
        return DEFAULT_PANEL_MAX_HEIGHT_RATIO, True
    clamped = clamp(float(value), MIN_PANEL_HEIGHT_RATIO, MAX_PANEL_HEIGHT_RATIO)
    return clamped, clamped != value


def normalize_panel_dimensions(width: object = None, max_height_ratio: object = None) -> PanelDimensions:
    """Return clamped dimensions, substituting defaults for invalid values."""
    normalized_width, _ = normalize_panel_width(width)
    normalized_ratio, _ = normalize_panel_height_ratio(max_height_ratio)
    return PanelDimensions(width=normalized_width, max_height_ratio=normalized_ratio)
