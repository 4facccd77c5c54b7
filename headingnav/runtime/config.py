"""JSON config loading.

Reads popup dimensions, pygments style, and scroll-verification tuning.
All access is defensive: malformed or missing config falls back to defaults.
The file is only ever read; headingnav never writes it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..navigator.dimensions import (
    DEFAULT_PANEL_DIMENSIONS,
    PanelDimensions,
    normalize_panel_height_percentage,
    normalize_panel_width,
)
from ..viewport import Alignment, AlignmentPolicy

LOGGER = logging.getLogger(__name__)

APP_NAME = "headingnav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"
MAX_SCROLL_ATTEMPTS = 10
# The terminal view scrolls in whole rows.
ROW_TOLERANCE = 0.5
DEFAULT_ALIGNMENT_POLICY = AlignmentPolicy(tolerance=ROW_TOLERANCE)


@dataclass(frozen=True)
class AppConfig:
    """Resolved runtime settings."""

    dimensions: PanelDimensions = DEFAULT_PANEL_DIMENSIONS
    policy: AlignmentPolicy = DEFAULT_ALIGNMENT_POLICY
    style: str = DEFAULT_STYLE


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        LOGGER.warning("Ignoring unreadable config at %s", config_path, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _load_alignment(value: object, fallback: Alignment) -> Alignment:
    """Parse an alignment name, keeping ``fallback`` for unknown values."""
    if not isinstance(value, str):
        return fallback
    try:
        return Alignment(value.strip().lower())
    except ValueError:
        LOGGER.warning("Unknown alignment %r in config. Using %s.", value, fallback.value)
        return fallback


def load_panel_dimensions(data: dict[str, object]) -> PanelDimensions:
    """Normalize popup width/max-height settings, warning on invalid values."""
    width = DEFAULT_PANEL_DIMENSIONS.width
    if "panel_width" in data:
        width, changed = normalize_panel_width(data["panel_width"])
        if changed:
            LOGGER.warning("Invalid panel width setting detected. Using %dpx.", width)

    ratio = DEFAULT_PANEL_DIMENSIONS.max_height_ratio
    if "panel_max_height_percentage" in data:
        percentage, changed = normalize_panel_height_percentage(data["panel_max_height_percentage"])
        if changed:
            LOGGER.warning("Invalid panel height setting detected. Using %d%%.", percentage)
        ratio = percentage / 100

    return PanelDimensions(width=width, max_height_ratio=ratio)


def load_alignment_policy(data: dict[str, object]) -> AlignmentPolicy:
    """Build scroll-verification tuning from the ``scroll`` config object."""
    defaults = DEFAULT_ALIGNMENT_POLICY
    raw = data.get("scroll")
    if not isinstance(raw, dict):
        return defaults

    tolerance = raw.get("tolerance")
    max_attempts = raw.get("max_attempts")
    settle_checks = raw.get("settle_checks")
    delays = raw.get("delays")
    parsed_delays = defaults.delays
    if isinstance(delays, list) and delays and all(_is_number(item) and item >= 0 for item in delays):
        parsed_delays = tuple(float(item) for item in delays)

    return AlignmentPolicy(
        tolerance=float(tolerance) if _is_number(tolerance) and tolerance >= 0 else defaults.tolerance,
        max_attempts=(
            max(1, min(int(max_attempts), MAX_SCROLL_ATTEMPTS))
            if isinstance(max_attempts, int) and not isinstance(max_attempts, bool)
            else defaults.max_attempts
        ),
        settle_checks=(
            max(0, settle_checks)
            if isinstance(settle_checks, int) and not isinstance(settle_checks, bool)
            else defaults.settle_checks
        ),
        delays=parsed_delays,
        preview_alignment=_load_alignment(raw.get("preview_alignment"), defaults.preview_alignment),
        confirm_alignment=_load_alignment(raw.get("confirm_alignment"), defaults.confirm_alignment),
    )


def load_style_name(data: dict[str, object]) -> str:
    """Return configured pygments style name, or the default when unset/invalid."""
    value = data.get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load and normalize every runtime setting."""
    data = load_config(path)
    return AppConfig(
        dimensions=load_panel_dimensions(data),
        policy=load_alignment_policy(data),
        style=load_style_name(data),
    )
