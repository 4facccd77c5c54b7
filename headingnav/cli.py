"""Command-line front door for headingnav.

Parses CLI options, loads config and the markdown source, then either
prints the heading outline or launches the interactive viewer.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from .headings import extract_headings, format_outline
from .highlight import read_text
from .navigator import PanelDimensions, normalize_panel_height_percentage, normalize_panel_width
from .runtime import run_viewer
from .runtime.config import AppConfig, load_app_config
from .runtime.logs import configure_logging


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _is_interactive() -> bool:
    try:
        return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
    except (OSError, ValueError):
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headingnav",
        description="View a markdown file and jump between its headings.",
    )
    parser.add_argument("path", help="Markdown file to open.")
    parser.add_argument("--style", default=None, help="Pygments style name (default: from config, else monokai).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--verbose", action="store_true", help="Write debug records to the log file.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Heading popup width in pixels (240-640).")
    parser.add_argument(
        "--max-height-percent",
        type=_positive_int,
        default=None,
        help="Heading popup max height as a percentage of the view (40-90).",
    )
    parser.add_argument("--list", action="store_true", help="Print the heading outline and exit.")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Layer command-line options over file config, clamping popup sizes."""
    width = config.dimensions.width
    ratio = config.dimensions.max_height_ratio
    if args.width is not None:
        width, _ = normalize_panel_width(args.width)
    if args.max_height_percent is not None:
        percentage, _ = normalize_panel_height_percentage(args.max_height_percent)
        ratio = percentage / 100
    style = args.style.strip() if args.style and args.style.strip() else config.style
    return replace(config, dimensions=PanelDimensions(width=width, max_height_ratio=ratio), style=style)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and open ``path`` in the viewer.

    ``--list`` (or a non-tty stdout) prints the outline instead of starting
    the interactive viewer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if path.is_dir():
        raise SystemExit(f"Not a file: {path}")

    configure_logging(verbose=args.verbose)
    config = apply_overrides(load_app_config(), args)
    try:
        source = read_text(path)
    except OSError as exc:
        raise SystemExit(f"Cannot read {path}: {exc}") from exc

    if args.list or not _is_interactive():
        sys.stdout.write(format_outline(extract_headings(source)))
        return

    run_viewer(source, path, config, args.no_color)


if __name__ == "__main__":
    main()
