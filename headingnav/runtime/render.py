"""Frame rendering for the document pane, navigator popup, and status bar.

Rendering is a pure function of view/session state so it can be tested
without a terminal. Rows are joined with CRLF for raw-mode output.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, pad_ansi_line, truncate_text
from ..headings import HeadingEntry
from ..navigator import HeadingNavigatorSession
from .document_view import TerminalDocumentView

RESET = "\x1b[0m"
REVERSE = "\x1b[7m"
DIM = "\x1b[2m"
BOLD = "\x1b[1m"

CELL_WIDTH_PX = 8
MIN_POPUP_COLUMNS = 20
POPUP_CHROME_ROWS = 2
EMPTY_POPUP_MESSAGE = "No headings found"


@dataclass(frozen=True)
class PopupGeometry:
    """Popup placement in terminal cells."""

    left: int
    width: int
    list_rows: int


def popup_geometry(session: HeadingNavigatorSession, columns: int, content_rows: int) -> PopupGeometry:
    """Size the popup from its pixel width and max-height ratio."""
    dimensions = session.controller.dimensions
    width = max(MIN_POPUP_COLUMNS, dimensions.width // CELL_WIDTH_PX)
    width = min(width, columns)
    max_rows = max(POPUP_CHROME_ROWS + 1, int(content_rows * dimensions.max_height_ratio))
    list_rows = max(1, max_rows - POPUP_CHROME_ROWS)
    return PopupGeometry(left=columns - width, width=width, list_rows=list_rows)


def format_popup_entry(heading: HeadingEntry, width: int, selected: bool) -> str:
    """Render one popup row: level-indented text with its ``H{n} · line`` label."""
    indent = "  " * (heading.level - 1)
    label = heading.label
    text = truncate_text(heading.text, max(1, width - len(indent) - len(label) - 3))
    body = f" {indent}{text}"
    gap = max(1, width - display_width(body) - len(label) - 1)
    row = f"{body}{' ' * gap}{label} "
    if selected:
        return f"{REVERSE}{pad_ansi_line(row, width)}{RESET}"
    return f"{body}{' ' * gap}{DIM}{label}{RESET} "


def render_popup_rows(session: HeadingNavigatorSession, geometry: PopupGeometry) -> list[str]:
    """Return the popup's rows (prompt, divider, entries), each ``width`` wide."""
    controller = session.controller
    state = controller.state
    if state is None:
        return []
    width = geometry.width
    rows = [
        f"{BOLD}{pad_ansi_line(f' Go to heading: {state.filter_text}_', width)}{RESET}",
        pad_ansi_line("─" * width, width),
    ]
    if not state.filtered:
        rows.append(pad_ansi_line(f" {EMPTY_POPUP_MESSAGE}", width))
        return rows

    _, visible = controller.list_window(geometry.list_rows)
    for heading in visible:
        entry = format_popup_entry(heading, width, heading.id == state.selected_id)
        rows.append(pad_ansi_line(entry, width) + RESET)
    return rows


def _highlighted_lines(view: TerminalDocumentView) -> range:
    if view.highlight is None:
        return range(0)
    start, end = view.highlight
    index = view.line_index
    return range(index.line_for(start), index.line_for(max(start, end - 1)) + 1)


def render_document_row(
    view: TerminalDocumentView,
    display_lines: Sequence[str],
    line: int,
    width: int,
    gutter_width: int,
) -> str:
    """Render one document row with cursor marker and line-number gutter."""
    if line >= len(display_lines):
        return pad_ansi_line(f"{DIM}~{RESET}", width) + RESET
    marker = ">" if line == view.cursor_line else " "
    gutter = f"{marker}{line + 1:>{gutter_width}} "
    body_width = max(0, width - len(gutter))
    if line in _highlighted_lines(view):
        plain = view.line_index.line_text(line)
        return pad_ansi_line(f"{DIM}{gutter}{RESET}{REVERSE}{pad_ansi_line(plain, body_width)}", width) + RESET
    body = clip_ansi_line(display_lines[line], body_width)
    return pad_ansi_line(f"{DIM}{gutter}{RESET}{body}", width) + RESET


def render_status_row(
    view: TerminalDocumentView,
    session: HeadingNavigatorSession,
    title: str,
    columns: int,
    message: str = "",
) -> str:
    """Render the bottom status bar."""
    position = f"L{view.cursor_line + 1}/{view.line_index.line_count}"
    if session.is_open():
        hints = "↑/↓ move  Enter jump  Esc cancel"
    else:
        hints = "g headings  j/k move  q quit"
    text = f" {title}  {position}  {message or hints}"
    return f"{REVERSE}{pad_ansi_line(text, columns)}{RESET}"


def render_frame(
    view: TerminalDocumentView,
    session: HeadingNavigatorSession,
    display_lines: Sequence[str],
    columns: int,
    rows: int,
    title: str,
    message: str = "",
) -> str:
    """Compose a full frame of ``rows`` x ``columns`` cells."""
    content_rows = max(1, rows - 1)
    gutter_width = max(3, len(str(view.line_index.line_count)))
    popup_rows: list[str] = []
    geometry: PopupGeometry | None = None
    if session.is_open():
        geometry = popup_geometry(session, columns, content_rows)
        popup_rows = render_popup_rows(session, geometry)

    out: list[str] = []
    first_line = view.first_visible_line
    for row in range(content_rows):
        line = first_line + row
        if geometry is not None and row < len(popup_rows):
            left = render_document_row(view, display_lines, line, geometry.left, gutter_width)
            out.append(f"{left}{RESET}{popup_rows[row]}")
        else:
            out.append(render_document_row(view, display_lines, line, columns, gutter_width))
    out.append(render_status_row(view, session, title, columns, message))
    return "\r\n".join(out)
