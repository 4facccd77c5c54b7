"""Main interactive event loop for the terminal viewer.

Each iteration renders when dirty, lays out rows near the viewport, waits
for a key or the next timer deadline, then dispatches. Navigator keys go
to the session's controller while the popup is open.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from ..highlight import highlight_markdown_lines, read_text
from ..navigator import HeadingNavigatorSession
from .document_view import TerminalDocumentView
from .keys import read_key
from .render import render_frame
from .terminal import TerminalController
from .timers import TimerQueue
from .watch import FileWatcher

IDLE_POLL_SECONDS = 0.25
RELOADED_MESSAGE = "reloaded"

TOGGLE_KEYS = frozenset({"g", "CTRL_G"})
QUIT_KEYS = frozenset({"q", "Q"})
DOWN_KEYS = frozenset({"j", "DOWN", "ENTER"})
UP_KEYS = frozenset({"k", "UP"})
PAGE_DOWN_KEYS = frozenset({"PAGE_DOWN", "CTRL_F", " "})
PAGE_UP_KEYS = frozenset({"PAGE_UP", "CTRL_B"})


@dataclass
class ViewerState:
    """Mutable per-run viewer state shared by the loop and key handlers."""

    path: Path
    view: TerminalDocumentView
    session: HeadingNavigatorSession
    style: str
    no_color: bool = False
    message: str = ""
    dirty: bool = True
    skip_next_lf: bool = False
    _display_source: str | None = field(default=None, repr=False)
    _display_lines: list[str] = field(default_factory=list, repr=False)

    def display_lines(self) -> list[str]:
        """Return highlighted rows, recomputed only when the text changed."""
        text = self.view.text
        if text != self._display_source:
            self._display_lines = highlight_markdown_lines(text, self.style, self.no_color)
            self._display_source = text
        return self._display_lines


def reload_document(state: ViewerState) -> bool:
    """Re-read the watched file into the view; return whether text changed."""
    try:
        text = read_text(state.path)
    except OSError as exc:
        state.message = f"reload failed: {exc}"
        return True
    if text == state.view.text:
        return False
    state.view.replace_text(text)
    state.message = RELOADED_MESSAGE
    return True


def normalize_enter_key(state: ViewerState, key: str) -> str | None:
    """Collapse CR/LF pairs into one ``ENTER``; ``None`` means drop the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    state.skip_next_lf = key == "ENTER_CR"
    if key in {"ENTER_CR", "ENTER_LF"}:
        return "ENTER"
    return key


def handle_normal_key(state: ViewerState, key: str) -> bool:
    """Handle one key while the popup is closed. Returns ``True`` to quit."""
    view = state.view
    page = max(1, int(view.client_height) - 1)
    if key in QUIT_KEYS:
        return True
    if key in TOGGLE_KEYS:
        state.session.toggle()
    elif key in DOWN_KEYS:
        view.move_cursor_lines(1)
    elif key in UP_KEYS:
        view.move_cursor_lines(-1)
    elif key in PAGE_DOWN_KEYS:
        view.scroll_by(page)
        view.move_cursor_lines(page)
    elif key in PAGE_UP_KEYS:
        view.scroll_by(-page)
        view.move_cursor_lines(-page)
    elif key == "HOME":
        view.move_cursor_lines(-view.cursor_line)
    elif key == "END":
        view.move_cursor_lines(view.line_index.line_count)
    return False


def handle_key(state: ViewerState, key: str) -> bool:
    """Route ``key`` to the popup or the document. Returns ``True`` to quit."""
    state.message = ""
    session = state.session
    if session.is_open():
        if key == "CTRL_G":
            session.toggle()
        else:
            session.controller.handle_key(key)
        return False
    return handle_normal_key(state, key)


def run_main_loop(
    state: ViewerState,
    terminal: TerminalController,
    stdin_fd: int,
    timers: TimerQueue,
    watcher: FileWatcher | None = None,
) -> None:
    """Run the viewer until a quit key is pressed."""
    title = state.path.name
    with terminal.raw_mode():
        while True:
            columns, lines = terminal.size()
            content_rows = max(1, lines - 1)
            if content_rows != int(state.view.client_height):
                state.view.resize(content_rows)
                state.dirty = True

            if state.dirty:
                frame = render_frame(
                    state.view,
                    state.session,
                    state.display_lines(),
                    columns,
                    lines,
                    title,
                    state.message,
                )
                terminal.write_frame(frame)
                state.dirty = False
            state.view.refresh_layout()

            wait = timers.seconds_until_next()
            wait = IDLE_POLL_SECONDS if wait is None else min(wait, IDLE_POLL_SECONDS)
            try:
                key = read_key(stdin_fd, timeout_ms=max(1, int(wait * 1000)))
            except KeyboardInterrupt:
                continue

            if timers.run_due():
                state.dirty = True
            if watcher is not None and watcher.poll(time.monotonic()):
                if reload_document(state):
                    state.dirty = True
            if key == "":
                continue

            normalized = normalize_enter_key(state, key)
            if normalized is None:
                continue
            if handle_key(state, normalized):
                return
            state.dirty = True
