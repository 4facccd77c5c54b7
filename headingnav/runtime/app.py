"""Viewer bootstrap: build the document view, session, and timers, then loop."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..navigator import HeadingNavigatorSession
from .config import AppConfig
from .document_view import TerminalDocumentView
from .loop import ViewerState, run_main_loop
from .terminal import TerminalController
from .timers import TimerQueue
from .watch import FileWatcher

LOGGER = logging.getLogger(__name__)


def run_viewer(text: str, path: Path, config: AppConfig, no_color: bool = False) -> None:
    """Run the interactive viewer on ``text`` loaded from ``path``."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    _, lines = terminal.size()

    view = TerminalDocumentView(text, client_height=max(1, lines - 1))
    timers = TimerQueue()
    session = HeadingNavigatorSession(
        view,
        timers,
        dimensions=config.dimensions,
        policy=config.policy,
    )
    state = ViewerState(
        path=path,
        view=view,
        session=session,
        style=config.style,
        no_color=no_color or "NO_COLOR" in os.environ,
    )
    LOGGER.debug("viewing %s (%d headings)", path, len(session.headings))
    try:
        run_main_loop(state, terminal, stdin_fd, timers, FileWatcher(path))
    finally:
        session.dispose()
