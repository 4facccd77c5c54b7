"""Frame rendering tests for the document pane, popup, and status bar."""

from __future__ import annotations

import unittest

from headingnav.ansi import display_width, strip_ansi
from headingnav.headings import HeadingEntry
from headingnav.navigator import HeadingNavigatorSession, PanelDimensions
from headingnav.runtime.document_view import TerminalDocumentView
from headingnav.runtime.render import (
    EMPTY_POPUP_MESSAGE,
    format_popup_entry,
    popup_geometry,
    render_frame,
)
from headingnav.runtime.timers import TimerQueue

DOCUMENT = "# Guide\n\nintro text\n\n## Install\n\nsteps\n\n### Linux\n\ndetails\n"


def _session(text: str = DOCUMENT, rows: int = 12) -> tuple[TerminalDocumentView, HeadingNavigatorSession]:
    view = TerminalDocumentView(text, client_height=rows - 1)
    return view, HeadingNavigatorSession(view, TimerQueue(), dimensions=PanelDimensions(width=320))


class RenderFrameTests(unittest.TestCase):
    def test_closed_frame_fills_screen(self) -> None:
        view, session = _session()
        frame = render_frame(view, session, DOCUMENT.split("\n"), 60, 12, "guide.md")
        rows = frame.split("\r\n")

        self.assertEqual(len(rows), 12)
        for row in rows:
            self.assertEqual(display_width(row), 60)
        self.assertIn("# Guide", strip_ansi(rows[0]))
        self.assertTrue(strip_ansi(rows[0]).startswith(">"))
        self.assertIn("g headings", strip_ansi(rows[-1]))
        self.assertIn("guide.md", strip_ansi(rows[-1]))

    def test_open_popup_lists_headings_with_labels(self) -> None:
        view, session = _session()
        session.open_panel()
        frame = render_frame(view, session, DOCUMENT.split("\n"), 80, 12, "guide.md")
        plain = [strip_ansi(row) for row in frame.split("\r\n")]

        self.assertIn("Go to heading: _", plain[0])
        self.assertIn("Guide", plain[2])
        self.assertIn("H1 · line 1", plain[2])
        self.assertIn("  Install", plain[3])
        self.assertIn("H2 · line 5", plain[3])
        self.assertIn("H3 · line 9", plain[4])
        self.assertIn("Esc cancel", plain[-1])
        for row in frame.split("\r\n"):
            self.assertEqual(display_width(row), 80)

    def test_popup_shows_filter_text_and_empty_state(self) -> None:
        view, session = _session()
        session.open_panel()
        for key in "zzz":
            session.controller.handle_key(key)
        frame = render_frame(view, session, DOCUMENT.split("\n"), 80, 12, "guide.md")
        plain = [strip_ansi(row) for row in frame.split("\r\n")]

        self.assertIn("Go to heading: zzz_", plain[0])
        self.assertIn(EMPTY_POPUP_MESSAGE, plain[2])

    def test_previewed_heading_is_highlighted_in_document(self) -> None:
        view, session = _session()
        session.open_panel()
        session.controller.handle_key("DOWN")
        frame = render_frame(view, session, DOCUMENT.split("\n"), 80, 12, "guide.md")

        row = frame.split("\r\n")[view.line_index.line_for(view.highlight[0]) - view.first_visible_line]
        self.assertIn("\x1b[7m## Install", row)


class PopupGeometryTests(unittest.TestCase):
    def test_width_and_height_follow_display_options(self) -> None:
        view, session = _session()
        geometry = popup_geometry(session, 100, 20)

        self.assertEqual(geometry.width, 40)
        self.assertEqual(geometry.left, 60)
        self.assertEqual(geometry.list_rows, 13)

    def test_width_never_exceeds_terminal(self) -> None:
        view, session = _session()
        session.controller.set_display_options(640, 0.9)

        self.assertEqual(popup_geometry(session, 30, 10).width, 30)

    def test_long_entries_are_truncated_to_width(self) -> None:
        heading = HeadingEntry(id="heading-0", text="x" * 100, level=2, start=0, end=10, line=0)
        row = format_popup_entry(heading, 40, selected=False)

        self.assertLessEqual(display_width(row), 40)
        self.assertIn("…", row)
        self.assertIn("H2 · line 1", strip_ansi(row))


if __name__ == "__main__":
    unittest.main()
