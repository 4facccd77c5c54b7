"""Key routing and reload behavior of the viewer loop helpers."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from headingnav.navigator import HeadingNavigatorSession
from headingnav.runtime.document_view import TerminalDocumentView
from headingnav.runtime.loop import (
    RELOADED_MESSAGE,
    ViewerState,
    handle_key,
    normalize_enter_key,
    reload_document,
)
from headingnav.runtime.timers import TimerQueue

DOCUMENT = "".join(f"line {i}\n" for i in range(60)) + "# Far Heading\n\nbody\n"


class ViewerLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "doc.md"
        self.path.write_text(DOCUMENT, encoding="utf-8")
        self.view = TerminalDocumentView(DOCUMENT, client_height=10)
        self.session = HeadingNavigatorSession(self.view, TimerQueue())
        self.state = ViewerState(path=self.path, view=self.view, session=self.session, style="monokai", no_color=True)

    def test_normal_mode_cursor_keys(self) -> None:
        handle_key(self.state, "j")
        handle_key(self.state, "DOWN")
        self.assertEqual(self.view.cursor_line, 2)
        handle_key(self.state, "k")
        self.assertEqual(self.view.cursor_line, 1)

    def test_page_keys_scroll_by_a_screen(self) -> None:
        handle_key(self.state, "PAGE_DOWN")
        self.assertEqual(self.view.first_visible_line, 9)
        handle_key(self.state, "PAGE_UP")
        self.assertEqual(self.view.first_visible_line, 0)

    def test_quit_only_when_popup_closed(self) -> None:
        self.assertTrue(handle_key(self.state, "q"))

        handle_key(self.state, "g")
        self.assertTrue(self.session.is_open())
        self.assertFalse(handle_key(self.state, "q"))
        self.assertEqual(self.session.controller.state.filter_text, "q")

    def test_ctrl_g_toggles_popup_closed(self) -> None:
        handle_key(self.state, "CTRL_G")
        self.assertTrue(self.session.is_open())
        handle_key(self.state, "CTRL_G")
        self.assertFalse(self.session.is_open())

    def test_popup_keys_route_to_controller(self) -> None:
        handle_key(self.state, "g")
        handle_key(self.state, "ENTER")

        self.assertFalse(self.session.is_open())
        self.assertEqual(self.view.cursor_line, 60)

    def test_cr_lf_pair_collapses_to_one_enter(self) -> None:
        self.assertEqual(normalize_enter_key(self.state, "ENTER_CR"), "ENTER")
        self.assertIsNone(normalize_enter_key(self.state, "ENTER_LF"))
        self.assertEqual(normalize_enter_key(self.state, "ENTER_LF"), "ENTER")
        self.assertEqual(normalize_enter_key(self.state, "x"), "x")

    def test_reload_replaces_text_and_refreshes_headings(self) -> None:
        self.path.write_text("# New\n", encoding="utf-8")

        self.assertTrue(reload_document(self.state))
        self.assertEqual(self.view.text, "# New\n")
        self.assertEqual([h.text for h in self.session.headings], ["New"])
        self.assertEqual(self.state.message, RELOADED_MESSAGE)
        self.assertFalse(reload_document(self.state))

    def test_display_lines_are_cached_per_text(self) -> None:
        first = self.state.display_lines()
        self.assertIs(self.state.display_lines(), first)
        self.assertEqual(len(first), self.view.line_index.line_count)

        self.view.replace_text("changed\n")
        self.assertEqual(self.state.display_lines(), ["changed", ""])


if __name__ == "__main__":
    unittest.main()
