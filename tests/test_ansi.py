"""ANSI-aware width, clipping, and padding tests."""

import unittest

from headingnav import ansi as ansi_mod


class AnsiWidthTests(unittest.TestCase):
    def test_escapes_do_not_count_toward_width(self) -> None:
        self.assertEqual(ansi_mod.display_width("\x1b[31mred\x1b[0m"), 3)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)
        self.assertEqual(ansi_mod.display_width("é"), 1)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("ab\tc"), 9)
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 10), "a       b")

    def test_clip_preserves_escapes(self) -> None:
        clipped = ansi_mod.clip_ansi_line("\x1b[1mheading text\x1b[0m", 7)
        self.assertEqual(clipped, "\x1b[1mheading")

    def test_wide_character_is_not_split(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日", 2), "a")

    def test_pad_fills_to_width(self) -> None:
        self.assertEqual(ansi_mod.pad_ansi_line("ab", 5), "ab   ")
        self.assertEqual(ansi_mod.pad_ansi_line("abcdef", 3), "abc")
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")

    def test_truncate_text_adds_ellipsis_only_when_needed(self) -> None:
        self.assertEqual(ansi_mod.truncate_text("Install", 10), "Install")
        self.assertEqual(ansi_mod.truncate_text("Installation guide", 8), "Install…")
        self.assertEqual(ansi_mod.display_width(ansi_mod.truncate_text("日本語の見出し", 5)), 5)


if __name__ == "__main__":
    unittest.main()
