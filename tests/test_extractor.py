"""Heading extraction behavior on representative markdown inputs."""

from __future__ import annotations

import unittest
from unittest import mock

from headingnav.headings import extract_headings, find_active_heading_id, find_heading


class ExtractHeadingsTests(unittest.TestCase):
    def test_atx_headings_including_list_nested(self) -> None:
        text = "# Title\n\n## Section 1\n\n- ### Nested\n"
        headings = extract_headings(text)

        self.assertEqual([h.level for h in headings], [1, 2, 3])
        self.assertEqual([h.text for h in headings], ["Title", "Section 1", "Nested"])
        starts = [h.start for h in headings]
        self.assertEqual(starts, sorted(set(starts)))
        self.assertEqual(headings[2].start, text.index("### Nested"))
        self.assertEqual([h.line for h in headings], [0, 2, 4])

    def test_inline_markup_is_stripped(self) -> None:
        headings = extract_headings("## Hello **world** and [link](http://x)")

        self.assertEqual(len(headings), 1)
        self.assertEqual(headings[0].text, "Hello world and link")

    def test_code_spans_images_and_escapes_keep_visible_text(self) -> None:
        headings = extract_headings("# Use `run()` with ![alt text](a.png) \\*now\\*\n")

        self.assertEqual(headings[0].text, "Use run() with alt text *now*")

    def test_empty_heading_is_discarded(self) -> None:
        self.assertEqual(extract_headings("### \n"), [])

    def test_setext_heading_levels_and_position(self) -> None:
        filler = "".join(f"line {i}\n\n" for i in range(5))
        text = filler + "Landing\n======\n\nDetails\n-------\n"
        headings = extract_headings(text)

        self.assertEqual([(h.text, h.level) for h in headings], [("Landing", 1), ("Details", 2)])
        self.assertEqual(headings[0].line, 10)
        self.assertEqual(headings[0].start, text.index("Landing"))
        self.assertEqual(text[headings[0].start : headings[0].end], "Landing\n======")

    def test_seven_hashes_is_not_a_heading(self) -> None:
        headings = extract_headings("###### Six\n\n####### Seven\n")

        self.assertEqual([h.text for h in headings], ["Six"])
        self.assertEqual(headings[0].level, 6)

    def test_raw_html_text_is_kept_literally(self) -> None:
        headings = extract_headings("# Hello <world>\n")

        self.assertEqual(headings[0].text, "Hello <world>")

    def test_headings_inside_code_blocks_are_ignored(self) -> None:
        text = "```\n# not a heading\n```\n\n    # indented code\n\n# Real\n"
        headings = extract_headings(text)

        self.assertEqual([h.text for h in headings], ["Real"])

    def test_blockquote_heading_starts_at_marker(self) -> None:
        text = "> ## Quoted\n"
        headings = extract_headings(text)

        self.assertEqual(headings[0].text, "Quoted")
        self.assertEqual(headings[0].start, text.index("##"))

    def test_long_heading_text_is_not_truncated(self) -> None:
        words = " ".join(f"word{i}" for i in range(300))
        headings = extract_headings(f"# {words}\n")

        self.assertEqual(headings[0].text, words)

    def test_whitespace_is_collapsed(self) -> None:
        headings = extract_headings("#   Spaced    out\ttext   #\n")

        self.assertEqual(headings[0].text, "Spaced out text")

    def test_ids_derive_from_start_offset(self) -> None:
        text = "intro\n\n# One\n"
        headings = extract_headings(text)

        self.assertEqual(headings[0].id, f"heading-{text.index('# One')}")

    def test_extraction_is_pure_and_ordered(self) -> None:
        text = "# A\n\ntext\n\n## B\n\n> ### C\n\n1. #### D\n\nE\n---\n"
        first = extract_headings(text)
        second = extract_headings(text)

        self.assertEqual(first, second)
        self.assertEqual([h.text for h in first], ["A", "B", "C", "D", "E"])
        for previous, current in zip(first, first[1:]):
            self.assertLess(previous.start, current.start)
        for heading in first:
            self.assertLess(heading.start, heading.end)

    def test_deep_list_chain_keeps_following_headings(self) -> None:
        depth = 25
        chain = "".join(f"{'  ' * level}- item {level}\n" for level in range(depth))
        text = "# Before\n\n" + chain + f"{'  ' * depth}- ### Nested\n\n# After\n"
        headings = extract_headings(text)

        self.assertEqual([h.text for h in headings], ["Before", "Nested", "After"])
        self.assertEqual(headings[1].start, text.index("### Nested"))
        self.assertEqual(headings[2].start, text.index("# After"))

    def test_deep_blockquote_chain_keeps_nested_heading(self) -> None:
        text = "# Before\n\n" + "> " * 25 + "### Nested\n\n# After\n"
        headings = extract_headings(text)

        self.assertEqual([h.text for h in headings], ["Before", "Nested", "After"])
        self.assertEqual(headings[1].level, 3)

    def test_parse_failure_returns_empty_list(self) -> None:
        with mock.patch("headingnav.headings.extractor.parse_block_tree", side_effect=RuntimeError("boom")):
            with self.assertLogs("headingnav.headings.extractor", level="ERROR"):
                self.assertEqual(extract_headings("# Title\n"), [])


class HeadingLookupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.text = "preamble\n\n# One\n\nbody\n\n## Two\n\nmore\n"
        self.headings = extract_headings(self.text)

    def test_active_heading_is_last_starting_at_or_before_position(self) -> None:
        one, two = self.headings
        self.assertEqual(find_active_heading_id(self.headings, one.start), one.id)
        self.assertEqual(find_active_heading_id(self.headings, self.text.index("body")), one.id)
        self.assertEqual(find_active_heading_id(self.headings, len(self.text)), two.id)

    def test_position_above_first_heading_falls_back_to_first(self) -> None:
        self.assertEqual(find_active_heading_id(self.headings, 0), self.headings[0].id)

    def test_no_headings_has_no_active_id(self) -> None:
        self.assertIsNone(find_active_heading_id([], 5))

    def test_find_heading_by_id(self) -> None:
        two = self.headings[1]
        self.assertIs(find_heading(self.headings, two.id), two)
        self.assertIsNone(find_heading(self.headings, "heading-9999"))
        self.assertIsNone(find_heading(self.headings, None))


if __name__ == "__main__":
    unittest.main()
