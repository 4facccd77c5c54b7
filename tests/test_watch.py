from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from headingnav.runtime.watch import FileWatcher, file_signature


class FileWatcherTests(unittest.TestCase):
    def test_signature_reflects_existence(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            self.assertEqual(file_signature(path), ("missing", 0, 0))
            path.write_text("a\n", encoding="utf-8")
            self.assertEqual(file_signature(path)[0], "ok")

    def test_poll_reports_each_change_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            path.write_text("a\n", encoding="utf-8")
            watcher = FileWatcher(path, interval_seconds=0.5)

            self.assertFalse(watcher.poll(1.0))
            path.write_text("changed text\n", encoding="utf-8")
            os.utime(path, ns=(1, 1))
            self.assertFalse(watcher.poll(1.1))  # rate limited
            self.assertTrue(watcher.poll(2.0))
            self.assertFalse(watcher.poll(3.0))

    def test_deleted_file_is_not_reported_as_reloadable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            path.write_text("a\n", encoding="utf-8")
            watcher = FileWatcher(path)
            path.unlink()

            self.assertFalse(watcher.poll(10.0))


if __name__ == "__main__":
    unittest.main()
