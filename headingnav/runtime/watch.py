"""File-change watch signature for poll-based document reloads."""

from __future__ import annotations

from pathlib import Path


def file_signature(path: Path) -> tuple[str, int, int]:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0)
    except OSError:
        return ("error", 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size)


class FileWatcher:
    """Poll a file's signature at a bounded rate and report changes."""

    def __init__(self, path: Path, interval_seconds: float = 0.5) -> None:
        self.path = path
        self.interval_seconds = interval_seconds
        self._signature = file_signature(path)
        self._next_check = 0.0

    def poll(self, now: float) -> bool:
        """Return ``True`` once per observed change to the watched file."""
        if now < self._next_check:
            return False
        self._next_check = now + self.interval_seconds
        signature = file_signature(self.path)
        if signature == self._signature:
            return False
        self._signature = signature
        return signature[0] == "ok"
