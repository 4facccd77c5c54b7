"""Terminal host: document view, timers, rendering, and the event loop.

The interactive entry point (`run_viewer`) is imported lazily so that
importing the package does not pull in tty-only modules.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import viewer entrypoint to avoid tty setup on import."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


__all__ = ["run_viewer"]
