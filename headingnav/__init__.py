"""Public package surface for headingnav.

Exports ``main`` for programmatic CLI invocation. Heading extraction lives
in ``headingnav.headings`` and the popup state machine in
``headingnav.navigator``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
