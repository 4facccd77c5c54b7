"""Source loading, sanitization, and markdown syntax highlighting.

Highlighting goes through Pygments' markdown lexer and terminal formatter.
Terminal control bytes are neutralized before anything reaches the screen.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
FALLBACK_STYLE = "monokai"


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=16)
def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the fallback style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return FALLBACK_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def highlight_markdown_lines(source: str, style: str = FALLBACK_STYLE, no_color: bool = False) -> list[str]:
    """Return one display string per source line, ANSI-colored unless ``no_color``.

    The result always has exactly as many entries as ``source`` has lines.
    """
    plain_lines = sanitize_terminal_text(source).split("\n")
    plain_lines = [line.rstrip("\r") for line in plain_lines]
    if no_color:
        return plain_lines

    rendered = pygments_highlight(
        "\n".join(plain_lines),
        MarkdownLexer(stripnl=False, ensurenl=False),
        _formatter_for_style(normalize_style(style)),
    )
    colored = rendered.split("\n")
    if len(colored) != len(plain_lines):
        return plain_lines
    return colored
