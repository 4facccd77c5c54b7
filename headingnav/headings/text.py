"""Plain-text rendering of heading inline content."""

from __future__ import annotations

import re

from markdown_it.tree import SyntaxTreeNode

_WHITESPACE_RE = re.compile(r"\s+")
_LITERAL_NODE_TYPES = frozenset({"text", "text_special", "code_inline"})
_BREAK_NODE_TYPES = frozenset({"softbreak", "hardbreak"})


def normalize_whitespace(text: str) -> str:
    """Collapse internal whitespace to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def inline_plain_text(node: SyntaxTreeNode) -> str:
    """Return the visible text of an inline subtree.

    Emphasis and code-span markers are dropped, links keep their label, images
    keep their alt text, and escapes/entities are already resolved by the
    parser. Raw inline HTML contributes nothing.
    """
    parts: list[str] = []
    stack: list[SyntaxTreeNode] = [node]
    while stack:
        current = stack.pop()
        node_type = current.type
        if node_type in _LITERAL_NODE_TYPES:
            parts.append(current.content)
            continue
        if node_type in _BREAK_NODE_TYPES:
            parts.append(" ")
            continue
        if node_type == "html_inline":
            continue
        stack.extend(reversed(current.children))
    return "".join(parts)


def heading_plain_text(heading: SyntaxTreeNode) -> str:
    """Return normalized display text for a markdown-it ``heading`` node."""
    return normalize_whitespace(inline_plain_text(heading))
