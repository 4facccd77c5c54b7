"""Lazy pre-order traversal over markdown block structure.

Parsing is delegated to markdown-it-py; this module turns its line-mapped
syntax tree into ``BlockNode`` records carrying character offsets.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .line_index import LineIndex

ATX_HEADING = "ATXHeading"
SETEXT_HEADING = "SetextHeading"

# Only these block kinds can contain headings; everything else is a leaf.
CONTAINER_NODE_TYPES = frozenset(
    {
        "root",
        "blockquote",
        "bullet_list",
        "ordered_list",
        "list_item",
    }
)

# The commonmark preset stops at 20 open blocks and drops the rest of the
# document. Parser and tree builder recurse per level: keep this well under
# the interpreter recursion limit.
MAX_NESTING = 200


@dataclass(frozen=True)
class BlockNode:
    """One block-level node with its source span.

    ``level`` is the heading level for heading kinds and ``0`` otherwise.
    """

    kind: str
    start: int
    end: int
    level: int
    node: SyntaxTreeNode


@lru_cache(maxsize=1)
def markdown_parser() -> MarkdownIt:
    """Return the shared CommonMark parser (raw HTML kept as literal text)."""
    return MarkdownIt("commonmark", {"html": False, "maxNesting": MAX_NESTING})


def parse_block_tree(text: str) -> SyntaxTreeNode:
    """Parse ``text`` into a markdown-it syntax tree."""
    return SyntaxTreeNode(markdown_parser().parse(text))


def _heading_kind(node: SyntaxTreeNode) -> str:
    """Classify a heading node as ATX (``#`` run) or Setext (underline)."""
    markup = node.markup
    if markup and set(markup) <= {"=", "-"}:
        return SETEXT_HEADING
    return ATX_HEADING


def _heading_level(node: SyntaxTreeNode) -> int:
    """Return the numeric level from an ``hN`` tag, or ``0`` when malformed."""
    tag = node.tag or ""
    if len(tag) < 2 or tag[0] != "h" or not tag[1:].isdigit():
        return 0
    return int(tag[1:])


def _inline_content(node: SyntaxTreeNode) -> str:
    for child in node.children:
        if child.type == "inline":
            return child.content
    return ""


def _heading_start(kind: str, node: SyntaxTreeNode, line_index: LineIndex, first_line: int) -> int:
    """Locate the first character of a heading within its first source line.

    Container prefixes (``- ``, ``> ``, indentation) are skipped: ATX headings
    start at their marker run, Setext headings at their first content character.
    """
    line_start = line_index.line_start(first_line)
    line_text = line_index.line_text(first_line)
    if kind == ATX_HEADING:
        column = line_text.find("#")
        return line_start + max(0, column)

    first_content_line = _inline_content(node).split("\n", 1)[0].strip()
    column = line_text.find(first_content_line) if first_content_line else -1
    if column < 0:
        column = len(line_text) - len(line_text.lstrip())
    return line_start + column


def _block_for(node: SyntaxTreeNode, line_index: LineIndex) -> BlockNode | None:
    line_map = node.map
    if not line_map:
        return None
    first_line, end_line = line_map
    last_line = max(first_line, end_line - 1)
    end = line_index.line_end(last_line)

    if node.type == "heading":
        kind = _heading_kind(node)
        start = _heading_start(kind, node, line_index, first_line)
        return BlockNode(kind=kind, start=start, end=end, level=_heading_level(node), node=node)

    return BlockNode(kind=node.type, start=line_index.line_start(first_line), end=end, level=0, node=node)


def iter_blocks(tree: SyntaxTreeNode, line_index: LineIndex) -> Iterator[BlockNode]:
    """Yield block nodes of ``tree`` in document (pre-)order.

    Traversal uses an explicit stack so deeply nested list chains cannot hit
    the recursion limit. Leaf blocks are yielded but never descended into.
    """
    stack: list[SyntaxTreeNode] = [tree]
    while stack:
        node = stack.pop()
        if node.type != "root":
            block = _block_for(node, line_index)
            if block is not None:
                yield block
        if node.type in CONTAINER_NODE_TYPES:
            stack.extend(reversed(node.children))
