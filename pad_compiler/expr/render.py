"""
Re-emission of syntax tree fragments back into source-like display text.

The renderer walks the leaf tokens of a tree-sitter node and joins them the
way they were written: tokens that touched in the source stay together and any
run of whitespace (or a comment) between two tokens becomes a single space.
String-like literals are emitted as one token so their contents survive
verbatim.

    if  x >   0   // positive
        { ... }

renders its condition as ``x > 0``.
"""

from __future__ import annotations

from typing import AbstractSet, Iterator

from tree_sitter import Node


class TokenRenderer:
    def __init__(
        self,
        *,
        atomic_kinds: AbstractSet[str] = frozenset(),
        comment_kinds: AbstractSet[str] = frozenset(),
    ) -> None:
        self._atomic_kinds = frozenset(atomic_kinds)
        self._comment_kinds = frozenset(comment_kinds)

    def render(self, source: bytes, node: Node) -> str:
        parts: list[str] = []
        prev_end: int | None = None
        for leaf in self._leaves(node):
            if prev_end is not None and leaf.start_byte > prev_end:
                parts.append(" ")
            parts.append(source[leaf.start_byte : leaf.end_byte].decode("utf-8", errors="replace"))
            prev_end = leaf.end_byte
        return "".join(parts)

    def _leaves(self, node: Node) -> Iterator[Node]:
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type in self._comment_kinds:
                continue
            if current.child_count == 0 or current.type in self._atomic_kinds:
                # zero-width tokens (e.g. automatic semicolons) carry no text
                if current.end_byte > current.start_byte:
                    yield current
                continue
            stack.extend(reversed(current.children))


def collapse_member_access(text: str) -> str:
    """``a . b`` -> ``a.b``."""
    return text.replace(" . ", ".")
