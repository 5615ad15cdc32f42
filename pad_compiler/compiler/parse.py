"""
Stage 1 — Parse source text into a tree-sitter syntax tree.

tree-sitter always produces a tree, recovering around bad input with ERROR
and MISSING nodes. Any such node means the source is rejected: the first one
in source order is reported as a position-annotated SourceParseError and no
partial tree is handed on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tree_sitter import Node, Parser, Tree

from pad_compiler.errors import SourceParseError
from pad_compiler.registry.language_registry import (
    LanguageDefinition,
    LanguageRegistry,
    build_default_registry,
)


@dataclass(frozen=True)
class SourceTree:
    language: LanguageDefinition
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node


def parse_source(
    payload: Any,
    language: str = "rust",
    *,
    registry: Optional[LanguageRegistry] = None,
) -> SourceTree:
    """
    Accepts source text in the given language and returns its syntax tree.
    """

    definition = (registry or build_default_registry()).get(language)

    if not isinstance(payload, str):
        raise SourceParseError(
            f"Unsupported payload type {type(payload).__name__}; expected str"
        )
    try:
        source = payload.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SourceParseError(f"source is not valid UTF-8 text: {exc.reason}") from exc

    # Parsers hold per-parse state; only the Language objects are shared.
    parser = Parser(definition.tree_sitter_language())
    tree = parser.parse(source)
    if tree.root_node.has_error:
        raise SourceParseError(describe_syntax_error(source, tree.root_node))
    return SourceTree(language=definition, source=source, tree=tree)


def describe_syntax_error(source: bytes, root: Node) -> str:
    fault = _first_fault(root)
    row, column = fault.start_point
    if fault.is_missing:
        detail = f"expected `{fault.type}`"
    else:
        token = _first_token(source, fault)
        detail = f"unexpected `{token}`" if token else "unexpected end of input"
    return f"{detail} at line {row + 1}, column {column + 1}"


def _first_fault(root: Node) -> Node:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            return node
        stack.extend(
            reversed([child for child in node.children if child.has_error or child.is_missing])
        )
    return root


def _first_token(source: bytes, node: Node) -> str:
    while node.child_count:
        node = node.children[0]
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace").strip()
