"""
Stage 2 — Select the function definitions among a file's top-level items.

Everything that is not a function (types, modules, impls, imports, ...) is
dropped silently; functions nested inside other items are not visited.
"""

from __future__ import annotations

from typing import List

from tree_sitter import Node

from pad_compiler.compiler.parse import SourceTree


def extract_functions(source_tree: SourceTree) -> List[Node]:
    kinds = source_tree.language.function_kinds
    return [item for item in source_tree.root.named_children if item.type in kinds]
