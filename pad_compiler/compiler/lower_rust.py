"""
Stage 3 (Rust) — Lower a tree-sitter Rust function into the PAD node algebra.

    function  -> Block("fn <name>()", [Sequence])
    block     -> Sequence (transparent, one child per statement)
    let ...;  -> Command
    inner fn/struct/impl/...  -> Command("Inner item not supported")
    m!(...);  -> Command
    if        -> If (else-if nests under else_block)
    while     -> Loop
    for       -> Loop("for <pat> in <iter>")
    { ... }   -> Sequence
    anything else -> Command(<expression text>)

The last rule is the catch-all that keeps the lowering total: every node
kind the grammar can produce maps to some PAD node.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from tree_sitter import Node

from pad_compiler.compiler.lower_base import BaseLowerer, Deferred, Step
from pad_compiler.expr.render import TokenRenderer, collapse_member_access
from pad_compiler.schema.models import (
    BlockNode,
    CommandNode,
    IfNode,
    LoopNode,
    PadNode,
    SequenceNode,
)

INNER_ITEM_LABEL = "Inner item not supported"

FUNCTION_KINDS = frozenset({"function_item"})

COMMENT_KINDS = frozenset({"line_comment", "block_comment"})

# Parts of a block that are not statements at all.
NON_STATEMENT_KINDS = COMMENT_KINDS | frozenset(
    {"attribute_item", "inner_attribute_item", "empty_statement", "label"}
)

ITEM_KINDS = frozenset(
    {
        "function_item",
        "function_signature_item",
        "struct_item",
        "enum_item",
        "union_item",
        "impl_item",
        "trait_item",
        "mod_item",
        "use_declaration",
        "const_item",
        "static_item",
        "type_item",
        "associated_type",
        "macro_definition",
        "extern_crate_declaration",
        "foreign_mod_item",
    }
)

RENDERER = TokenRenderer(
    atomic_kinds={"string_literal", "raw_string_literal", "char_literal"},
    comment_kinds=COMMENT_KINDS,
)


def _named_children(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type not in COMMENT_KINDS]


class RustLowerer(BaseLowerer):
    """Lowers the functions of one parsed Rust source file."""

    def __init__(self, source: bytes) -> None:
        super().__init__(source)
        self._modes.update(
            {
                "function": self._function_step,
                "block": self._block_step,
                "statement": self._statement_step,
                "expression": self._expression_step,
            }
        )
        self._expr_dispatch: Dict[str, Callable[[Node], Step]] = {
            "if_expression": self._if_step,
            "while_expression": self._while_step,
            "for_expression": self._for_step,
            "block": self._block_step,
        }

    def text(self, node: Node) -> str:
        return RENDERER.render(self._source, node)

    def lower_function(self, func: Node) -> BlockNode:
        return self.lower("function", func)

    # -- items -------------------------------------------------------------

    def _function_step(self, func: Node) -> Deferred:
        label = f"fn {self.text(func.child_by_field_name('name'))}()"
        return Deferred(
            parts=[("block", func.child_by_field_name("body"))],
            build=lambda lowered: BlockNode(label=label, children=lowered),
        )

    # -- blocks and statements ---------------------------------------------

    def _block_step(self, block: Node) -> Deferred:
        statements = [stmt for stmt in block.named_children if stmt.type not in NON_STATEMENT_KINDS]
        return Deferred(
            parts=[("statement", stmt) for stmt in statements],
            build=lambda lowered: SequenceNode(children=lowered),
        )

    def _statement_step(self, stmt: Node) -> Step:
        if stmt.type == "let_declaration":
            return CommandNode(label=self.text(stmt))
        if stmt.type in ITEM_KINDS:
            return CommandNode(label=INNER_ITEM_LABEL)
        if stmt.type == "expression_statement":
            inner = _named_children(stmt)
            if not inner:
                return CommandNode(label=self.text(stmt))
            if inner[0].type == "macro_invocation":
                return CommandNode(label=self.text(stmt))
            return self._expression_step(inner[0])
        # tail expression of a block (no trailing semicolon)
        return self._expression_step(stmt)

    # -- expressions -------------------------------------------------------

    def _expression_step(self, expr: Node) -> Step:
        handler = self._expr_dispatch.get(expr.type)
        if handler is None:
            return CommandNode(label=self.text(expr))
        return handler(expr)

    def _if_step(self, expr: Node) -> Deferred:
        condition = collapse_member_access(self.text(expr.child_by_field_name("condition")))
        parts = [("block", expr.child_by_field_name("consequence"))]

        alternative = expr.child_by_field_name("alternative")
        if alternative is not None:
            arms = _named_children(alternative)
            if arms:
                parts.append(("expression", arms[0]))

        def build(lowered: List[PadNode]) -> IfNode:
            else_block = lowered[1] if len(lowered) > 1 else None
            return IfNode(condition=condition, then_block=lowered[0], else_block=else_block)

        return Deferred(parts=parts, build=build)

    def _while_step(self, expr: Node) -> Deferred:
        condition = self.text(expr.child_by_field_name("condition"))
        return Deferred(
            parts=[("block", expr.child_by_field_name("body"))],
            build=lambda lowered: LoopNode(condition=condition, body=lowered[0]),
        )

    def _for_step(self, expr: Node) -> Deferred:
        pattern = self.text(expr.child_by_field_name("pattern"))
        iterable = self.text(expr.child_by_field_name("value"))
        return Deferred(
            parts=[("block", expr.child_by_field_name("body"))],
            build=lambda lowered: LoopNode(condition=f"for {pattern} in {iterable}", body=lowered[0]),
        )
