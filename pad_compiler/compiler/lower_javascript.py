"""
Stage 3 (JavaScript) — Lower a tree-sitter JavaScript function declaration
into the PAD node algebra.

JavaScript control flow takes statements (not only blocks) as bodies, so a
braced body lowers to a Sequence while a single statement lowers to its own
node:

    if (ok) { a(); }   -> If("ok", Sequence[Command("a();")])
    if (ok) a();       -> If("ok", Command("a();"))
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from pad_compiler.compiler.lower_base import BaseLowerer, Deferred, Step
from pad_compiler.expr.render import TokenRenderer
from pad_compiler.schema.models import (
    BlockNode,
    CommandNode,
    IfNode,
    LoopNode,
    PadNode,
    SequenceNode,
)

FUNCTION_KINDS = frozenset({"function_declaration", "generator_function_declaration"})

COMMENT_KINDS = frozenset({"comment", "html_comment"})

RENDERER = TokenRenderer(
    atomic_kinds={"string", "template_string", "regex"},
    comment_kinds=COMMENT_KINDS,
)


def _named_children(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type not in COMMENT_KINDS]


class JavaScriptLowerer(BaseLowerer):
    """Lowers the functions of one parsed JavaScript source file."""

    def __init__(self, source: bytes) -> None:
        super().__init__(source)
        self._modes.update(
            {
                "function": self._function_step,
                "block": self._block_step,
                "statement": self._statement_step,
            }
        )
        self._stmt_dispatch: Dict[str, Callable[[Node], Step]] = {
            "statement_block": self._block_step,
            "if_statement": self._if_step,
            "while_statement": self._while_step,
            "for_statement": self._for_step,
            "for_in_statement": self._for_in_step,
        }

    def text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return RENDERER.render(self._source, node)

    def lower_function(self, func: Node) -> BlockNode:
        return self.lower("function", func)

    def _function_step(self, func: Node) -> Deferred:
        name = self.text(func.child_by_field_name("name")) or "anonymous"
        return Deferred(
            parts=[("block", func.child_by_field_name("body"))],
            build=lambda lowered: BlockNode(label=f"fn {name}()", children=lowered),
        )

    def _block_step(self, block: Node) -> Deferred:
        return Deferred(
            parts=[("statement", stmt) for stmt in _named_children(block)],
            build=lambda lowered: SequenceNode(children=lowered),
        )

    def _statement_step(self, stmt: Node) -> Step:
        handler = self._stmt_dispatch.get(stmt.type)
        if handler is None:
            return CommandNode(label=self.text(stmt))
        return handler(stmt)

    # -- control flow ------------------------------------------------------

    def _condition(self, node: Optional[Node]) -> str:
        if node is not None and node.type == "parenthesized_expression":
            inner = _named_children(node)
            if inner:
                return self.text(inner[0])
        return self.text(node)

    def _if_step(self, stmt: Node) -> Deferred:
        condition = self._condition(stmt.child_by_field_name("condition"))
        parts = [("statement", stmt.child_by_field_name("consequence"))]

        alternative = stmt.child_by_field_name("alternative")
        if alternative is not None:
            arms = _named_children(alternative)
            if arms:
                parts.append(("statement", arms[0]))

        def build(lowered: List[PadNode]) -> IfNode:
            else_block = lowered[1] if len(lowered) > 1 else None
            return IfNode(condition=condition, then_block=lowered[0], else_block=else_block)

        return Deferred(parts=parts, build=build)

    def _loop(self, condition: str, stmt: Node) -> Deferred:
        return Deferred(
            parts=[("statement", stmt.child_by_field_name("body"))],
            build=lambda lowered: LoopNode(condition=condition, body=lowered[0]),
        )

    def _while_step(self, stmt: Node) -> Deferred:
        return self._loop(self._condition(stmt.child_by_field_name("condition")), stmt)

    def _clause(self, node: Optional[Node]) -> str:
        return self.text(node).strip().rstrip(";").strip()

    def _for_step(self, stmt: Node) -> Deferred:
        init = self._clause(stmt.child_by_field_name("initializer"))
        test = self._clause(stmt.child_by_field_name("condition"))
        update = self._clause(stmt.child_by_field_name("increment"))
        if init or test or update:
            return self._loop(f"for ({init}; {test}; {update})", stmt)
        return self._loop("for (;;)", stmt)

    def _for_in_step(self, stmt: Node) -> Deferred:
        # `for [await] ( [kind] left in|of right )`
        head: List[str] = []
        inside = False
        for child in stmt.children:
            if child.type in COMMENT_KINDS:
                continue
            if child.type == "(":
                inside = True
            elif child.type == ")":
                break
            elif inside:
                head.append(self.text(child))
        prefix = "for await" if any(child.type == "await" for child in stmt.children) else "for"
        return self._loop(f"{prefix} ({' '.join(head)})", stmt)
