"""
Shared driver for the per-language lowerers.

Lowering runs on an explicit work stack instead of the Python call stack, so
nesting depth in the source is not bounded by the interpreter's recursion
limit. A handler either returns a finished PAD node or a ``Deferred`` naming
the sub-nodes it needs; the driver lowers those first and then calls
``build`` with their results, in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple, Union

from tree_sitter import Node

from pad_compiler.schema.models import PadNode

# (mode, node): mode selects the handler family, e.g. "block" or "statement".
Part = Tuple[str, Node]


@dataclass(frozen=True)
class Deferred:
    parts: Sequence[Part]
    build: Callable[[List[PadNode]], PadNode]


Step = Union[PadNode, Deferred]


class BaseLowerer:
    def __init__(self, source: bytes) -> None:
        self._source = source
        self._modes: Dict[str, Callable[[Node], Step]] = {}

    def lower(self, mode: str, node: Node) -> PadNode:
        results: List[PadNode] = []
        # ("visit", part) | ("build", (deferred, arity))
        stack: List[Tuple[str, object]] = [("visit", (mode, node))]
        while stack:
            action, payload = stack.pop()
            if action == "build":
                deferred, arity = payload
                args = results[len(results) - arity :] if arity else []
                del results[len(results) - arity :]
                results.append(deferred.build(args))
                continue

            part_mode, part_node = payload
            step = self._modes[part_mode](part_node)
            if isinstance(step, Deferred):
                stack.append(("build", (step, len(step.parts))))
                stack.extend(("visit", part) for part in reversed(step.parts))
            else:
                results.append(step)
        return results[0]
