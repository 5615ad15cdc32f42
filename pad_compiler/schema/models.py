"""
Pydantic models describing the PAD (Problem Analysis Diagram) node tree.

The tree is the only data structure the compiler produces. Every variant
carries a ``type`` discriminator so the JSON payload handed to renderers is a
tagged union:

    {"type":"sequence","children":[{"type":"block","label":"fn main()", ...}]}

Field names are a cross-boundary contract with the renderer and must stay
stable.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


# -----------------------------
# Nodes
# -----------------------------
class SequenceNode(FrozenModel):
    """Ordered composition of steps, in source order."""

    type: Literal["sequence"] = "sequence"
    children: List["PadNode"] = Field(default_factory=list)


class BlockNode(FrozenModel):
    """
    A named unit of work. For functions the label is ``fn <name>()`` and the
    only child is the Sequence built from the function body.
    """

    type: Literal["block"] = "block"
    label: str
    children: List["PadNode"] = Field(default_factory=list)


class IfNode(FrozenModel):
    type: Literal["if"] = "if"
    condition: str
    then_block: "PadNode"
    # None means "no else clause"; it is omitted on the wire, never null.
    else_block: Optional["PadNode"] = None


class LoopNode(FrozenModel):
    type: Literal["loop"] = "loop"
    condition: str
    body: "PadNode"


class CommandNode(FrozenModel):
    type: Literal["command"] = "command"
    label: str


class ErrorNode(FrozenModel):
    type: Literal["error"] = "error"
    message: str


PadNode = Annotated[
    Union[SequenceNode, BlockNode, IfNode, LoopNode, CommandNode, ErrorNode],
    Field(discriminator="type"),
]


SequenceNode.model_rebuild()
BlockNode.model_rebuild()
IfNode.model_rebuild()
LoopNode.model_rebuild()
