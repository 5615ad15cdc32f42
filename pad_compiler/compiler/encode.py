"""
Stage 4 — Serialize a PAD tree into the tagged-union JSON wire format.

The ``type`` discriminator is written first, followed by the variant's own
fields in declaration order. An unset ``else_block`` is omitted, never null.
Output is compact and byte-stable for equal trees.

The writer walks the tree with an explicit stack, so arbitrarily deep
trees (long else-if chains, deeply nested blocks) serialize the same way
shallow ones do.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from pad_compiler.errors import EncodingError
from pad_compiler.schema.models import PadNode
from shared.logger import get_logger

logger = get_logger(__name__)

_ADAPTER: TypeAdapter[PadNode] = TypeAdapter(PadNode)


class _Value:
    """A pending value on the write stack, at a given indentation level."""

    __slots__ = ("value", "level")

    def __init__(self, value: Any, level: int) -> None:
        self.value = value
        self.level = level


def _dump(node: PadNode, indent: Optional[int] = None) -> str:
    key_sep = ":" if indent is None else ": "

    def newline(level: int) -> str:
        if indent is None:
            return ""
        return "\n" + " " * (indent * level)

    out: List[str] = []
    stack: List[Union[str, _Value]] = [_Value(node, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue

        value, level = item.value, item.level
        if isinstance(value, str):
            out.append(json.dumps(value, ensure_ascii=False))
        elif isinstance(value, BaseModel):
            fields = [
                (name, getattr(value, name))
                for name in type(value).model_fields
                if getattr(value, name) is not None
            ]
            pending: List[Union[str, _Value]] = ["{"]
            for index, (name, field_value) in enumerate(fields):
                prefix = "," if index else ""
                pending.append(f"{prefix}{newline(level + 1)}{json.dumps(name)}{key_sep}")
                pending.append(_Value(field_value, level + 1))
            pending.append(newline(level) + "}")
            stack.extend(reversed(pending))
        elif isinstance(value, list):
            if not value:
                out.append("[]")
                continue
            pending = ["["]
            for index, child in enumerate(value):
                pending.append(("," if index else "") + newline(level + 1))
                pending.append(_Value(child, level + 1))
            pending.append(newline(level) + "]")
            stack.extend(reversed(pending))
        else:
            raise TypeError(f"Object of type {type(value).__name__} is not part of the PAD wire format")
    return "".join(out)


def encode(node: PadNode, *, indent: Optional[int] = None) -> str:
    try:
        return _dump(node, indent)
    except (TypeError, ValueError) as exc:
        logger.error("PAD tree serialization failed: %s", exc)
        return json.dumps({"type": "error", "message": f"Serialization error: {exc}"})


def decode(payload: str | bytes) -> PadNode:
    try:
        return _ADAPTER.validate_json(payload)
    except ValidationError as exc:
        raise EncodingError(f"Invalid PAD payload: {exc}") from exc
