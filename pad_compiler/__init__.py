"""
Public entrypoint for compiling source code into PAD diagram trees.
"""

from __future__ import annotations

from typing import Any, Optional

from pad_compiler.compiler.context import CompilerContext
from pad_compiler.compiler.encode import encode
from pad_compiler.compiler.extract_units import extract_functions
from pad_compiler.compiler.parse import parse_source
from pad_compiler.errors import EmptyResultError, SourceParseError
from pad_compiler.schema.models import ErrorNode, PadNode, SequenceNode
from shared.config import config
from shared.logger import get_logger

logger = get_logger(__name__)

_DEFAULT_CONTEXT: Optional[CompilerContext] = None


def _default_context() -> CompilerContext:
    global _DEFAULT_CONTEXT
    if _DEFAULT_CONTEXT is None:
        _DEFAULT_CONTEXT = CompilerContext()
    return _DEFAULT_CONTEXT


def build_diagram(
    payload: Any,
    language: Optional[str] = None,
    *,
    context: Optional[CompilerContext] = None,
) -> SequenceNode:
    """
    Compile source text into the root Sequence of PAD Blocks, one per function.

    Raises SourceParseError when the source does not parse and
    EmptyResultError when it contains no function definitions.
    """

    context = context or _default_context()
    language = language or config.default_language

    source_tree = parse_source(payload, language, registry=context.language_registry)
    functions = extract_functions(source_tree)
    logger.debug("found %d function(s) in %s source", len(functions), source_tree.language.name)
    if not functions:
        raise EmptyResultError()

    lowerer = source_tree.language.lowerer(source_tree.source)
    blocks = [lowerer.lower_function(func) for func in functions]
    return SequenceNode(children=blocks)


def transform(
    payload: Any,
    language: Optional[str] = None,
    *,
    context: Optional[CompilerContext] = None,
    indent: Optional[int] = None,
) -> str:
    """
    Compile source text into the PAD JSON payload.

    Never raises: parse failures and empty inputs come back as an encoded
    ``error`` node. With ``indent`` set the payload is pretty-printed.
    """

    root: PadNode
    try:
        root = build_diagram(payload, language, context=context)
    except SourceParseError as exc:
        logger.info("rejecting source: %s", exc)
        root = ErrorNode(message=f"Parse error: {exc}")
    except EmptyResultError as exc:
        root = ErrorNode(message=str(exc))
    return encode(root, indent=indent)


__all__ = [
    "CompilerContext",
    "build_diagram",
    "transform",
]
