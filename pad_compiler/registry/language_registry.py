"""
In-memory registry of source languages the compiler can lower.

Each entry ties a tree-sitter grammar to the node kinds that count as
function definitions and to the lowerer that maps them onto PAD nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, FrozenSet, List, MutableMapping, Protocol

import tree_sitter_javascript
import tree_sitter_rust
from tree_sitter import Language, Node

from pad_compiler.compiler import lower_javascript, lower_rust
from pad_compiler.errors import UnsupportedLanguageError
from pad_compiler.schema.models import BlockNode


class FunctionLowerer(Protocol):
    def lower_function(self, func: Node) -> BlockNode: ...


@dataclass(frozen=True)
class LanguageDefinition:
    name: str
    grammar: Callable[[], Any]
    function_kinds: FrozenSet[str]
    lowerer: Callable[[bytes], FunctionLowerer]

    def tree_sitter_language(self) -> Language:
        return _load_language(self.grammar)


@lru_cache(maxsize=None)
def _load_language(grammar: Callable[[], Any]) -> Language:
    return Language(grammar())


class LanguageRegistry:
    def __init__(self, initial: MutableMapping[str, LanguageDefinition] | None = None) -> None:
        self._languages: Dict[str, LanguageDefinition] = dict(initial or {})

    def register(self, definition: LanguageDefinition) -> None:
        self._languages[definition.name] = definition

    def get(self, name: str) -> LanguageDefinition:
        if not isinstance(name, str):
            raise UnsupportedLanguageError(f"Unsupported language '{name}'")
        try:
            return self._languages[name.lower()]
        except KeyError as exc:
            raise UnsupportedLanguageError(f"Unsupported language '{name}'") from exc

    def names(self) -> List[str]:
        return sorted(self._languages)


RUST = LanguageDefinition(
    name="rust",
    grammar=tree_sitter_rust.language,
    function_kinds=lower_rust.FUNCTION_KINDS,
    lowerer=lower_rust.RustLowerer,
)

JAVASCRIPT = LanguageDefinition(
    name="javascript",
    grammar=tree_sitter_javascript.language,
    function_kinds=lower_javascript.FUNCTION_KINDS,
    lowerer=lower_javascript.JavaScriptLowerer,
)


def build_default_registry() -> LanguageRegistry:
    registry = LanguageRegistry()
    registry.register(RUST)
    registry.register(JAVASCRIPT)
    return registry
