"""
Container for shared compiler dependencies (registries, etc.).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pad_compiler.registry.language_registry import LanguageRegistry, build_default_registry


@dataclass(frozen=True)
class CompilerContext:
    language_registry: LanguageRegistry = field(default_factory=build_default_registry)
