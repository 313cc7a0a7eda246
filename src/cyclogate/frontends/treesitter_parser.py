"""Tree-sitter parser wrapper for C and C++.

Handles a missing tree-sitter dependency gracefully: check
TREE_SITTER_AVAILABLE, or ``is_language_supported`` for a single grammar.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "c")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_c

        _language_modules["c"] = tree_sitter_c
    except ImportError:
        pass

    try:
        import tree_sitter_cpp

        _language_modules["cpp"] = tree_sitter_cpp
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class Node:
        type: str
        is_named: bool
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        children: list[Node]
        named_children: list[Node]

    class Tree:
        root_node: Node


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for the C family grammars."""

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, lang_module in _language_modules.items():
            try:
                raw_lang = lang_module.language()
                # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
                lang_obj = _tree_sitter_module.Language(raw_lang)
                self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            except Exception:
                logger.debug("Cannot load %s grammar", lang_name, exc_info=True)

    def parse(self, code: bytes, language: str) -> Tree | None:
        """Parse code and return syntax tree.

        Returns:
            Tree object, or None if the language has no loaded grammar
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None
        result: Tree | None = parser.parse(code)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers

    @property
    def languages(self) -> list[str]:
        return sorted(self._parsers)
