"""Tree providers: adapters from real front ends to ``cyclogate.syntax``."""

from .clang_json import ClangJsonTreeProvider, load_clang_ast, parse_clang_ast
from .treesitter import TreeSitterTreeProvider, detect_language
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

__all__ = [
    "ClangJsonTreeProvider",
    "load_clang_ast",
    "parse_clang_ast",
    "TreeSitterTreeProvider",
    "detect_language",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterParser",
    "get_supported_languages",
]
