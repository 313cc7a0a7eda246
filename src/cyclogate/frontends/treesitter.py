"""Tree provider for C and C++ source via tree-sitter.

tree-sitter works on one file and does not expand ``#include``, so a header
only contributes functions when it is parsed itself (and is then excluded by
its suffix).

Names come from the declarator as written. A function whose declarator is
produced by a macro, such as ``DEFINE_HANDLER(name) { ... }``, is recorded
under the macro name; clang, which sees the expansion, records ``name``.
Both providers leave GNU ``a ?: b`` and range-based ``for`` uncounted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..config import DEFAULT_SYSTEM_PREFIXES
from ..exceptions import ParsingError, SourceAccessError, UnsupportedLanguageError
from ..syntax import FunctionDeclaration, NodeKind, SourceLocation, SyntaxNode
from .treesitter_parser import TreeSitterParser

logger = logging.getLogger(__name__)

EXTENSION_LANGUAGES = {
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".c++": "cpp",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
}

NODE_KINDS = {
    "translation_unit": NodeKind.TRANSLATION_UNIT,
    "compound_statement": NodeKind.COMPOUND,
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
    "case_statement": NodeKind.CASE,
    "for_statement": NodeKind.FOR,
    "while_statement": NodeKind.WHILE,
    "do_statement": NodeKind.DO,
    "conditional_expression": NodeKind.CONDITIONAL,
}

# Declarator leaves that name a function (as opposed to a function pointer)
_NAME_TYPES = frozenset(
    {
        "identifier",
        "field_identifier",
        "qualified_identifier",
        "destructor_name",
        "operator_name",
        "template_function",
        "template_method",
        "operator_cast",
    }
)

_WRAPPER_DECLARATORS = frozenset(
    {"pointer_declarator", "reference_declarator", "attributed_declarator"}
)

_PROTOTYPE_TYPES = frozenset({"declaration", "field_declaration"})

_SKIPPED_TYPES = frozenset({"comment"})


def detect_language(path: Union[str, Path]) -> Optional[str]:
    return EXTENSION_LANGUAGES.get(Path(path).suffix.lower())


def _declarator(node: Any) -> Any:
    declarator = node.child_by_field_name("declarator")
    if declarator is None:
        # reference_declarator carries its inner declarator without a field name
        for child in node.named_children:
            if child.type.endswith("declarator") or child.type in _NAME_TYPES:
                return child
    return declarator


def find_function_declarator(declarator: Any) -> Any:
    """Follow pointer/reference wrappers down to a function_declarator.

    Returns None for anything that is not a plain function declarator, such
    as a function pointer variable.
    """
    current = declarator
    while current is not None and current.type in _WRAPPER_DECLARATORS:
        current = _declarator(current)
    if current is None or current.type != "function_declarator":
        return None
    inner = current.child_by_field_name("declarator")
    if inner is None or inner.type not in _NAME_TYPES:
        return None
    return current


@dataclass
class _Frame:
    node: Any
    children: list
    index: int = 0
    built: list = field(default_factory=list)


class TreeSitterTreeProvider:
    """Builds cyclogate trees from C/C++ source text."""

    def __init__(
        self,
        system_prefixes: Iterable[str] = DEFAULT_SYSTEM_PREFIXES,
        parser: Optional[TreeSitterParser] = None,
    ) -> None:
        self.system_prefixes = tuple(system_prefixes)
        self._parser = parser or TreeSitterParser()

    def parse_file(self, path: Union[str, Path], language: Optional[str] = None) -> SyntaxNode:
        """Read and translate one source file.

        Raises:
            SourceAccessError: If the file cannot be read
            UnsupportedLanguageError: If no grammar handles the file
        """
        path = Path(path)
        try:
            code = path.read_bytes()
        except OSError as e:
            raise SourceAccessError(path, e.strerror or str(e))
        return self.parse_source(code, str(path), language)

    def parse_source(
        self, code: Union[str, bytes], path: str, language: Optional[str] = None
    ) -> SyntaxNode:
        """Translate in-memory source attributed to ``path``.

        Raises:
            UnsupportedLanguageError: If no grammar handles the language
            ParsingError: If tree-sitter returns no tree
        """
        language = language or detect_language(path)
        if language is None or not self._parser.is_language_supported(language):
            raise UnsupportedLanguageError(language or Path(path).suffix, self._parser.languages)

        code_bytes = code.encode("utf-8") if isinstance(code, str) else code
        tree = self._parser.parse(code_bytes, language)
        if tree is None:
            raise ParsingError(Path(path), language, "parser returned no tree")
        if tree.root_node.has_error:
            logger.debug("%s has syntax errors; scoring the recovered tree", path)
        return self.translate(tree.root_node, code_bytes, path)

    def translate(self, root: Any, code: bytes, path: str) -> SyntaxNode:
        """Convert a tree-sitter node into a cyclogate tree, without recursion."""
        frames = [self._frame(root)]
        while frames:
            frame = frames[-1]
            if frame.index < len(frame.children):
                child = frame.children[frame.index]
                frame.index += 1
                if child.type in _SKIPPED_TYPES:
                    continue
                frames.append(self._frame(child))
                continue

            frames.pop()
            built = self._build(frame, code, path)
            if not frames:
                return built
            frames[-1].built.append((frame.node, built))

        raise ParsingError(Path(path), "tree-sitter", "parser produced no tree")

    def _frame(self, ts_node: Any) -> _Frame:
        return _Frame(node=ts_node, children=list(ts_node.named_children))

    def _location(self, ts_node: Any, path: str) -> SourceLocation:
        row, column = ts_node.start_point
        return SourceLocation(
            path=path,
            line=row + 1,
            column=column + 1,
            is_system=path.startswith(self.system_prefixes),
        )

    def _build(self, frame: _Frame, code: bytes, path: str) -> SyntaxNode:
        ts_node = frame.node
        children = tuple(node for _, node in frame.built)

        if ts_node.type == "function_definition":
            declaration = self._function_definition(frame, code, path, children)
            if declaration is not None:
                return declaration

        if ts_node.type in _PROTOTYPE_TYPES:
            prototypes = self._prototypes(ts_node, code, path)
            if prototypes:
                return SyntaxNode(
                    kind=NodeKind.OTHER,
                    children=children + tuple(prototypes),
                    location=self._location(ts_node, path),
                )

        kind = NODE_KINDS.get(ts_node.type, NodeKind.OTHER)
        if kind is NodeKind.CONDITIONAL and ts_node.child_by_field_name("consequence") is None:
            # GNU `a ?: b`, which clang keeps apart as BinaryConditionalOperator
            kind = NodeKind.OTHER
        return SyntaxNode(kind=kind, children=children, location=self._location(ts_node, path))

    def _function_definition(
        self, frame: _Frame, code: bytes, path: str, children: tuple
    ) -> Optional[FunctionDeclaration]:
        ts_node = frame.node
        declarator = find_function_declarator(ts_node.child_by_field_name("declarator"))
        if declarator is None:
            return None
        name_node = declarator.child_by_field_name("declarator")

        body = None
        body_node = ts_node.child_by_field_name("body")
        if body_node is not None:
            for original, built in frame.built:
                if (original.start_byte, original.end_byte) == (body_node.start_byte, body_node.end_byte):
                    body = built
        return FunctionDeclaration(
            name=self._function_name(name_node, code),
            body=body,
            location=self._location(name_node, path),
            children=children,
        )

    def _prototypes(self, ts_node: Any, code: bytes, path: str) -> list[FunctionDeclaration]:
        prototypes = []
        for declarator in ts_node.children_by_field_name("declarator"):
            function_declarator = find_function_declarator(declarator)
            if function_declarator is None:
                continue
            name_node = function_declarator.child_by_field_name("declarator")
            prototypes.append(
                FunctionDeclaration(
                    name=self._function_name(name_node, code),
                    location=self._location(name_node, path),
                )
            )
        return prototypes

    def _function_name(self, name_node: Any, code: bytes) -> str:
        # Qualified names report their last component, as a compiler's
        # unqualified declaration name does
        while name_node.type == "qualified_identifier":
            inner = name_node.child_by_field_name("name")
            if inner is None:
                break
            name_node = inner
        return code[name_node.start_byte : name_node.end_byte].decode("utf-8", errors="replace")
