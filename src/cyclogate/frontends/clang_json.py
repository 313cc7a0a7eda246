"""Tree provider for clang's JSON AST dump.

Produce the input with::

    clang -Xclang -ast-dump=json -fsyntax-only unit.c > unit.ast.json

and build a tree with ``load_clang_ast("unit.ast.json")``.

Only the statement classes the scorer distinguishes get their own kind;
everything else becomes OTHER and keeps its children. ``CXXForRangeStmt``
and ``BinaryConditionalOperator`` are distinct classes in clang and are
deliberately left as OTHER so scores match the clang plugin's numbers.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..config import DEFAULT_SYSTEM_PREFIXES
from ..exceptions import ParsingError, SourceAccessError
from ..syntax import FunctionDeclaration, NodeKind, SourceLocation, SyntaxNode

logger = logging.getLogger(__name__)

STATEMENT_KINDS = {
    "IfStmt": NodeKind.IF,
    "SwitchStmt": NodeKind.SWITCH,
    "ForStmt": NodeKind.FOR,
    "WhileStmt": NodeKind.WHILE,
    "DoStmt": NodeKind.DO,
    "ConditionalOperator": NodeKind.CONDITIONAL,
    "CompoundStmt": NodeKind.COMPOUND,
    "CaseStmt": NodeKind.CASE,
    "DefaultStmt": NodeKind.CASE,
    "TranslationUnitDecl": NodeKind.TRANSLATION_UNIT,
}

FUNCTION_KINDS = frozenset(
    {
        "FunctionDecl",
        "CXXMethodDecl",
        "CXXConstructorDecl",
        "CXXDestructorDecl",
        "CXXConversionDecl",
        "CXXDeductionGuideDecl",
    }
)

BODY_KINDS = frozenset({"CompoundStmt", "CXXTryStmt"})


class _LocationTracker:
    """Rebuilds full locations from clang's delta-encoded ``loc`` objects.

    clang omits ``file`` (and ``line``) when they repeat the previously
    printed location, so locations must be observed in document order.
    """

    def __init__(self, system_prefixes: Iterable[str]) -> None:
        self.system_prefixes = tuple(system_prefixes)
        self.file: Optional[str] = None
        self.line = 0

    def _observe_bare(self, loc: dict) -> Optional[SourceLocation]:
        if "file" in loc:
            self.file = loc["file"]
        if "line" in loc:
            self.line = loc["line"]
        if "col" not in loc or self.file is None:
            return None
        return SourceLocation(
            path=self.file,
            line=self.line,
            column=loc["col"],
            is_system=self.file.startswith(self.system_prefixes),
        )

    def observe(self, loc: Any) -> Optional[SourceLocation]:
        """Consume a ``loc`` (or range endpoint) and return its resolved location."""
        if not isinstance(loc, dict) or not loc:
            return None
        if "spellingLoc" in loc or "expansionLoc" in loc:
            self._observe_bare(loc.get("spellingLoc") or {})
            return self._observe_bare(loc.get("expansionLoc") or {})
        return self._observe_bare(loc)

    def observe_node(self, node: dict) -> Optional[SourceLocation]:
        location = self.observe(node.get("loc"))
        node_range = node.get("range")
        if isinstance(node_range, dict):
            self.observe(node_range.get("begin"))
            self.observe(node_range.get("end"))
        return location


@dataclass
class _Frame:
    data: dict
    location: Optional[SourceLocation]
    children: list = field(default_factory=list)
    index: int = 0
    built: list = field(default_factory=list)
    implicit: bool = False


class ClangJsonTreeProvider:
    """Translates a parsed clang JSON AST document into cyclogate nodes."""

    def __init__(self, system_prefixes: Iterable[str] = DEFAULT_SYSTEM_PREFIXES) -> None:
        self.system_prefixes = tuple(system_prefixes)

    def build(self, document: dict) -> SyntaxNode:
        if not isinstance(document, dict) or "kind" not in document:
            raise ParsingError(Path("<document>"), "clang-json", "top-level object has no 'kind'")

        tracker = _LocationTracker(self.system_prefixes)
        frames = [self._frame(document, tracker)]
        while frames:
            frame = frames[-1]
            if frame.index < len(frame.children):
                child = frame.children[frame.index]
                frame.index += 1
                if not isinstance(child, dict):
                    continue
                # Implicit subtrees are walked for their locations, then dropped
                frames.append(self._frame(child, tracker, bool(child.get("isImplicit"))))
                continue

            frames.pop()
            if frame.implicit:
                continue
            built = self._build(frame)
            if not frames:
                return built
            frames[-1].built.append((frame.data, built))

        raise ParsingError(Path("<document>"), "clang-json", "document produced no tree")

    def _frame(self, data: dict, tracker: _LocationTracker, implicit: bool = False) -> _Frame:
        location = tracker.observe_node(data)
        inner = data.get("inner")
        children = inner if isinstance(inner, list) else []
        return _Frame(data=data, location=location, children=children, implicit=implicit)

    def _build(self, frame: _Frame) -> SyntaxNode:
        kind_name = frame.data.get("kind", "")
        children = tuple(node for _, node in frame.built)

        if kind_name in FUNCTION_KINDS:
            body = None
            for data, node in frame.built:
                if data.get("kind") in BODY_KINDS:
                    body = node
            return FunctionDeclaration(
                name=frame.data.get("name", ""),
                body=body,
                location=frame.location,
                children=children,
            )

        kind = STATEMENT_KINDS.get(kind_name, NodeKind.OTHER)
        return SyntaxNode(kind=kind, children=children, location=frame.location)


def parse_clang_ast(
    text: Union[str, bytes],
    system_prefixes: Iterable[str] = DEFAULT_SYSTEM_PREFIXES,
    source_name: str = "<string>",
) -> SyntaxNode:
    """Build a tree from JSON text.

    Raises:
        ParsingError: If the text is not a clang JSON AST
    """
    try:
        document = json.loads(text)
    except ValueError as e:
        raise ParsingError(Path(source_name), "clang-json", str(e))
    return ClangJsonTreeProvider(system_prefixes).build(document)


def load_clang_ast(
    path: Union[str, Path],
    system_prefixes: Iterable[str] = DEFAULT_SYSTEM_PREFIXES,
) -> SyntaxNode:
    """Read and translate a JSON AST dump file.

    Raises:
        SourceAccessError: If the file cannot be read
        ParsingError: If the file is not a clang JSON AST
    """
    path = Path(path)
    try:
        text = path.read_bytes()
    except OSError as e:
        raise SourceAccessError(path, e.strerror or str(e))
    logger.debug("Loaded %d bytes of clang AST from %s", len(text), path)
    return parse_clang_ast(text, system_prefixes, source_name=str(path))
