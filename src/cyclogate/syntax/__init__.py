"""Read-only syntax tree model shared by tree providers and the engine."""

from .nodes import (
    DECISION_KINDS,
    FunctionDeclaration,
    NodeKind,
    SourceLocation,
    SyntaxNode,
    function,
    node,
)

__all__ = [
    "DECISION_KINDS",
    "FunctionDeclaration",
    "NodeKind",
    "SourceLocation",
    "SyntaxNode",
    "function",
    "node",
]
