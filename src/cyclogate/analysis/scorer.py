"""Per-function cyclomatic complexity score."""

from __future__ import annotations

from typing import Optional

from ..syntax import FunctionDeclaration, SyntaxNode
from .counter import count_branches

# Every function has at least its straight-line path
BASE_COMPLEXITY = 1


def score(body: Optional[SyntaxNode]) -> int:
    """Cyclomatic complexity of a function body: 1 + decision points."""
    return BASE_COMPLEXITY + count_branches(body)


def score_function(declaration: FunctionDeclaration) -> Optional[int]:
    """Score a declaration, or None for a prototype without a body."""
    if not declaration.has_body:
        return None
    return score(declaration.body)
