"""Syntax models consumed by the complexity engine.

Tree providers translate their own trees into these nodes; the engine only
ever reads them. The node kinds form a closed set and the decision-making
subset is declared once, in DECISION_KINDS.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple


class NodeKind(Enum):
    """Closed set of node variants understood by the engine."""

    TRANSLATION_UNIT = "translation_unit"
    FUNCTION = "function"
    COMPOUND = "compound"
    IF = "if"
    SWITCH = "switch"
    CASE = "case"
    FOR = "for"
    WHILE = "while"
    DO = "do"
    CONDITIONAL = "conditional"
    OTHER = "other"


# Each occurrence of one of these kinds adds exactly one decision point.
# A switch counts once no matter how many case labels it carries.
DECISION_KINDS = frozenset(
    {
        NodeKind.IF,
        NodeKind.SWITCH,
        NodeKind.FOR,
        NodeKind.WHILE,
        NodeKind.DO,
        NodeKind.CONDITIONAL,
    }
)


@dataclass(frozen=True)
class SourceLocation:
    """Where a node was written.

    Attributes:
        path: File the node originates from
        line: 1-indexed line (0 when unknown)
        column: 1-indexed column (0 when unknown)
        is_system: True for system / standard-library locations
    """

    path: str
    line: int = 0
    column: int = 0
    is_system: bool = False

    @property
    def file_name(self) -> str:
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]

    def __str__(self) -> str:
        if self.line:
            return f"{self.path}:{self.line}:{self.column}"
        return self.path


@dataclass(frozen=True)
class SyntaxNode:
    """A read-only tree node.

    ``children`` may hold ``None`` entries: providers use them for absent
    subtrees (an ``if`` without ``else``, a ``for`` without an increment).
    """

    kind: NodeKind
    children: Tuple[Optional["SyntaxNode"], ...] = ()
    location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_decision(self) -> bool:
        return self.kind in DECISION_KINDS

    def iter_children(self) -> Iterator[Optional["SyntaxNode"]]:
        return iter(self.children)


@dataclass(frozen=True)
class FunctionDeclaration(SyntaxNode):
    """A function declaration or definition.

    Attributes:
        name: Function name as the provider spells it (no signature)
        body: Statement tree of the definition, None for a bare prototype
    """

    kind: NodeKind = NodeKind.FUNCTION
    name: str = ""
    body: Optional[SyntaxNode] = None

    def __post_init__(self) -> None:
        if self.kind is not NodeKind.FUNCTION:
            raise ValueError(f"FunctionDeclaration must have kind FUNCTION, got {self.kind}")
        if not self.children and self.body is not None:
            object.__setattr__(self, "children", (self.body,))
        super().__post_init__()

    @property
    def has_body(self) -> bool:
        return self.body is not None


def node(kind: NodeKind, *children: Optional[SyntaxNode], location: SourceLocation | None = None) -> SyntaxNode:
    """Shorthand constructor used by providers and tests."""
    return SyntaxNode(kind=kind, children=children, location=location)


def function(
    name: str,
    body: SyntaxNode | None = None,
    location: SourceLocation | None = None,
    extra_children: Sequence[Optional[SyntaxNode]] = (),
) -> FunctionDeclaration:
    """Build a FunctionDeclaration whose children are its body plus any extras."""
    children = tuple(extra_children) + ((body,) if body is not None else ())
    return FunctionDeclaration(name=name, body=body, location=location, children=children)
