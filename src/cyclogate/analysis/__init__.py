"""Pure scoring: declaration scoping, decision counting, result table.

Nothing in this package performs I/O; effects live in ``cyclogate.reporting``
and are sequenced by ``cyclogate.traversal``.
"""

from .classifier import Classification, classify, is_header_path
from .counter import count_branches, is_decision_node
from .report import ComplexityRecord, ComplexityReport
from .scorer import BASE_COMPLEXITY, score, score_function

__all__ = [
    "Classification",
    "classify",
    "is_header_path",
    "count_branches",
    "is_decision_node",
    "ComplexityRecord",
    "ComplexityReport",
    "BASE_COMPLEXITY",
    "score",
    "score_function",
]
