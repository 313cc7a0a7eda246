"""Decision-point counting over statement subtrees."""

from __future__ import annotations

import logging
from typing import Optional

from ..syntax import DECISION_KINDS, SyntaxNode

logger = logging.getLogger(__name__)


def is_decision_node(node: SyntaxNode) -> bool:
    return node.kind in DECISION_KINDS


def count_branches(root: Optional[SyntaxNode]) -> int:
    """Count decision nodes in the subtree rooted at ``root``, root included.

    Every child of every node is visited, so decisions nested in conditions,
    loop bodies or else branches add up flatly with no depth weighting.
    Absent subtrees count as zero.
    """
    if root is None:
        logger.debug("Null statement encountered, counting as zero")
        return 0

    count = 0
    stack: list[Optional[SyntaxNode]] = [root]
    while stack:
        current = stack.pop()
        if current is None:
            logger.debug("Null statement encountered, counting as zero")
            continue
        if current.kind in DECISION_KINDS:
            count += 1
        stack.extend(current.children)
    return count
