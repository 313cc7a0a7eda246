"""One complexity pass over one translation unit.

The pass walks the tree depth-first, and for every function declaration:

    classify -> score -> record -> emit

After the walk the report is persisted once. The report accumulator and the
notice channel are explicit state owned by the pass; nothing is global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .analysis import Classification, ComplexityReport, classify, score_function
from .config import DEFAULT_CONFIG, CyclogateConfig
from .reporting.emitter import ReportEmitter
from .reporting.notices import NoticeChannel
from .reporting.persister import PersistOutcome, ReportPersister
from .syntax import FunctionDeclaration, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class PassResult:
    """Outcome of a pass.

    Attributes:
        report: Scores by function name
        persisted: Artifact write outcome, None when persistence is disabled
        visited: Function declarations seen
        scored: Declarations scored (in scope and with a body)
        excluded: Declarations skipped as header/system
        declarations_only: In-scope declarations skipped for lack of a body
    """

    report: ComplexityReport
    persisted: Optional[PersistOutcome] = None
    visited: int = 0
    scored: int = 0
    excluded: int = 0
    declarations_only: int = 0


def iter_function_declarations(root: SyntaxNode) -> Iterator[FunctionDeclaration]:
    """Yield function declarations in depth-first, source order.

    Function bodies are searched too, so nested declarations (local class
    methods, lambda call operators) are visited after their enclosing function.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        if isinstance(current, FunctionDeclaration):
            yield current
        for child in reversed(current.children):
            if child is not None:
                stack.append(child)


class ComplexityPass:
    """Scores every in-scope function of one tree.

    A pass object can be reused; each ``run`` starts from an empty report and
    hands it off exactly once.
    """

    def __init__(
        self,
        channel: Optional[NoticeChannel] = None,
        config: Optional[CyclogateConfig] = None,
        persister: Optional[ReportPersister] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.channel = channel
        self.persister = persister or ReportPersister(sort_entries=self.config.sort_entries)

    def collect(self, root: SyntaxNode) -> PassResult:
        """Walk, score and emit without persisting."""
        result = PassResult(report=ComplexityReport())
        emitter = None
        if self.channel is not None and self.config.emit_notices:
            emitter = ReportEmitter(self.channel)

        for declaration in iter_function_declarations(root):
            result.visited += 1
            self._visit(declaration, result, emitter)

        logger.debug(
            "Pass visited %d declarations: %d scored, %d excluded, %d without body",
            result.visited,
            result.scored,
            result.excluded,
            result.declarations_only,
        )
        return result

    def run(self, root: SyntaxNode) -> PassResult:
        """Walk, score, emit, then persist the report once."""
        result = self.collect(root)
        if self.config.persist:
            result.persisted = self.persister.persist(result.report, self.config.output_file)
        return result

    def _visit(
        self,
        declaration: FunctionDeclaration,
        result: PassResult,
        emitter: Optional[ReportEmitter],
    ) -> None:
        if classify(declaration.location, self.config.header_suffixes) is Classification.EXCLUDED:
            result.excluded += 1
            return

        value = score_function(declaration)
        if value is None:
            result.declarations_only += 1
            return

        if declaration.name in result.report:
            logger.debug("Function '%s' seen again; keeping the later score", declaration.name)
        result.report.record(declaration.name, value)
        result.scored += 1
        if emitter is not None:
            emitter.emit(declaration.location, value)
