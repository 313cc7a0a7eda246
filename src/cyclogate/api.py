"""Public API for cyclogate.

Example:
    >>> from cyclogate import analyze_source
    >>>
    >>> result = analyze_source("src/parser.c")
    >>> result.report.get("parse_expr").score
    7
    >>> result.persisted.ok
    True
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from .analysis import ComplexityReport
from .config import CyclogateConfig, load_config
from .exceptions import TreeProviderError
from .frontends.clang_json import load_clang_ast
from .frontends.treesitter import TreeSitterTreeProvider
from .logging_config import get_logger, setup_logging
from .reporting.notices import ConsoleNoticeChannel, NoticeChannel
from .reporting.persister import PersistOutcome, ReportPersister
from .syntax import SyntaxNode
from .traversal import ComplexityPass, PassResult

logger = get_logger(__name__)

PathLike = Union[str, Path]

# I/O bound per unit; capped so large batches do not flood the notice channel
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass
class BatchResult:
    """Outcome of a multi-unit run.

    Attributes:
        report: Merged scores of every unit that could be read
        persisted: Artifact write outcome, None when persistence is disabled
        units: Number of units scored
        failures: Path -> error message for units that could not be read
    """

    report: ComplexityReport
    persisted: Optional[PersistOutcome] = None
    units: int = 0
    failures: dict[str, str] = field(default_factory=dict)


def _prepare(
    config_file: Optional[Path], channel: Optional[NoticeChannel], overrides: dict
) -> tuple[CyclogateConfig, Optional[NoticeChannel]]:
    config = load_config(config_file=config_file, **overrides)
    setup_logging(
        verbose=config.verbosity == "verbose",
        quiet=config.verbosity == "quiet",
        log_file=config.log_file,
    )
    if channel is None and config.emit_notices:
        channel = ConsoleNoticeChannel()
    return config, channel


def build_tree(path: PathLike, config: CyclogateConfig) -> SyntaxNode:
    """Pick a tree provider by file type: ``.json`` is a clang AST dump, anything else is source."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_clang_ast(path, config.system_prefixes)
    return TreeSitterTreeProvider(config.system_prefixes).parse_file(path)


def run_pass(
    root: SyntaxNode,
    channel: Optional[NoticeChannel] = None,
    config: Optional[CyclogateConfig] = None,
) -> PassResult:
    """Run one pass over an already built tree.

    Args:
        root: Translation unit supplied by any tree provider
        channel: Where remarks go; None sends nothing
        config: Pass configuration; defaults when None

    Returns:
        PassResult with the report and the artifact write outcome
    """
    return ComplexityPass(channel=channel, config=config).run(root)


def analyze_clang_ast(
    path: PathLike,
    channel: Optional[NoticeChannel] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> PassResult:
    """Score the unit described by a clang JSON AST dump.

    Raises:
        ConfigurationError: If configuration is invalid
        TreeProviderError: If the dump cannot be read or parsed
    """
    config, channel = _prepare(config_file, channel, overrides)
    logger.info("Scoring clang AST %s", path)
    root = load_clang_ast(path, config.system_prefixes)
    return ComplexityPass(channel=channel, config=config).run(root)


def analyze_source(
    path: PathLike,
    channel: Optional[NoticeChannel] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> PassResult:
    """Score a C or C++ source file parsed with tree-sitter.

    Raises:
        ConfigurationError: If configuration is invalid
        TreeProviderError: If the file cannot be read or has no grammar
    """
    config, channel = _prepare(config_file, channel, overrides)
    logger.info("Scoring source %s", path)
    root = TreeSitterTreeProvider(config.system_prefixes).parse_file(path)
    return ComplexityPass(channel=channel, config=config).run(root)


def analyze_files(
    paths: Iterable[PathLike],
    channel: Optional[NoticeChannel] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> BatchResult:
    """Score several units in parallel and persist one merged artifact.

    Each unit gets its own pass and its own partial report; partials are
    merged in input order, so a name defined in several units keeps the
    score from the last unit listed. Units that cannot be read are logged and
    reported in ``failures``.
    """
    config, channel = _prepare(config_file, channel, overrides)
    paths = [Path(p) for p in paths]
    scorer = ComplexityPass(channel=channel, config=config)

    def score_unit(path: Path) -> ComplexityReport:
        return scorer.collect(build_tree(path, config)).report

    batch = BatchResult(report=ComplexityReport())
    workers = config.workers or _DEFAULT_WORKERS

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [(path, executor.submit(score_unit, path)) for path in paths]
        for path, future in futures:
            try:
                partial = future.result()
            except TreeProviderError as e:
                logger.error("Skipping %s: %s", path, e)
                batch.failures[str(path)] = str(e)
                continue
            batch.report.merge(partial)
            batch.units += 1

    if config.persist:
        persister = ReportPersister(sort_entries=config.sort_entries)
        batch.persisted = persister.persist(batch.report, config.output_file)
    return batch
