"""Report artifact: one ``Function: <name>, Cyclomatic Complexity: <score>`` per line.

The line format is consumed by CI scripts and dashboards; changing it breaks
them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..analysis.report import ComplexityReport
from ..exceptions import ReportFormatError, ReportWriteError

logger = logging.getLogger(__name__)

LINE_FORMAT = "Function: {name}, Cyclomatic Complexity: {score}"

# Names may contain anything (operator overloads, templates), so anchor on the
# trailing score field. Scores start at 1.
_LINE_PATTERN = re.compile(r"^Function: (?P<name>.*), Cyclomatic Complexity: (?P<score>[1-9]\d*)$")

PathLike = Union[str, Path]


def format_line(name: str, score: int) -> str:
    return LINE_FORMAT.format(name=name, score=score)


def parse_line(line: str, line_number: Optional[int] = None) -> Tuple[str, int]:
    """Split an artifact line into (name, score).

    Raises:
        ReportFormatError: If the line does not follow the artifact format
    """
    match = _LINE_PATTERN.match(line.rstrip("\r\n"))
    if match is None:
        raise ReportFormatError(line, line_number)
    return match.group("name"), int(match.group("score"))


@dataclass(frozen=True)
class PersistOutcome:
    """Result of writing the artifact.

    Attributes:
        destination: Path that was (or would have been) written
        lines_written: Number of function lines in the artifact
        error: Why the write failed, None on success
    """

    destination: Path
    lines_written: int = 0
    error: Optional[ReportWriteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error


class ReportPersister:
    """Writes a ComplexityReport to its text artifact.

    The report itself has no order; ordering by name is this class's job and
    keeps artifacts diffable between runs.
    """

    def __init__(self, sort_entries: bool = True) -> None:
        self.sort_entries = sort_entries

    def lines(self, report: ComplexityReport) -> Iterator[str]:
        entries = report.sorted_entries() if self.sort_entries else report.entries()
        for name, score in entries:
            yield format_line(name, score)

    def persist(self, report: ComplexityReport, destination: PathLike) -> PersistOutcome:
        """Overwrite ``destination`` with the report.

        Failures are logged and returned, never raised: scoring and emission
        have already happened by the time this runs.
        """
        path = Path(destination)
        written = 0
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                for line in self.lines(report):
                    f.write(line + "\n")
                    written += 1
        except (OSError, UnicodeError) as e:
            # UnicodeError: a provider handed over a name that is not valid text
            reason = getattr(e, "strerror", None) or str(e)
            error = ReportWriteError(path, reason)
            logger.error("Error opening file: %s (%s)", path, error.reason)
            return PersistOutcome(destination=path, lines_written=0, error=error)

        logger.debug("Wrote %d complexity entries to %s", written, path)
        return PersistOutcome(destination=path, lines_written=written)


def iter_report_lines(lines: Iterable[str], strict: bool = False) -> Iterator[Tuple[str, int]]:
    """Parse artifact lines, skipping blanks.

    Malformed lines are skipped with a debug log unless ``strict``.
    """
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_line(line, number)
        except ReportFormatError:
            if strict:
                raise
            logger.debug("Skipping malformed report line %d: %r", number, line)


def read_report(source: PathLike, strict: bool = False) -> ComplexityReport:
    """Load an artifact back into a ComplexityReport."""
    report = ComplexityReport()
    with open(source, "r", encoding="utf-8") as f:
        for name, score in iter_report_lines(f, strict=strict):
            report.record(name, score)
    return report
