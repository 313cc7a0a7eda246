"""Notice channels: where per-function remarks are delivered.

A channel is anything with ``report(notice)``. The engine is handed a channel
explicitly; it never looks one up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

from rich.console import Console
from rich.text import Text

from ..syntax import SourceLocation

logger = logging.getLogger(__name__)

COMPLEXITY_MESSAGE = "Cyclomatic Complexity: {score}"


class Severity(Enum):
    REMARK = "remark"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A located message for an external diagnostics consumer."""

    location: Optional[SourceLocation]
    severity: Severity
    message: str
    score: Optional[int] = None

    def render(self) -> str:
        where = str(self.location) if self.location is not None else "<unknown>"
        return f"{where}: {self.severity.value}: {self.message}"


def complexity_notice(location: Optional[SourceLocation], score: int) -> Notice:
    return Notice(
        location=location,
        severity=Severity.REMARK,
        message=COMPLEXITY_MESSAGE.format(score=score),
        score=score,
    )


class NoticeChannel(Protocol):
    def report(self, notice: Notice) -> None:
        ...


_SEVERITY_STYLES = {
    Severity.REMARK: "bold cyan",
    Severity.WARNING: "bold yellow",
    Severity.ERROR: "bold red",
}


class ConsoleNoticeChannel:
    """Prints notices in compiler style: ``file:line:col: remark: message``."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True, highlight=False)

    def report(self, notice: Notice) -> None:
        where = str(notice.location) if notice.location is not None else "<unknown>"
        line = Text()
        line.append(f"{where}: ", style="bold")
        line.append(f"{notice.severity.value}:", style=_SEVERITY_STYLES[notice.severity])
        line.append(f" {notice.message}")
        self.console.print(line)


class LoggingNoticeChannel:
    """Forwards notices to a logger; remarks go out at INFO."""

    _LEVELS = {
        Severity.REMARK: logging.INFO,
        Severity.WARNING: logging.WARNING,
        Severity.ERROR: logging.ERROR,
    }

    def __init__(self, target: Optional[logging.Logger] = None) -> None:
        self.logger = target or logging.getLogger("cyclogate.notices")

    def report(self, notice: Notice) -> None:
        self.logger.log(self._LEVELS[notice.severity], "%s", notice.render())


class CollectingNoticeChannel:
    """Keeps every notice in memory, in delivery order."""

    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def report(self, notice: Notice) -> None:
        self.notices.append(notice)

    def scores(self) -> list[tuple[str, int]]:
        """(location string, score) for each complexity notice received."""
        return [
            (str(n.location), n.score) for n in self.notices if n.score is not None
        ]

    def __len__(self) -> int:
        return len(self.notices)
