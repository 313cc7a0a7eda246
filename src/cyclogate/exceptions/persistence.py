"""Report artifact exceptions."""

from pathlib import Path
from typing import Optional

from .base import CyclogateError


class PersistenceError(CyclogateError):
    """Base class for report artifact errors."""

    pass


class ReportWriteError(PersistenceError):
    """Raised (or returned) when the report artifact cannot be written."""

    def __init__(self, destination: Path, reason: str):
        super().__init__(
            f"Cannot write report: {destination}",
            details={"destination": str(destination), "reason": reason},
        )
        self.destination = destination
        self.reason = reason


class ReportFormatError(PersistenceError):
    """Raised when a report artifact line does not match the line format."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        details = {"line": line}
        if line_number is not None:
            details["line_number"] = str(line_number)
        super().__init__("Malformed report line", details=details)
        self.line = line
        self.line_number = line_number
