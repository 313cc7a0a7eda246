"""Delivery of complexity results: inline notices and the report artifact."""

from .emitter import ReportEmitter
from .notices import (
    CollectingNoticeChannel,
    ConsoleNoticeChannel,
    LoggingNoticeChannel,
    Notice,
    NoticeChannel,
    Severity,
    complexity_notice,
)
from .persister import (
    LINE_FORMAT,
    PersistOutcome,
    ReportPersister,
    format_line,
    parse_line,
    read_report,
)

__all__ = [
    "ReportEmitter",
    "CollectingNoticeChannel",
    "ConsoleNoticeChannel",
    "LoggingNoticeChannel",
    "Notice",
    "NoticeChannel",
    "Severity",
    "complexity_notice",
    "LINE_FORMAT",
    "PersistOutcome",
    "ReportPersister",
    "format_line",
    "parse_line",
    "read_report",
]
