"""Exception hierarchy for cyclogate."""

from .base import CyclogateError
from .config import ConfigurationError, InvalidConfigError
from .frontend import (
    ParsingError,
    SourceAccessError,
    TreeProviderError,
    UnsupportedLanguageError,
)
from .persistence import PersistenceError, ReportFormatError, ReportWriteError

__all__ = [
    "CyclogateError",
    "ConfigurationError",
    "InvalidConfigError",
    "TreeProviderError",
    "SourceAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "PersistenceError",
    "ReportWriteError",
    "ReportFormatError",
]
