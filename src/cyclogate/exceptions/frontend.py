"""Tree provider exceptions: reading and translating source trees."""

from pathlib import Path
from typing import List

from .base import CyclogateError


class TreeProviderError(CyclogateError):
    """Base class for errors raised while building a syntax tree."""

    pass


class SourceAccessError(TreeProviderError):
    """Raised when an input file cannot be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(TreeProviderError):
    """Raised when input cannot be turned into a syntax tree."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} input: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(TreeProviderError):
    """Raised when no grammar is available for the requested language."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages
