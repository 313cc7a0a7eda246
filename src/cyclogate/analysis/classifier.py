"""Decide which function declarations are scored."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from ..config import DEFAULT_HEADER_SUFFIXES
from ..syntax import SourceLocation


class Classification(Enum):
    IMPLEMENTATION = "implementation"
    EXCLUDED = "excluded"


def is_header_path(path: str, header_suffixes: Iterable[str] = DEFAULT_HEADER_SUFFIXES) -> bool:
    """True when the file name follows the header naming convention."""
    return path.endswith(tuple(header_suffixes))


def classify(
    location: Optional[SourceLocation],
    header_suffixes: Iterable[str] = DEFAULT_HEADER_SUFFIXES,
) -> Classification:
    """Classify a declaration by where it was written.

    System locations and header files are excluded; so is a declaration the
    provider could not place in any file.
    """
    if location is None:
        return Classification.EXCLUDED
    if location.is_system:
        return Classification.EXCLUDED
    if is_header_path(location.path, header_suffixes):
        return Classification.EXCLUDED
    return Classification.IMPLEMENTATION
