"""
Logging configuration for cyclogate.

Handlers are attached to the ``cyclogate`` logger only; the root logger and
whatever an embedding build tool configured on it are left alone. Records
still propagate upward.

Log records go to stderr through a rich handler.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "cyclogate"

# Marks handlers installed by setup_logging so a later call can replace them
_OWNED_ATTR = "_cyclogate_owned"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _remove_owned_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install cyclogate's log handlers.

    Every API entry point calls this with the loaded configuration, so
    handlers from a previous call are replaced rather than stacked.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging (wins over verbose)
        log_file: Optional file that receives the same records, appended

    Returns:
        The ``cyclogate`` package logger
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_owned_handlers(logger)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Function names such as operator[] would otherwise parse as markup
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED_ATTR, True)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the cyclogate namespace.

    Args:
        name: Module name (e.g., 'cyclogate.api' or just 'api').
              If None, returns the package logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
