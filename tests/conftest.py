"""Shared test fixtures for cyclogate tests."""

import logging
import os

import pytest

from cyclogate.config import CyclogateConfig
from cyclogate.reporting.notices import CollectingNoticeChannel
from cyclogate.syntax import NodeKind, SourceLocation, function, node


@pytest.fixture
def unit_location():
    """Location inside an implementation file."""
    return SourceLocation(path="src/unit.c", line=3, column=5)


@pytest.fixture
def header_location():
    """Location inside a project header."""
    return SourceLocation(path="include/unit.h", line=10, column=1)


@pytest.fixture
def system_location():
    """Location inside a system header."""
    return SourceLocation(path="/usr/include/stdio.h", line=200, column=1, is_system=True)


@pytest.fixture
def foo_body():
    """{ if (cond) {...}; while (x) {...}; y = a ? b : c; }"""
    return node(
        NodeKind.COMPOUND,
        node(NodeKind.IF, node(NodeKind.OTHER), node(NodeKind.COMPOUND), None),
        node(NodeKind.WHILE, node(NodeKind.OTHER), node(NodeKind.COMPOUND)),
        node(
            NodeKind.OTHER,
            node(NodeKind.OTHER),
            node(NodeKind.CONDITIONAL, node(NodeKind.OTHER), node(NodeKind.OTHER), node(NodeKind.OTHER)),
        ),
    )


@pytest.fixture
def empty_body():
    """{}"""
    return node(NodeKind.COMPOUND)


@pytest.fixture
def channel():
    """Notice channel that records everything."""
    return CollectingNoticeChannel()


@pytest.fixture
def config(tmp_path):
    """Config writing its artifact into the test's temp directory."""
    return CyclogateConfig(output_path=str(tmp_path / "results.cy"))


def make_unit(*declarations):
    """Wrap declarations in a translation unit node."""
    return node(NodeKind.TRANSLATION_UNIT, *declarations)


@pytest.fixture
def unit_builder():
    return make_unit


@pytest.fixture
def function_builder():
    return function


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty HOME and cwd and no CYCLOGATE_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("CYCLOGATE_"):
            monkeypatch.delenv(key)
    return work


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and level that API calls install on the cyclogate logger."""
    logger = logging.getLogger("cyclogate")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
