"""
This file should consist of global test fixtures.
"""

from __future__ import annotations

import io
from types import SimpleNamespace

import pytest

import stdiocontext
from stdiocontext.console import Console
from stdiocontext.environment import Environment


@pytest.fixture(autouse=True)
def default_config():
    """
    Runs every test with the default configuration, whatever
    STDIOCONTEXT_* variables are set, and reverts changes made by the test.
    """
    for param in stdiocontext.config.params.values():
        param.revert_default()
    yield
    for param in stdiocontext.config.params.values():
        param.revert_default()


@pytest.fixture
def stdio():
    """
    Namespace standing in for the process streams, holding an input with some
    data, two empty outputs and a console writing to them.
    """
    output = io.StringIO()
    error = io.StringIO()
    return SimpleNamespace(
        input=io.StringIO("original input\n"),
        output=output,
        error=error,
        log_facade=Console(output, error),
    )


@pytest.fixture
def environment(stdio):
    return Environment.from_namespace(stdio)


@pytest.fixture
def snapshot(stdio):
    """Returns a function giving the current value of every slot."""

    def _snapshot():
        return (stdio.input, stdio.output, stdio.error, stdio.log_facade)

    return _snapshot
