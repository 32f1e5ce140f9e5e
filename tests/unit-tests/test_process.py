"""
Contexts using the default environment, i.e. the real sys.stdin, sys.stdout,
sys.stderr and stdiocontext.console.console.
"""

from __future__ import annotations

import io
import sys

import pytest

import stdiocontext.console
from stdiocontext import StdioContext
from stdiocontext.console import Console
from stdiocontext.environment import process_environment


def test_default_environment():
    context = StdioContext({})

    assert context.environment is process_environment
    assert process_environment.get("output") is sys.stdout
    assert process_environment.get("log_facade") is stdiocontext.console.console


def test_print_is_redirected():
    stdout = sys.stdout
    console = stdiocontext.console.console
    captured = io.StringIO()

    with StdioContext({"stdout": captured}):
        print("to the captured stream")
        stdiocontext.console.console.log("through the console")
        assert stdiocontext.console.console is not console

    assert sys.stdout is stdout
    assert stdiocontext.console.console is console
    assert captured.getvalue() == "to the captured stream\nthrough the console\n"


def test_discarded_output_is_not_seen(capsys):
    def noisy():
        for i in range(100):
            print("noise", i)
            print("more noise", i, file=sys.stderr)

    StdioContext({"output": None, "error": None}).exec(noisy)
    print("after")

    out, err = capsys.readouterr()
    assert out == "after\n"
    assert err == ""


def test_empty_input_reads_nothing():
    stdin = sys.stdin

    with StdioContext({"input": None}):
        assert sys.stdin is not stdin
        assert sys.stdin.read() == ""
        with pytest.raises(EOFError):
            input()

    assert sys.stdin is stdin


def test_replaced_input_is_read():
    with StdioContext([io.StringIO("first\nsecond\n")]):
        assert input() == "first"
        assert sys.stdin.readline() == "second\n"


def test_default_console_follows_sys(capsys):
    console = Console()

    console.log("out", 1)
    console.warn("err", 2)

    out, err = capsys.readouterr()
    assert out == "out 1\n"
    assert err == "err 2\n"


def test_console_exception_prints_traceback():
    stream = io.StringIO()
    console = Console(stream)

    try:
        raise ValueError("broken")
    except ValueError:
        console.exception("handling")

    assert stream.getvalue().startswith("handling\nTraceback")
    assert "ValueError: broken" in stream.getvalue()


def test_console_exception_without_exception():
    stream = io.StringIO()
    console = Console(stream)

    console.exception("nothing raised")

    assert stream.getvalue() == "nothing raised\n"
