from __future__ import annotations

import stdiocontext
from stdiocontext.color import BOLD
from stdiocontext.color import LIGHT_RED
from stdiocontext.color import NORMAL
from stdiocontext.color import RED
from stdiocontext.color import generateColorFunction
from stdiocontext.color import message
from stdiocontext.color import red
from stdiocontext.color import strip


def test_colors():
    s = "test"
    assert red(s) == f"{RED}{s}{NORMAL}"
    assert strip(red(s)) == s


def test_generated_color_functions():
    expected = f"{LIGHT_RED}{BOLD}x{NORMAL}{LIGHT_RED}{NORMAL}"

    assert generateColorFunction("bold,light-red")("x") == expected
    assert message.critical("x") == expected


def test_disable_colors():
    stdiocontext.config.disable_colors.set(True)

    assert message.error("x") == "x"
    assert generateColorFunction("red")(42) == "42"
