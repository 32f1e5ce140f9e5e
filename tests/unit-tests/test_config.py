from __future__ import annotations

import pytest

import stdiocontext
from stdiocontext.lib.config import Config
from stdiocontext.lib.config import Parameter
from stdiocontext.lib.config import parse_value


def test_parse_value():
    assert parse_value(False, "1") is True
    assert parse_value(False, "Yes") is True
    assert parse_value(True, "off") is False
    assert parse_value(True, "") is False
    assert parse_value(0, "0x10") == 16
    assert parse_value("", "text") == "text"

    with pytest.raises(ValueError):
        parse_value(False, "maybe")


def test_parameter_values():
    config = Config()
    param = config.add_param("some-flag", False, "an example flag")

    assert config.some_flag is param
    assert not param
    assert param == False  # noqa: E712
    assert not param.is_changed

    param.set(True)
    assert param
    assert param.is_changed

    param.revert_default()
    assert not param
    assert param.attr_name() == "some_flag"


def test_parameter_from_environment(monkeypatch):
    monkeypatch.setenv("STDIOCONTEXT_TEST_LEVEL", "3")
    config = Config()

    param = config.add_param("level", 1, "an example level", env="STDIOCONTEXT_TEST_LEVEL")

    assert int(param) == 3
    assert param.default == 1


def test_invalid_environment_value_names_variable(monkeypatch):
    monkeypatch.setenv("STDIOCONTEXT_TEST_FLAG", "maybe")
    config = Config()

    with pytest.raises(ValueError, match="STDIOCONTEXT_TEST_FLAG"):
        config.add_param("flag", False, "an example flag", env="STDIOCONTEXT_TEST_FLAG")


def test_triggers_fire_on_change():
    config = Config()
    param = config.add_param("watched", "a", "a watched value")
    calls = []

    @config.trigger(param)
    def on_change():
        calls.append(str(param))

    param.set("a")
    assert calls == []

    param.set("b")
    param.revert_default()
    assert calls == ["b", "a"]


def test_get_params_by_scope():
    config = Config()
    b = config.add_param("b", 0, "b")
    a = config.add_param("a", 0, "a")
    config.add_param("themed", "red", "a color", scope="theme")

    assert config.get_params("config") == [a, b]
    assert [p.name for p in config.get_params("theme")] == ["themed"]


def test_invalid_names():
    config = Config()
    config.add_param("dup", 0, "first")

    with pytest.raises(AssertionError):
        config.add_param("dup", 0, "second")
    with pytest.raises(AssertionError):
        config.add_param("no_underscores", 0, "bad")
    with pytest.raises(AttributeError):
        config.missing


def test_package_params():
    names = {p.name for p in stdiocontext.config.get_params("config")}

    assert {"strict", "overwrite", "debug-log"} <= names
    assert isinstance(stdiocontext.config.disable_colors, Parameter)
