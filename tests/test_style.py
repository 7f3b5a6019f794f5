import io

import pytest

from taskfile.style import colors_enabled, style


class _Tty(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("NO_COLOR", "CLICOLOR", "CLICOLOR_FORCE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_terminal_stream_gets_colour(clean_env):
    assert colors_enabled(_Tty()) is True


def test_plain_stream_gets_no_colour(clean_env):
    assert colors_enabled(io.StringIO()) is False


def test_no_color_disables_terminal(clean_env):
    clean_env.setenv("NO_COLOR", "1")
    assert colors_enabled(_Tty()) is False


def test_clicolor_zero_disables_terminal(clean_env):
    clean_env.setenv("CLICOLOR", "0")
    assert colors_enabled(_Tty()) is False


def test_force_overrides_no_color(clean_env):
    clean_env.setenv("NO_COLOR", "1")
    clean_env.setenv("CLICOLOR_FORCE", "1")
    assert colors_enabled(io.StringIO()) is True


def test_style_forced_single_color(clean_env):
    clean_env.setenv("CLICOLOR_FORCE", "1")
    assert style("hi", "green") == "\x1b[32mhi\x1b[0m"


def test_style_forced_attribute_before_color(clean_env):
    clean_env.setenv("CLICOLOR_FORCE", "1")
    assert style("Task", "green", "bold") == "\x1b[1;32mTask\x1b[0m"


def test_style_disabled_returns_text(clean_env):
    clean_env.setenv("NO_COLOR", "1")
    assert style("error:", "red", "bold") == "error:"


def test_style_without_names_returns_text(clean_env):
    clean_env.setenv("CLICOLOR_FORCE", "1")
    assert style("plain") == "plain"


def test_style_unknown_name_raises(clean_env):
    clean_env.setenv("NO_COLOR", "1")
    with pytest.raises(ValueError):
        style("x", "sparkly")