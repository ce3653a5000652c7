import pytest

from vimbrowse.defaults import default_settings, default_shortcuts
from vimbrowse.setting import SettingError


def test_user_agent_carries_version():
    settings = default_settings("3.7.0")
    agent = settings.get("user-agent")
    assert agent.endswith("Safari/605.1.15 vimb/3.7.0")
    assert agent.startswith("Mozilla/5.0 (X11; Linux x86_64)")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("scroll-step", 40),
        ("history-max-items", 2000),
        ("closed-max-items", 10),
        ("default-zoom", 100),
        ("minimum-font-size", 5),
        ("geolocation", "ask"),
        ("hardware-acceleration-policy", "ondemand"),
        ("editor-command", "x-terminal-emulator -e -vi '%s'"),
        ("x-hint-command", ":o <C-R>;"),
        ("spell-checking-languages", "en_US"),
        ("webinspector", True),
        ("webgl", False),
    ],
)
def test_default_values(name, expected):
    assert default_settings("1").get(name) == expected


def test_setters_called_with_initial_value():
    calls = []
    default_settings("1", {"scroll-step": lambda n, v: calls.append((n, v))})
    assert calls == [("scroll-step", 40)]


def test_setter_called_on_change():
    calls = []
    settings = default_settings("1", {"caret": lambda n, v: calls.append(v)})
    assert settings.run("caret!", None) == "  caret=true"
    assert calls == [False, True]


def test_unknown_setter_name_rejected():
    with pytest.raises(ValueError):
        default_settings("1", {"no-such-setting": lambda n, v: None})


def test_choice_rejected_keeps_value():
    settings = default_settings("1")
    with pytest.raises(SettingError):
        settings.run("geolocation", "sometimes")
    assert settings.get("geolocation") == "ask"


def test_choice_accepted():
    settings = default_settings("1")
    settings.run("hardware-acceleration-policy", "never")
    assert settings.get("hardware-acceleration-policy") == "never"


def test_validator_runs_before_user_setter():
    calls = []
    settings = default_settings("1", {"notification": lambda n, v: calls.append(v)})
    with pytest.raises(SettingError):
        settings.run("notification", "maybe")
    settings.run("notification", "never")
    assert calls == ["ask", "never"]


def test_spell_languages_list():
    settings = default_settings("1")
    settings.run("spell-checking-languages+", "de_DE")
    assert settings.get("spell-checking-languages") == "en_US,de_DE"
    settings.run("spell-checking-languages-", "en_US")
    assert settings.get("spell-checking-languages") == "de_DE"


def test_integer_setting_arithmetic():
    settings = default_settings("1")
    settings.run("scroll-step+", "10")
    assert settings.get("scroll-step") == 50


def test_completions_by_prefix():
    settings = default_settings("1")
    names = settings.completions("hint-")
    assert sorted(names) == sorted(
        ["hint-timeout", "hint-follow-last", "hint-keys-same-length", "hint-match-element"]
    )


def test_shortcut_explicit_key():
    shortcuts = default_shortcuts()
    assert shortcuts.get_uri("dd foo bar") == "https://duckduckgo.com/?q=foo%20bar"


def test_shortcut_fallback_to_default():
    shortcuts = default_shortcuts()
    assert shortcuts.get_uri("hello") == "https://duckduckgo.com/html/?q=hello"


def test_shortcut_keys():
    assert sorted(default_shortcuts().completions("")) == ["dd", "dl"]