"""The browser's built-in settings and search shortcuts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .setting import DataType, Setter, SettingFlag, Settings, choice_validator
from .shortcut import Shortcuts

__all__ = ["default_settings", "default_shortcuts"]

PROJECT = "vimb"

_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.4 Safari/605.1.15 "
)

_B = DataType.BOOLEAN
_I = DataType.INTEGER
_S = DataType.CHAR

_NODUP = SettingFlag.NODUP
_LIST_NODUP = SettingFlag.LIST | SettingFlag.NODUP

# name, type, initial value, flags
_DEFAULTS: tuple[tuple[str, DataType, Any, SettingFlag], ...] = (
    ("accelerated-2d-canvas", _B, False, SettingFlag.NONE),
    ("allow-file-access-from-file-urls", _B, False, SettingFlag.NONE),
    ("allow-universal-access-from-file-urls", _B, False, SettingFlag.NONE),
    ("caret", _B, False, SettingFlag.NONE),
    ("cursiv-font", _S, "serif", SettingFlag.NONE),
    ("dark-mode", _B, False, SettingFlag.NONE),
    ("default-charset", _S, "utf-8", SettingFlag.NONE),
    ("default-font", _S, "sans-serif", SettingFlag.NONE),
    ("dns-prefetching", _B, True, SettingFlag.NONE),
    ("frame-flattening", _B, False, SettingFlag.NONE),
    ("geolocation", _S, "ask", _NODUP),
    ("hardware-acceleration-policy", _S, "ondemand", _NODUP),
    ("header", _S, "", _LIST_NODUP),
    ("hint-timeout", _I, 1000, SettingFlag.NONE),
    ("hint-follow-last", _B, True, SettingFlag.NONE),
    ("hint-keys-same-length", _B, False, SettingFlag.NONE),
    ("hint-match-element", _B, True, SettingFlag.NONE),
    ("html5-database", _B, True, SettingFlag.NONE),
    ("html5-local-storage", _B, True, SettingFlag.NONE),
    ("hyperlink-auditing", _B, False, SettingFlag.NONE),
    ("images", _B, True, SettingFlag.NONE),
    ("intelligent-tracking-prevention", _B, False, SettingFlag.NONE),
    ("javascript-can-access-clipboard", _B, False, SettingFlag.NONE),
    ("javascript-can-open-windows-automatically", _B, False, SettingFlag.NONE),
    ("javascript-enable-markup", _B, True, SettingFlag.NONE),
    ("media-playback-allows-inline", _B, True, SettingFlag.NONE),
    ("media-playback-requires-user-gesture", _B, False, SettingFlag.NONE),
    ("media-stream", _B, False, SettingFlag.NONE),
    ("mediasource", _B, False, SettingFlag.NONE),
    ("minimum-font-size", _I, 5, SettingFlag.NONE),
    ("monospace-font", _S, "monospace", SettingFlag.NONE),
    ("notification", _S, "ask", _NODUP),
    ("offline-cache", _B, True, SettingFlag.NONE),
    ("plugins", _B, True, SettingFlag.NONE),
    ("prevent-newwindow", _B, False, SettingFlag.NONE),
    ("print-backgrounds", _B, True, SettingFlag.NONE),
    ("sans-serif-font", _S, "sans-serif", SettingFlag.NONE),
    ("scripts", _B, True, SettingFlag.NONE),
    ("serif-font", _S, "serif", SettingFlag.NONE),
    ("site-specific-quirks", _B, False, SettingFlag.NONE),
    ("smooth-scrolling", _B, False, SettingFlag.NONE),
    ("spatial-navigation", _B, False, SettingFlag.NONE),
    ("tabs-to-links", _B, True, SettingFlag.NONE),
    ("webaudio", _B, False, SettingFlag.NONE),
    ("webgl", _B, False, SettingFlag.NONE),
    ("webinspector", _B, True, SettingFlag.NONE),
    ("xss-auditor", _B, True, SettingFlag.NONE),
    # internal variables
    ("stylesheet", _B, True, SettingFlag.NONE),
    ("user-scripts", _B, True, SettingFlag.NONE),
    ("scroll-step", _I, 40, SettingFlag.NONE),
    ("scroll-multiplier", _I, 1, SettingFlag.NONE),
    ("status-bar-show-settings", _B, False, SettingFlag.NONE),
    ("history-max-items", _I, 2000, SettingFlag.NONE),
    ("editor-command", _S, "x-terminal-emulator -e -vi '%s'", SettingFlag.NONE),
    ("strict-ssl", _B, True, SettingFlag.NONE),
    ("status-bar", _B, True, SettingFlag.NONE),
    ("timeoutlen", _I, 1000, SettingFlag.NONE),
    ("input-autohide", _B, True, SettingFlag.NONE),
    ("fullscreen", _B, False, SettingFlag.NONE),
    ("show-titlebar", _B, True, SettingFlag.NONE),
    ("default-zoom", _I, 100, SettingFlag.NONE),
    ("download-use-external", _B, False, SettingFlag.NONE),
    ("incsearch", _B, True, SettingFlag.NONE),
    ("closed-max-items", _I, 10, SettingFlag.NONE),
    ("x-hint-command", _S, ":o <C-R>;", SettingFlag.NONE),
    ("spell-checking", _B, False, SettingFlag.NONE),
    ("spell-checking-languages", _S, "en_US", _LIST_NODUP),
)

# settings that accept only a fixed set of values
_CHOICES: dict[str, tuple[str, ...]] = {
    "geolocation": ("always", "ask", "never"),
    "hardware-acceleration-policy": ("ondemand", "always", "never"),
    "notification": ("always", "ask", "never"),
}


def _chain(first: Setter, second: Setter | None) -> Setter:
    if second is None:
        return first

    def setter(name: str, value: Any) -> None:
        first(name, value)
        second(name, value)

    return setter


def default_settings(
    version: str, setters: Mapping[str, Setter] | None = None
) -> Settings:
    """Settings with their built-in defaults.

    ``setters`` maps setting names to callables that apply a value; each is
    called with the initial value and on every change. Settings restricted
    to fixed choices validate before their setter runs. Raises ValueError
    for a setter given for an unknown setting.
    """
    setters = dict(setters or {})
    entries = (("user-agent", _S, f"{_USER_AGENT}{PROJECT}/{version}", SettingFlag.NONE),)
    entries += _DEFAULTS

    unknown = set(setters) - {name for name, *_ in entries}
    if unknown:
        raise ValueError(f"no such settings: {', '.join(sorted(unknown))}")

    settings = Settings()
    for name, kind, value, flags in entries:
        setter = setters.get(name)
        if name in _CHOICES:
            setter = _chain(choice_validator(_CHOICES[name]), setter)
        settings.add(name, kind, value, setter, flags)
    return settings


def default_shortcuts() -> Shortcuts:
    """Search shortcuts defined out of the box, with ``dl`` as default."""
    shortcuts = Shortcuts()
    shortcuts.add("dl", "https://duckduckgo.com/html/?q=$0")
    shortcuts.add("dd", "https://duckduckgo.com/?q=$0")
    shortcuts.set_default("dl")
    return shortcuts