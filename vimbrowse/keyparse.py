"""Parsing of normal mode key sequences into commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["Phase", "KeyResult", "NormalCmdInfo", "NormalParser", "command_for"]


class Phase(enum.Enum):
    """Where the parser is within a key sequence."""

    START = enum.auto()
    KEY2 = enum.auto()
    KEY3 = enum.auto()
    REG = enum.auto()
    COMPLETE = enum.auto()


class KeyResult(enum.Enum):
    """Outcome of handling a key."""

    ERROR = enum.auto()
    COMPLETE = enum.auto()
    MORE = enum.auto()


_COMMANDS = {
    "\x01": "increment_decrement",
    "\x02": "scroll",
    "\x03": "navigate",
    "\x04": "scroll",
    "\x06": "scroll",
    "\x09": "navigate",
    "\x0d": "fire",
    "\x0f": "navigate",
    "\x10": "queue",
    "\x11": "quit",
    "\x15": "scroll",
    "\x18": "increment_decrement",
    "\x1a": "pass",
    "\x1b": "clear_input",
    "#": "search_selection",
    "$": "scroll",
    "'": "mark",
    "*": "search_selection",
    "/": "ex",
    "0": "scroll",
    ":": "ex",
    ";": "hint",
    "?": "ex",
    "F": "ex",
    "G": "scroll",
    "N": "search",
    "O": "input_open",
    "P": "open_clipboard",
    "R": "navigate",
    "T": "input_open",
    "U": "open",
    "Y": "yank",
    "[": "prevnext",
    "]": "prevnext",
    "f": "ex",
    "g": "g_cmd",
    "h": "scroll",
    "i": "focus_last_active",
    "j": "scroll",
    "k": "scroll",
    "l": "scroll",
    "m": "mark",
    "n": "search",
    "o": "input_open",
    "p": "open_clipboard",
    "r": "navigate",
    "t": "input_open",
    "u": "open",
    "y": "yank",
    "z": "zoom",
}

# keys that take a second key before the command is complete
_TWO_KEY_COMMANDS = ";zg[]'m"


def command_for(key: str) -> str | None:
    """Name of the normal mode command bound to ``key``, or None."""
    return _COMMANDS.get(key)


@dataclass
class NormalCmdInfo:
    """A parsed normal mode command."""

    count: int = 0
    key: str = ""
    key2: str = ""
    key3: str = ""
    reg: str = ""
    phase: Phase = Phase.START

    @property
    def command(self) -> str | None:
        """Command bound to the main key, or None if the key is unbound."""
        return command_for(self.key) if self.key else None


class NormalParser:
    """Collects keys until a complete normal mode command is typed."""

    def __init__(self, register_chars: str) -> None:
        self.register_chars = register_chars
        self.info = NormalCmdInfo()

    @property
    def nomap(self) -> bool:
        """Whether the next key must not go through key mappings."""
        return self.info.phase in (Phase.KEY2, Phase.KEY3, Phase.REG)

    def reset(self) -> None:
        """Forget all keys typed so far."""
        self.info = NormalCmdInfo()

    def keypress(self, key: str | int) -> NormalCmdInfo | None:
        """Feed one key; return the finished command or None if more is needed."""
        if isinstance(key, int):
            key = chr(key)
        info = self.info

        if info.phase is Phase.START:
            if info.count == 0 and key == "0":
                info.key = key
                info.phase = Phase.COMPLETE
            elif "0" <= key <= "9" and len(key) == 1:
                info.count = info.count * 10 + int(key)
            elif key and key in _TWO_KEY_COMMANDS:
                info.phase = Phase.KEY2
                info.key = key
            elif key == '"':
                info.phase = Phase.REG
            else:
                info.key = key
                info.phase = Phase.COMPLETE
        elif info.phase is Phase.KEY2:
            info.key2 = key
            # the g; hint mode needs a third key
            if info.key == "g" and key == ";":
                info.phase = Phase.KEY3
            else:
                info.phase = Phase.COMPLETE
        elif info.phase is Phase.KEY3:
            info.key3 = key
            info.phase = Phase.COMPLETE
        elif info.phase is Phase.REG:
            if key and key in self.register_chars:
                info.reg = key
                info.phase = Phase.START
            else:
                info.phase = Phase.COMPLETE

        if info.phase is Phase.COMPLETE:
            self.reset()
            return info
        return None