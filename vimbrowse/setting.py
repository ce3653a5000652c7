"""Typed browser settings changed with ``:set`` style commands."""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .fileutil import fill_completion

__all__ = [
    "DataType",
    "Operation",
    "SettingFlag",
    "SettingError",
    "Setting",
    "Settings",
    "prepare_value",
    "choice_validator",
]

Setter = Callable[[str, Any], None]

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")
_ULLONG_MAX = 2**64 - 1


class DataType(enum.Enum):
    """Kind of value a setting holds."""

    BOOLEAN = enum.auto()
    INTEGER = enum.auto()
    CHAR = enum.auto()
    COLOR = enum.auto()
    FONT = enum.auto()


class Operation(enum.Enum):
    """How a ``:set`` command changes a setting."""

    SET = enum.auto()  # option=value
    APPEND = enum.auto()  # option+=value
    PREPEND = enum.auto()  # option^=value
    REMOVE = enum.auto()  # option-=value
    GET = enum.auto()  # option?
    TOGGLE = enum.auto()  # option!


class SettingFlag(enum.IntFlag):
    """Behaviour flags of string settings."""

    NONE = 0
    LIST = 1 << 1  # comma separated list of values
    NODUP = 1 << 2  # no duplicate entries


_MODIFIERS = {
    "?": Operation.GET,
    "+": Operation.APPEND,
    "^": Operation.PREPEND,
    "-": Operation.REMOVE,
    "!": Operation.TOGGLE,
}


class SettingError(Exception):
    """A setting could not be found, read or changed."""


@dataclass
class Setting:
    """One named setting with its current value."""

    name: str
    type: DataType
    value: Any = None
    setter: Setter | None = None
    flags: SettingFlag = SettingFlag.NONE

    def formatted(self) -> str:
        if self.type is DataType.BOOLEAN:
            shown = "true" if self.value else "false"
        elif self.type is DataType.INTEGER:
            shown = str(self.value)
        else:
            shown = self.value
        return f"  {self.name}={shown}"


def _find_item(current: str, value: str, islist: bool) -> tuple[int, int]:
    """Position and length of ``value`` in ``current`` to remove.

    Returns ``(len(current), 0)`` when the value is not present.
    """
    vlen = len(value)
    for p in range(len(current)):
        if islist and p != 0 and current[p - 1] != ",":
            continue
        if current[p : p + vlen] != value:
            continue
        after = current[p + vlen : p + vlen + 1]
        if islist and after not in (",", ""):
            continue
        length = vlen
        if islist:
            if p == 0:
                # take the comma after the item along
                if after == ",":
                    length += 1
            else:
                # take the comma before the item along
                p -= 1
                length += 1
        return p, length
    return len(current), 0


def prepare_value(setting: Setting, value: Any, operation: Operation) -> Any:
    """New value for ``setting`` when ``value`` is applied with ``operation``.

    Integers are added to (append), multiplied by (prepend) or subtracted
    from (remove). Strings are concatenated or have ``value`` cut out; list
    settings use commas between items.
    """
    if (
        operation not in (Operation.APPEND, Operation.PREPEND, Operation.REMOVE)
        or setting.type is DataType.BOOLEAN
    ):
        return value

    if setting.type is DataType.INTEGER:
        if operation is Operation.APPEND:
            return setting.value + value
        if operation is Operation.PREPEND:
            return setting.value * value
        return setting.value - value

    current: str = setting.value or ""
    if not current:
        if operation in (Operation.APPEND, Operation.PREPEND):
            return value
        return current

    islist = bool(setting.flags & SettingFlag.LIST)
    pos, length = len(current), 0
    if operation is Operation.REMOVE or setting.flags & SettingFlag.NODUP:
        pos, length = _find_item(current, value, islist)
        # an existing value is not added a second time
        if operation in (Operation.APPEND, Operation.PREPEND) and pos < len(current):
            return value

    if operation is Operation.APPEND:
        if islist and value:
            return f"{current},{value}"
        return current + value
    if operation is Operation.PREPEND:
        if islist and value:
            return f"{value},{current}"
        return value + current
    return current[:pos] + current[pos + length :]


def choice_validator(choices: Iterable[str]) -> Setter:
    """Setter that accepts only one of ``choices``."""
    allowed = tuple(choices)

    def validate(name: str, value: Any) -> None:
        if value not in allowed:
            raise SettingError(f"{name} must be in [{', '.join(allowed)}]")

    return validate


def _parse_bool(param: str) -> bool:
    lowered = param[:4].lower()
    return lowered.startswith("true") or lowered.startswith("on")


def _parse_int(param: str) -> int:
    """Leading decimal number of ``param`` read as an unsigned value cast to int."""
    match = _INT_PREFIX.match(param)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    number = min(int(digits), _ULLONG_MAX)
    if sign == "-" and number:
        number = (-number) % 2**64
    number &= 0xFFFFFFFF
    return number - 2**32 if number >= 2**31 else number


class Settings:
    """Collection of named settings."""

    def __init__(self) -> None:
        self._settings: dict[str, Setting] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._settings

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def _lookup(self, name: str) -> Setting:
        try:
            return self._settings[name]
        except KeyError:
            raise SettingError(f"Config '{name}' not found") from None

    def add(
        self,
        name: str,
        type: DataType,
        value: Any,
        setter: Setter | None = None,
        flags: SettingFlag = SettingFlag.NONE,
    ) -> Setting:
        """Define a setting and apply its initial value through its setter."""
        setting = Setting(name=name, type=type, setter=setter, flags=SettingFlag(flags))
        self._apply(setting, value, Operation.SET)
        self._settings[name] = setting
        return setting

    def get(self, name: str) -> Any:
        """Current value of the setting ``name``."""
        return self._lookup(name).value

    def _apply(self, setting: Setting, value: Any, operation: Operation) -> None:
        new_value = prepare_value(setting, value, operation)
        if setting.setter is not None:
            # a setter raises SettingError to reject the value
            setting.setter(setting.name, new_value)
        setting.value = new_value

    def set_value(
        self, name: str, value: Any, operation: Operation = Operation.SET
    ) -> Any:
        """Apply ``value`` to the setting ``name`` and return the new value."""
        setting = self._lookup(name)
        self._apply(setting, value, operation)
        return setting.value

    def format(self, name: str) -> str:
        """Display line ``  name=value`` for the setting ``name``."""
        return self._lookup(name).formatted()

    def run(self, name: str, param: str | None) -> str | None:
        """Execute ``:set name=param``.

        A trailing ``?``, ``+``, ``^``, ``-`` or ``!`` on ``name`` selects
        the operation; without a parameter the value is shown. Returns the
        display line for shown or toggled settings, otherwise None.
        """
        if not name:
            raise SettingError(f"Config '{name}' not found")
        operation = _MODIFIERS.get(name[-1])
        if operation is not None:
            name = name[:-1]
        elif param is None:
            operation = Operation.GET
        else:
            operation = Operation.SET

        setting = self._lookup(name)

        if operation is Operation.GET:
            return setting.formatted()

        if operation is Operation.TOGGLE:
            if setting.type is not DataType.BOOLEAN:
                raise SettingError(f"Could not toggle none boolean {setting.name}")
            self._apply(setting, not setting.value, Operation.SET)
            return setting.formatted()

        if param is None:
            raise SettingError("No valid value")

        if setting.type is DataType.BOOLEAN:
            value: Any = _parse_bool(param)
        elif setting.type is DataType.INTEGER:
            value = _parse_int(param)
        else:
            value = param
        self._apply(setting, value, operation)
        return None

    def completions(self, prefix: str | None) -> list[str]:
        """Setting names starting with ``prefix``; all names if it is empty."""
        return fill_completion(self._settings.keys(), prefix)