"""Normal mode command logic: prompts, page scripts, URI descent, zoom and marks."""

from __future__ import annotations

from .keyparse import NormalCmdInfo

__all__ = [
    "Marks",
    "ex_prompt",
    "hint_prompt",
    "input_open_text",
    "scroll_script",
    "jump_script",
    "increment_amount",
    "search_count",
    "descent_uri",
    "zoom_level",
]

_CTRL_A = "\x01"
_ZOOM_STEP = 0.1
_ZOOM_KEYS = "iIoOz"


def ex_prompt(key: str) -> str:
    """Prompt for the command line opened by ``key``.

    ``F`` and ``f`` start hinting into a new or the current page; other keys
    use themselves as the prompt.
    """
    if key == "F":
        return ";t"
    if key == "f":
        return ";o"
    return key


def hint_prompt(info: NormalCmdInfo) -> str:
    """Hint mode prompt for a parsed ``;x`` or ``g;x`` command."""
    if info.key == "g" and info.key2 == ";":
        return "g;" + info.key3
    return info.key + info.key2


def input_open_text(key: str, uri: str | None) -> str:
    """Command line text prepared by the ``o``, ``t``, ``O`` and ``T`` keys.

    The lower case keys start an empty open command, the upper case keys
    fill in the current ``uri``.
    """
    if key in ("o", "t"):
        command = "tabopen" if key == "t" else "open"
        return f":{command} "
    if key in ("O", "T"):
        command = "tabopen" if key == "T" else "open"
        return f":{command} {uri or ''}"
    raise ValueError(f"no open command bound to {key!r}")


def scroll_script(key: str, scrollstep: int, count: int) -> str:
    """Script that scrolls the page for ``key``."""
    return f"vbscroll('{key}',{scrollstep},{count});"


def jump_script(position: int) -> str:
    """Script that scrolls the page vertically to ``position``."""
    return f"window.scroll(window.screenLeft,{int(position)});"


def increment_amount(info: NormalCmdInfo) -> int:
    """Amount by which ``<C-A>`` or ``<C-X>`` changes the number in the URI."""
    count = info.count or 1
    return count if info.key == _CTRL_A else -count


def search_count(info: NormalCmdInfo) -> int:
    """Signed number of matches to move for ``n``, ``N``, ``*`` or ``#``.

    ``n`` and ``*`` search forward, the other keys backward.
    """
    count = info.count if info.count > 0 else 1
    return count if info.key in ("n", "*") else -count


def descent_uri(uri: str | None, key2: str, count: int) -> str:
    """URI reached by ``gu`` (go up ``count`` path levels) or ``gU`` (root).

    Never goes above the root of the domain. Raises ValueError when the URI
    has no domain part or the path is too short to step up.
    """
    if not uri:
        raise ValueError("no uri to descend")
    scheme_end = uri.find("://")
    if scheme_end == -1:
        raise ValueError(f"uri without scheme: {uri!r}")
    domain = uri.find("/", scheme_end + 3)
    if domain == -1:
        raise ValueError(f"uri without path: {uri!r}")

    count = count or 1
    if key2 == "U":
        p = domain
    elif key2 == "u":
        p = len(uri)
        # a trailing slash counts as one extra level to step over
        if uri.endswith("/"):
            count += 1
        for _ in range(count):
            while True:
                ch = uri[p] if p < len(uri) else ""
                p -= 1
                if ch == "/":
                    break
                if p == 0:
                    raise ValueError(f"cannot step up {count} levels in {uri!r}")
        # keep the slash in the result
        p += 1
    else:
        raise ValueError(f"unknown descent key {key2!r}")

    p = max(p, domain)
    return uri[: p + 1]


def zoom_level(level: float, key2: str, count: int) -> tuple[float, bool] | None:
    """New zoom level and text-only flag for ``zi``, ``zI``, ``zo``, ``zO``.

    Returns None for ``zz``, which resets to the default zoom with full
    content zoom. Lower case keys zoom text only.
    """
    if not key2 or key2 not in _ZOOM_KEYS:
        raise ValueError(f"unknown zoom key {key2!r}")
    if key2 == "z":
        return None
    steps = float(count) if count else 1.0
    if key2 in ("i", "I"):
        level += steps * _ZOOM_STEP
    else:
        level -= steps * _ZOOM_STEP
    return level, key2.islower()


class Marks:
    """Local scroll marks and global marks that also remember a URI."""

    def __init__(self, mark_chars: str, global_mark_chars: str) -> None:
        self.mark_chars = mark_chars
        self.global_mark_chars = global_mark_chars
        self._local: dict[str, int] = {}
        self._global: dict[str, tuple[int, str | None]] = {}
        self.last_position: int | None = None
        self.last_global: tuple[int, str | None] | None = None

    def _is_global(self, char: str) -> bool:
        if len(char) == 1 and char in self.mark_chars:
            return False
        if len(char) == 1 and char in self.global_mark_chars:
            return True
        raise ValueError(f"invalid mark {char!r}")

    def set(self, char: str, position: int, uri: str | None) -> None:
        """Remember ``position`` (and ``uri`` for a global mark) under ``char``."""
        if self._is_global(char):
            self._global[char] = (position, uri)
        else:
            self._local[char] = position

    def jump(self, char: str, position: int, uri: str | None) -> tuple[int, str | None]:
        """Target of mark ``char`` as ``(position, uri)``.

        The uri is None for a local mark. The current ``position`` and
        ``uri`` are kept as the last position. Raises KeyError for a mark
        that was never set.
        """
        if self._is_global(char):
            stored = self._global.get(char)
            if stored is None or stored[1] is None:
                raise KeyError(char)
            self.last_global = (position, uri)
            return stored
        if char not in self._local:
            raise KeyError(char)
        self.last_position = position
        return self._local[char], None