"""String helpers: shell-like expansion, wildcard matching and small text utilities."""

from __future__ import annotations

import enum
import os
from urllib.parse import urlsplit

try:
    import pwd
except ImportError:  # pragma: no cover - platforms without a passwd database
    pwd = None

__all__ = [
    "ExpandFlags",
    "expand",
    "parse_expansion",
    "wildmatch",
    "casefind",
    "str_replace",
    "strescape",
    "string_to_timespan",
    "sanitize_filename",
    "sanitize_uri",
]

TIME_SPAN_SECOND = 1_000_000
TIME_SPAN_MINUTE = 60 * TIME_SPAN_SECOND
TIME_SPAN_HOUR = 60 * TIME_SPAN_MINUTE
TIME_SPAN_DAY = 24 * TIME_SPAN_HOUR

_TIME_UNITS = {
    "y": 365 * TIME_SPAN_DAY,
    "w": 7 * TIME_SPAN_DAY,
    "d": TIME_SPAN_DAY,
    "h": TIME_SPAN_HOUR,
    "m": TIME_SPAN_MINUTE,
    "s": TIME_SPAN_SECOND,
}

_SPACE_CHARS = " \t\n\v\f\r"
_SEPARATOR_CHARS = _SPACE_CHARS + "\"'"
_QUOTE = "\\"


class ExpandFlags(enum.IntFlag):
    """Which expansions :func:`expand` performs."""

    NONE = 0
    TILDE = 0x01  # ~/ and ~user
    DOLLAR = 0x02  # $ENV and ${ENV}


def _at(text: str, index: int) -> str:
    """Character at index, or an empty string outside the text."""
    return text[index] if 0 <= index < len(text) else ""


def _is_space(ch: str) -> bool:
    return ch != "" and ch in _SPACE_CHARS


def _is_separator(ch: str) -> bool:
    return ch != "" and ch in _SEPARATOR_CHARS


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9" and ch != ""


def _is_ident(ch: str) -> bool:
    return ch != "" and ch.isascii() and (ch.isalnum() or ch == "_")


def _home_dir() -> str:
    return os.path.expanduser("~")


def _user_home(name: str) -> str | None:
    if not name or pwd is None:
        return None
    try:
        return pwd.getpwnam(name).pw_dir
    except KeyError:
        return None


def parse_expansion(
    text: str, pos: int, flags: int, quoteable: str
) -> tuple[str, int, bool]:
    """Parse one expansion or one character of ``text`` starting at ``pos``.

    Returns the produced text, the position of the first unconsumed
    character and whether an expansion pattern was found.
    """
    if not 0 <= pos < len(text):
        raise ValueError("position outside of text")

    ch = text[pos]
    if flags & ExpandFlags.TILDE and ch == "~":
        i = pos + 1
        if _at(text, i) == "/":
            nxt = _at(text, i + 1)
            # "~/" alone or before a space yields the bare home directory
            if nxt == "" or _is_space(nxt):
                return _home_dir(), i + 1, True
            return _home_dir(), i, True
        j = i
        while _is_ident(_at(text, j)):
            j += 1
        home = _user_home(text[i:j])
        if home is not None:
            return home, j, True
    elif flags & ExpandFlags.DOLLAR and ch == "$":
        i = pos + 1
        if _at(text, i) == "{":
            i += 1
            start = i
            while i < len(text) and text[i] != "}":
                i += 1
            name = text[start:i]
            if i < len(text):
                i += 1
        else:
            start = i
            while _is_ident(_at(text, i)):
                i += 1
            name = text[start:i]
        value = os.environ.get(name) if name else None
        # variables expand even when they are not set
        return value or "", i, True

    if ch == _QUOTE:
        nxt = _at(text, pos + 1)
        if nxt == "":
            return _QUOTE, pos + 1, False
        if (
            nxt in quoteable
            or (flags & ExpandFlags.TILDE and nxt == "~")
            or (flags & ExpandFlags.DOLLAR and nxt == "$")
        ):
            return nxt, pos + 2, False
        return _QUOTE + nxt, pos + 2, False
    return ch, pos + 1, False


def expand(src: str, flags: int) -> str:
    """Expand ``~/``, ``~user``, ``$VAR`` and ``${VAR}`` in ``src``.

    Tilde expansion happens only at the start of the text or after a
    separator character.
    """
    flags = ExpandFlags(flags)
    current = flags
    pieces: list[str] = []
    pos = 0
    while pos < len(src):
        piece, pos, _ = parse_expansion(src, pos, current, _QUOTE)
        pieces.append(piece)
        if _is_separator(src[pos - 1]):
            current = flags
        else:
            current = flags & ~ExpandFlags.TILDE
    return "".join(pieces)


def _lower(ch: str) -> str:
    return ch.lower() if "A" <= ch <= "Z" else ch


def _match(pat: str, p: int, plen: int, subj: str, s: int) -> bool:
    while plen > 0:
        c = _at(pat, p)
        if c == "?":
            sc = _at(subj, s)
            if sc == "/" or sc == "":
                return False
        elif c == "*":
            if plen == 1:
                return True
            i = max(len(subj) - s, 0)
            while i >= 0 and not _match(pat, p + 1, plen - 1, subj, s + i):
                i -= 1
            return i >= 0
        elif c == "}":
            return False
        elif c == "{":
            return _match_list(pat, p, plen, subj, s)
        elif c == "\\":
            if _at(pat, p + 1) in "*?{}":
                p += 1
                plen -= 1
                if _at(pat, p) != _at(subj, s):
                    return False
        else:
            if _lower(_at(subj, s)) != _lower(c):
                return False
        p += 1
        plen -= 1
        s += 1
    return _at(subj, s) == ""


def _match_list(pat: str, p: int, plen: int, subj: str, s0: int) -> bool:
    end, endlen = p, plen
    while endlen > 0 and _at(pat, end) != "}":
        if _at(pat, end) == "\\":
            end += 1
            endlen -= 1
        end += 1
        endlen -= 1

    if _at(pat, end) == "":
        # unterminated '{'
        return False

    s = s0
    end += 1
    endlen -= 1
    p += 1
    plen -= 1
    while True:
        c = _at(pat, p)
        if c == "":
            return False
        if c == ",":
            if _match(pat, end, endlen, subj, s):
                return True
            s = s0
            p += 1
            plen -= 1
            continue
        if c == "}":
            return _match(pat, end, endlen, subj, s)
        if c == "\\" and _at(pat, p + 1) in (",", "}", "{"):
            p += 1
            plen -= 1
        c = _at(pat, p)
        if c != "" and c == _at(subj, s):
            p += 1
            plen -= 1
            s += 1
        else:
            # skip to the next unescaped ',' or '}'
            s = s0
            while _at(pat, p) not in (",", "}", ""):
                if _at(pat, p) == "\\":
                    p += 1
                    plen -= 1
                p += 1
                plen -= 1
            if _at(pat, p) == ",":
                p += 1
                plen -= 1


def wildmatch(pattern: str, subject: str) -> bool:
    """Match ``subject`` against a comma separated list of patterns.

    ``*`` matches any sequence, ``?`` any single character except ``/``,
    ``{foo,bar}`` matches ``foo`` or ``bar``; ``\\`` escapes ``*?{}``.
    Plain characters compare case-insensitively. An empty pattern matches
    only an empty subject.
    """
    count = 0
    start = 0
    n = len(pattern)
    while start < n:
        braces = 0
        end = start
        while end < n and (
            pattern[end] != ","
            or braces
            or (end > 0 and pattern[end - 1] == "\\")
        ):
            if pattern[end] == "{":
                braces += 1
            elif pattern[end] == "}":
                braces -= 1
            end += 1
        # a lone comma is ignored
        if _at(pattern, start) != _at(pattern, end):
            if _match(pattern, start, end - start, subject, 0):
                return True
        start = end + 1 if _at(pattern, end) == "," else end
        count += 1

    if not count:
        return subject == ""
    return False


_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def casefind(haystack: str, needle: str) -> int:
    """Index of the first ASCII case-insensitive occurrence, or -1."""
    return haystack.translate(_ASCII_UPPER).find(needle.translate(_ASCII_UPPER))


def str_replace(search: str, replace: str, string: str | None) -> str | None:
    """Replace every occurrence of ``search`` in ``string``."""
    if string is None:
        return None
    if not search:
        raise ValueError("search string must not be empty")
    return string.replace(search, replace)


_ESCAPES = {
    "\n": "\\n",
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\r": "\\r",
    "\t": "\\t",
}


def strescape(source: str, exceptions: str | None) -> str:
    """Backslash-escape special characters, leaving other text untouched.

    If ``exceptions`` is given, only characters contained in it are kept.
    """
    return "".join(
        _ESCAPES.get(ch, ch)
        for ch in source
        if exceptions is None or ch in exceptions
    )


def string_to_timespan(text: str) -> int:
    """Microseconds described by a string like ``1y5dh``.

    Units are y, w, d, h, m and s; a unit without a number counts once.
    """
    total = 0
    multiplier = 0
    has_multiplier = False
    for ch in text:
        if _is_digit(ch):
            multiplier = multiplier * 10 + int(ch)
            has_multiplier = True
        else:
            total += _TIME_UNITS.get(ch, 0) * (multiplier if has_multiplier else 1)
            multiplier = 0
            has_multiplier = False
    return total


def sanitize_filename(filename: str) -> str:
    """Replace directory separators by underscores."""
    return filename.replace("/", "_")


def sanitize_uri(uri: str | None) -> str | None:
    """Remove a password from the user info of ``uri``."""
    if uri is None:
        return None
    if "@" not in uri:
        return uri
    try:
        parts = urlsplit(uri)
        password = parts.password
    except ValueError:
        return uri
    if password is None:
        return uri
    netloc = parts.netloc
    userinfo, _, hostport = netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return uri.replace(netloc, f"{user}@{hostport}", 1)