"""Search shortcuts: expand ``key query`` strings into URIs from templates."""

from __future__ import annotations

from urllib.parse import quote

from .fileutil import fill_completion

__all__ = ["Shortcuts"]

_SPACE_CHARS = " \t\n\v\f\r"
_QUOTES = "\"'"


def _escape(text: str) -> str:
    """Percent-encode all but unreserved characters, keeping non-ASCII text."""
    return "".join(ch if ord(ch) >= 0x80 else quote(ch, safe="") for ch in text)


def _max_placeholder(template: str) -> int:
    """Highest ``$N`` placeholder number in ``template``, or -1 if none."""
    result = -1
    i = 0
    length = len(template)
    while i < length:
        if template[i] == "$":
            i += 1
            if i >= length:
                break
            digit = template[i]
            if "0" <= digit <= "9":
                result = max(result, int(digit))
        i += 1
    return result


class Shortcuts:
    """A table of URI templates keyed by short names, with a default key."""

    def __init__(self) -> None:
        self._table: dict[str, str] = {}
        self._fallback: str | None = None

    def add(self, key: str, uri: str) -> None:
        """Add or replace the template for ``key``."""
        self._table[key] = uri

    def remove(self, key: str) -> bool:
        """Remove ``key``; return whether it existed."""
        return self._table.pop(key, None) is not None

    def set_default(self, key: str) -> None:
        """Use ``key`` when a request names no known shortcut.

        The key need not be defined yet.
        """
        self._fallback = key

    def _lookup(self, text: str) -> tuple[str, str] | None:
        key, space, rest = text.partition(" ")
        if space:
            template = self._table.get(key)
            if template is not None:
                return template, rest
        else:
            template = self._table.get(text)
            if template is not None:
                return template, ""
        if self._fallback is not None:
            template = self._table.get(self._fallback)
            if template is not None:
                return template, text
        return None

    def get_uri(self, text: str) -> str | None:
        """URI for ``text``, or None if no shortcut applies.

        With only ``$0`` in the template the whole query replaces it. With
        higher placeholders the query is split at whitespace, quotes group
        words, and the last placeholder takes the rest of the query.
        """
        found = self._lookup(text)
        if found is None:
            return None
        template, query = found

        max_num = _max_placeholder(template)
        if max_num == 0:
            return template.replace("$0", _escape(query))
        if max_num < 0:
            return template

        uri = template
        current = 0
        i = 0
        length = len(query)
        while i < length:
            ch = query[i]
            if ch in _QUOTES:
                end = query.find(ch, i + 1)
                if end == -1:
                    token = query[i + 1 :]
                    i = length
                else:
                    token = query[i + 1 : end]
                    i = end + 1
            elif ch in _SPACE_CHARS:
                i += 1
                continue
            elif current >= max_num:
                token = query[i:]
                i = length
            else:
                end = i
                while end < length and query[end] not in _SPACE_CHARS:
                    end += 1
                token = query[i:end]
                i = end

            if token:
                placeholder = "$" + chr(ord("0") + current)
                uri = uri.replace(placeholder, _escape(token))
            current += 1
        return uri

    def completions(self, prefix: str | None) -> list[str]:
        """Shortcut keys starting with ``prefix``; all keys if it is empty."""
        return fill_completion(self._table.keys(), prefix)