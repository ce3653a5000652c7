"""File helpers: path building, atomic writes, line files and completion."""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable, Iterable, Iterator
from typing import IO, Any, TypeVar

from .textutil import ExpandFlags, expand

try:
    import fcntl
except ImportError:  # pragma: no cover - platforms without flock
    fcntl = None

__all__ = [
    "build_path",
    "create_dir_if_not_exists",
    "create_tmp_file",
    "file_append",
    "file_prepend",
    "file_prepend_line",
    "file_pop_line",
    "get_file_contents",
    "file_set_content",
    "get_lines",
    "unique_items",
    "fill_completion",
    "filename_completion",
    "config_dir",
    "data_dir",
    "cache_dir",
]

PROJECT = "vimb"
_EXPAND = ExpandFlags.TILDE | ExpandFlags.DOLLAR

T = TypeVar("T")


@contextlib.contextmanager
def _locked(handle: IO[Any]) -> Iterator[IO[Any]]:
    """Hold an exclusive advisory lock on an open file."""
    if fcntl is not None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    try:
        yield handle
    finally:
        handle.flush()
        if fcntl is not None:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def create_dir_if_not_exists(dirpath: str) -> None:
    """Create ``dirpath`` and its parents; raise OSError if that fails."""
    os.makedirs(dirpath or os.sep, mode=0o755, exist_ok=True)


def build_path(path: str, directory: str | None) -> str:
    """Absolute path for ``path``, relative to ``directory`` if given.

    ``~`` and ``$VAR`` are expanded in both. Without a usable directory a
    relative path is taken relative to the current directory. The directory
    part of the result is created if it does not exist.
    """
    full_path: str | None = None
    expanded = expand(path, _EXPAND)
    if expanded.startswith("/"):
        full_path = expanded
    elif directory:
        full_path = os.path.join(expand(directory, _EXPAND), expanded)

    if full_path is None:
        full_path = os.path.join(os.getcwd(), path)

    parent, sep, _ = full_path.rpartition("/")
    if sep:
        create_dir_if_not_exists(parent)
    return full_path


def create_tmp_file(content: str | None) -> str:
    """Create a temporary file holding ``content`` and return its path."""
    fd, name = tempfile.mkstemp(prefix=f"{PROJECT}-")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            if content is not None:
                handle.write(content)
    except OSError:
        with contextlib.suppress(OSError):
            os.unlink(name)
        raise
    return name


def file_append(path: str, text: str) -> None:
    """Append ``text`` to the file at ``path`` under an exclusive lock."""
    with open(path, "a+", encoding="utf-8", newline="") as handle:
        with _locked(handle):
            handle.write(text)


def get_file_contents(path: str) -> str:
    """Whole content of the file at ``path``."""
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def file_prepend(path: str, text: str) -> None:
    """Write ``text`` in front of the current content of ``path``."""
    try:
        previous = get_file_contents(path)
    except FileNotFoundError:
        previous = ""
    with open(path, "w", encoding="utf-8", newline="") as handle:
        with _locked(handle):
            handle.write(text)
            handle.write(previous)


def get_lines(path: str | None) -> list[str] | None:
    """Content of ``path`` split at newlines, or None if it can't be read."""
    if path is None:
        return None
    try:
        content = get_file_contents(path)
    except (OSError, UnicodeDecodeError):
        return None
    return content.split("\n") if content else []


def file_set_content(path: str, contents: str) -> None:
    """Atomically replace the content of ``path``.

    The permissions of an existing file are kept; a new file gets 0600.
    """
    try:
        mode = os.stat(path).st_mode & 0o7777
    except OSError:
        mode = 0o600

    directory = os.path.dirname(path) or "."
    fd, tmp_name = tempfile.mkstemp(
        prefix=os.path.basename(path) + ".", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(contents)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def file_prepend_line(path: str, line: str, max_lines: int) -> None:
    """Put ``line`` first in the file, keeping at most ``max_lines`` lines.

    A ``max_lines`` of 0 keeps all lines.
    """
    parts = [line + "\n"]
    existing = get_lines(path)
    if existing:
        kept = existing[:-1]
        if max_lines > 0:
            kept = kept[: max_lines - 1]
        parts.extend(f"{old}\n" for old in kept)
    file_set_content(path, "".join(parts))


def file_pop_line(path: str | None) -> tuple[str | None, int]:
    """Remove the first line of the file and return it.

    Returns the line (None if there was none) and the number of lines that
    remain in the file.
    """
    lines = get_lines(path)
    if not lines or path is None:
        return None, 0
    first = lines[0]
    file_set_content(path, "\n".join(lines[1:]))
    return first, len(lines) - 2


def unique_items(
    lines: Iterable[str] | None,
    func: Callable[[str, str | None], T | None],
    max_items: int,
) -> list[T]:
    """Build items from lines, keeping only the latest line per key.

    A line's key is everything up to the first tab; the rest is passed as
    data (None without a tab). Later lines win over earlier ones, the
    result keeps file order. ``max_items`` of 0 means no limit.
    """
    if lines is None:
        return []
    seen: set[str] = set()
    items: list[T] = []
    for raw in reversed(list(lines)):
        line = raw.strip()
        if not line:
            continue
        key, tab, rest = line.partition("\t")
        data = rest if tab else None
        if key in seen:
            continue
        item = func(key, data)
        if item:
            seen.add(key)
            items.append(item)
            if max_items and len(seen) >= max_items:
                break
    items.reverse()
    return items


def fill_completion(candidates: Iterable[str], prefix: str | None) -> list[str]:
    """Candidates starting with ``prefix``; all of them if it is empty."""
    if not prefix:
        return list(candidates)
    return [value for value in candidates if value.startswith(prefix)]


def filename_completion(text: str) -> list[str]:
    """Paths completing ``text``; directories end with a slash."""
    dirname, sep, basename = text.rpartition("/")
    input_dirname = dirname + sep
    real_dirname = expand(input_dirname or ".", _EXPAND)
    try:
        names = sorted(os.listdir(real_dirname))
    except OSError:
        return []
    results = []
    for name in names:
        if not name.startswith(basename):
            continue
        suffix = "/" if os.path.isdir(os.path.join(real_dirname, name)) else ""
        results.append(f"{input_dirname}{name}{suffix}")
    return results


def _user_dir(env: str, fallback: tuple[str, ...], profile: str | None) -> str:
    base = os.environ.get(env) or os.path.join(os.path.expanduser("~"), *fallback)
    parts = [base, PROJECT]
    if profile:
        parts.append(profile)
    path = os.path.join(*parts)
    if not os.path.isdir(path):
        with contextlib.suppress(OSError):
            os.makedirs(path, mode=0o755, exist_ok=True)
    return path


def config_dir(profile: str | None) -> str:
    """Configuration directory for ``profile``, created if missing."""
    return _user_dir("XDG_CONFIG_HOME", (".config",), profile)


def data_dir(profile: str | None) -> str:
    """Data directory for ``profile``, created if missing."""
    return _user_dir("XDG_DATA_HOME", (".local", "share"), profile)


def cache_dir(profile: str | None) -> str:
    """Cache directory for ``profile``, created if missing."""
    return _user_dir("XDG_CACHE_HOME", (".cache",), profile)