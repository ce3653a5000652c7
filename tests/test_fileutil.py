import os
import stat

import pytest

from vimbrowse import fileutil


def _read(path):
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write(path, text):
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def test_build_path_absolute_creates_parent(tmp_path):
    target = tmp_path / "a" / "b.txt"
    result = fileutil.build_path(str(target), None)
    assert result == str(target)
    assert (tmp_path / "a").is_dir()


def test_build_path_relative_to_directory(tmp_path):
    result = fileutil.build_path("f.txt", str(tmp_path / "sub"))
    assert result == os.path.join(str(tmp_path / "sub"), "f.txt")
    assert (tmp_path / "sub").is_dir()


def test_build_path_expands_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("VBTESTDIR", str(tmp_path))
    result = fileutil.build_path("$VBTESTDIR/x/y", None)
    assert result == str(tmp_path / "x" / "y")
    assert (tmp_path / "x").is_dir()


def test_build_path_uses_current_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = fileutil.build_path("q/r", None)
    assert result == os.path.join(os.getcwd(), "q/r")
    assert os.path.isdir(os.path.join(os.getcwd(), "q"))


def test_build_path_fails_when_file_blocks_directory(tmp_path):
    (tmp_path / "blocker").write_text("x")
    with pytest.raises(OSError):
        fileutil.build_path(str(tmp_path / "blocker" / "f"), None)


def test_create_dir_if_not_exists(tmp_path):
    target = tmp_path / "one" / "two"
    fileutil.create_dir_if_not_exists(str(target))
    fileutil.create_dir_if_not_exists(str(target))
    assert target.is_dir()


def test_create_tmp_file_round_trip():
    path = fileutil.create_tmp_file("hello\nworld")
    try:
        assert _read(path) == "hello\nworld"
        assert os.path.basename(path).startswith("vimb-")
    finally:
        os.unlink(path)


def test_create_tmp_file_without_content():
    path = fileutil.create_tmp_file(None)
    try:
        assert _read(path) == ""
    finally:
        os.unlink(path)


def test_file_append(tmp_path):
    path = str(tmp_path / "log")
    fileutil.file_append(path, "first\n")
    fileutil.file_append(path, "second\n")
    assert _read(path) == "first\nsecond\n"


def test_file_prepend(tmp_path):
    path = str(tmp_path / "log")
    _write(path, "tail\n")
    fileutil.file_prepend(path, "head\n")
    assert _read(path) == "head\ntail\n"


def test_file_prepend_to_missing_file(tmp_path):
    path = str(tmp_path / "new")
    fileutil.file_prepend(path, "only\n")
    assert _read(path) == "only\n"


def test_file_prepend_line_limits_lines(tmp_path):
    path = str(tmp_path / "closed")
    _write(path, "a\nb\nc\n")
    fileutil.file_prepend_line(path, "z", 3)
    assert _read(path) == "z\na\nb\n"


def test_file_prepend_line_zero_is_unlimited(tmp_path):
    path = str(tmp_path / "closed")
    _write(path, "a\nb\nc\n")
    fileutil.file_prepend_line(path, "z", 0)
    assert _read(path) == "z\na\nb\nc\n"


def test_file_prepend_line_missing_file(tmp_path):
    path = str(tmp_path / "closed")
    fileutil.file_prepend_line(path, "z", 5)
    assert _read(path) == "z\n"


def test_file_pop_line(tmp_path):
    path = str(tmp_path / "closed")
    _write(path, "a\nb\n")
    assert fileutil.file_pop_line(path) == ("a", 1)
    assert _read(path) == "b\n"
    assert fileutil.file_pop_line(path) == ("b", 0)
    assert fileutil.file_pop_line(path) == (None, 0)


def test_file_pop_line_missing(tmp_path):
    assert fileutil.file_pop_line(str(tmp_path / "none")) == (None, 0)
    assert fileutil.file_pop_line(None) == (None, 0)


def test_prepend_then_pop_round_trip(tmp_path):
    path = str(tmp_path / "closed")
    fileutil.file_prepend_line(path, "one", 10)
    fileutil.file_prepend_line(path, "two", 10)
    assert fileutil.file_pop_line(path)[0] == "two"
    assert fileutil.file_pop_line(path)[0] == "one"


def test_get_file_contents_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileutil.get_file_contents(str(tmp_path / "none"))


def test_file_set_content_keeps_mode(tmp_path):
    path = tmp_path / "data"
    path.write_text("old")
    os.chmod(path, 0o640)
    fileutil.file_set_content(str(path), "new content")
    assert _read(path) == "new content"
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640
    assert os.listdir(tmp_path) == ["data"]


def test_file_set_content_new_file_mode(tmp_path):
    path = tmp_path / "fresh"
    fileutil.file_set_content(str(path), "x")
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_get_lines(tmp_path):
    path = tmp_path / "lines"
    _write(path, "a\nb\n")
    assert fileutil.get_lines(str(path)) == ["a", "b", ""]
    _write(path, "")
    assert fileutil.get_lines(str(path)) == []
    assert fileutil.get_lines(str(tmp_path / "none")) is None


def test_unique_items_latest_wins():
    lines = ["a\t1", "b\t2", "a\t3", "", "  "]
    result = fileutil.unique_items(lines, lambda k, d: (k, d), 0)
    assert result == [("b", "2"), ("a", "3")]


def test_unique_items_max_items():
    lines = ["a\t1", "b\t2", "c"]
    result = fileutil.unique_items(lines, lambda k, d: (k, d), 2)
    assert result == [("b", "2"), ("c", None)]


def test_unique_items_skips_rejected():
    lines = ["keep", "drop", "keep2"]
    result = fileutil.unique_items(
        lines, lambda k, d: None if k == "drop" else k, 0
    )
    assert result == ["keep", "keep2"]
    assert fileutil.unique_items(None, lambda k, d: k, 0) == []


def test_fill_completion():
    candidates = ["scripts", "scroll-step", "images"]
    assert fileutil.fill_completion(candidates, "scr") == ["scripts", "scroll-step"]
    assert fileutil.fill_completion(candidates, "") == candidates
    assert fileutil.fill_completion(candidates, None) == candidates
    assert fileutil.fill_completion(candidates, "zz") == []


def test_filename_completion(tmp_path):
    (tmp_path / "alpha").mkdir()
    (tmp_path / "alps.txt").write_text("")
    (tmp_path / "beta").write_text("")
    base = str(tmp_path) + "/"
    assert fileutil.filename_completion(base + "al") == [
        base + "alpha/",
        base + "alps.txt",
    ]


def test_filename_completion_relative(tmp_path, monkeypatch):
    (tmp_path / "docs").mkdir()
    monkeypatch.chdir(tmp_path)
    assert fileutil.filename_completion("do") == ["docs/"]


def test_filename_completion_bad_dir(tmp_path):
    assert fileutil.filename_completion(str(tmp_path / "none") + "/x") == []


def test_user_dirs(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    cfg = fileutil.config_dir("work")
    assert cfg == str(tmp_path / "cfg" / "vimb" / "work")
    assert os.path.isdir(cfg)
    assert fileutil.data_dir(None) == str(tmp_path / "data" / "vimb")
    assert os.path.isdir(fileutil.cache_dir("work"))