import pytest

from vimbrowse.keyparse import NormalParser, Phase, command_for

REGISTERS = "\"abcdefghijklmnopqrstuvwxyz:%/;"


def feed(parser, keys):
    results = [parser.keypress(k) for k in keys]
    return results[:-1], results[-1]


@pytest.fixture
def parser():
    return NormalParser(REGISTERS)


def test_single_key_completes(parser):
    pending, info = feed(parser, "j")
    assert info.key == "j"
    assert info.count == 0
    assert info.command == command_for("j")
    assert info.phase is Phase.COMPLETE


def test_count_is_accumulated(parser):
    pending, info = feed(parser, "12j")
    assert pending == [None, None]
    assert info.count == 12
    assert info.key == "j"


def test_zero_without_count_is_command(parser):
    _, info = feed(parser, "0")
    assert info.key == "0"
    assert info.command == command_for("0")


def test_zero_after_count_is_digit(parser):
    assert parser.keypress("1") is None
    assert parser.keypress("0") is None
    info = parser.keypress("k")
    assert info.count == 10


def test_two_key_command(parser):
    pending, info = feed(parser, "gg")
    assert pending == [None]
    assert (info.key, info.key2) == ("g", "g")


def test_g_semicolon_needs_third_key(parser):
    pending, info = feed(parser, "g;f")
    assert pending == [None, None]
    assert (info.key, info.key2, info.key3) == ("g", ";", "f")


def test_register_prefix(parser):
    pending, info = feed(parser, '"ay')
    assert pending == [None, None]
    assert info.reg == "a"
    assert info.key == "y"


def test_invalid_register_completes_without_command(parser):
    _, info = feed(parser, '"!')
    assert info.key == ""
    assert info.command is None


def test_nomap_while_waiting(parser):
    assert parser.nomap is False
    parser.keypress(";")
    assert parser.nomap is True
    parser.keypress("o")
    assert parser.nomap is False


def test_state_resets_after_completion(parser):
    feed(parser, "5zi")
    _, info = feed(parser, "j")
    assert info.count == 0
    assert info.key2 == ""


def test_reset(parser):
    parser.keypress("3")
    parser.keypress("g")
    parser.reset()
    _, info = feed(parser, "k")
    assert info.count == 0
    assert info.key == "k"


def test_int_keys_accepted(parser):
    info = parser.keypress(0x0F)
    assert info.key == "\x0f"
    assert info.command == command_for("\x0f")


def test_unbound_key_has_no_command(parser):
    _, info = feed(parser, "q")
    assert info.command is None


def test_command_table_groups():
    assert command_for("j") == command_for("k") == command_for("G")
    assert command_for("n") == command_for("N")
    assert command_for("y") == command_for("Y")
    assert command_for("j") != command_for("n")
    assert command_for("\x00") is None
    assert command_for("x") is None