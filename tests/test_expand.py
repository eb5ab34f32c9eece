import pytest

from minish.expand import expand_exit_status, expand_variables


def test_plain_text_unchanged():
    line = "no variables here"
    assert expand_variables(line, 0, {}) == line


def test_variable_from_env():
    assert expand_variables("$HOME", 0, {"HOME": "/home/someone"}) == "/home/someone"


def test_variable_inside_text():
    env = {"USER_1b": "bob"}
    assert expand_variables("hi $USER_1b!", 0, env) == "hi bob!"


def test_unset_variable_is_empty():
    assert expand_variables("a$MISSINGb", 0, {}) == "a"


def test_exit_status():
    assert expand_variables("$?", 7, {}) == "7"


def test_exit_status_repeated():
    assert expand_variables("$?$?", 3, {}) == expand_exit_status(3) * 2


def test_exit_status_stops_name():
    env = {"X": "x"}
    assert expand_variables("$?X", 5, env) == expand_exit_status(5) + "X"


@pytest.mark.parametrize("line", ["$", "$1", "$$", "cost: $ 5", "$-"])
def test_lone_dollar_kept(line):
    assert expand_variables(line, 0, {}) == line


def test_name_stops_at_non_identifier():
    env = {"A": "1"}
    assert expand_variables("$A-$A", 0, env) == "1-1"


def test_no_recursive_expansion():
    env = {"A": "$B", "B": "nope"}
    assert expand_variables("$A", 0, env) == "$B"


def test_default_env_is_process_environment(monkeypatch):
    monkeypatch.setenv("MINISH_TEST_VAR", "value")
    assert expand_variables("<$MINISH_TEST_VAR>") == "<value>"


def test_expand_exit_status_negative():
    assert expand_exit_status(-1) == "-1"


def test_expand_exit_status_roundtrip():
    for status in (0, 1, 127, 130, 255):
        assert int(expand_exit_status(status)) == status