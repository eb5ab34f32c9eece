import pytest

from minish.commands import Command, Redirection, debug_print_cmd, format_commands
from minish.tokens import TokenType


def test_add_argument_keeps_order():
    cmd = Command()
    for arg in ("echo", "a", "b"):
        cmd.add_argument(arg)
    assert cmd.args == ["echo", "a", "b"]


def test_add_argument_rejects_none():
    cmd = Command()
    with pytest.raises(TypeError):
        cmd.add_argument(None)
    assert cmd.args == []


def test_commands_do_not_share_lists():
    first, second = Command(), Command()
    first.add_argument("x")
    assert second.args == []
    assert second.redirections == []


def test_redirection_defaults_to_expand():
    redir = Redirection(TokenType.HEREDOC, "EOF")
    assert redir.expand is True
    assert redir.file == "EOF"


def test_format_empty():
    assert format_commands([]) == "DEBUG: Command structure is NULL\n"
    assert format_commands(None) == "DEBUG: Command structure is NULL\n"


def test_format_frame():
    out = format_commands([Command(args=["ls"])])
    assert out.startswith("\033[1;93m=== DEBUG: Command Structure ===\n")
    assert out.endswith("=== End DEBUG ===\033[0m\n\n")


def test_format_single_command():
    out = format_commands([Command(name="echo", args=["echo", "hi"])])
    lines = out.splitlines()
    assert "  Command 1:" in lines
    assert "    Name: echo" in lines
    assert "    Args: [echo] [hi] " in lines
    assert "    Redirections: none" in lines


def test_format_missing_fields():
    lines = format_commands([Command()]).splitlines()
    assert "    Name: (null)" in lines
    assert "    Args: (null)" in lines


def test_format_redirections():
    cmd = Command(
        args=["cat"],
        redirections=[
            Redirection(TokenType.REDIRECT_IN, "in.txt"),
            Redirection(TokenType.REDIRECT_APPEND, "log"),
            Redirection(TokenType.PIPE, "odd"),
        ],
    )
    lines = format_commands([cmd]).splitlines()
    assert "    Redirections:" in lines
    assert "      Redirection: < in.txt" in lines
    assert "      Redirection: >> log" in lines
    assert "      Redirection: ? odd" in lines


def test_pipe_markers_between_commands():
    cmds = [Command(args=["a"]), Command(args=["b"]), Command(args=["c"])]
    out = format_commands(cmds)
    assert out.count("    -> PIPE to next command\n") == len(cmds) - 1
    assert "  Command 3:" in out.splitlines()


def test_debug_print_matches_format(capsys):
    cmds = [Command(name="ls", args=["ls", "-l"])]
    debug_print_cmd(cmds)
    assert capsys.readouterr().out == format_commands(cmds)