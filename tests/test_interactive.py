import io
import os
import signal

import pytest

from minish.builtins import ShellExit
from minish.interactive import (
    handle_sigint,
    handle_signals,
    reader,
    setup_sigint,
    setup_sigquit,
)


class _FakeTTY(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def restore_signals():
    saved_int = signal.getsignal(signal.SIGINT)
    saved_quit = signal.getsignal(signal.SIGQUIT)
    yield
    signal.signal(signal.SIGINT, saved_int)
    signal.signal(signal.SIGQUIT, saved_quit)


def test_reader_returns_line_without_prompt(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("echo hi\nnext\n"))
    assert reader(0) == "echo hi"
    assert capsys.readouterr().out == ""


def test_reader_shows_prompt_on_tty(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", _FakeTTY("ls -l\n"))
    assert reader(0) == "ls -l"
    assert capsys.readouterr().out == "minishell$ "


def test_reader_end_of_input_exits_with_status(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(ShellExit) as info:
        reader(3)
    assert info.value.code == 3
    assert capsys.readouterr().out == ""


def test_reader_end_of_input_on_tty_prints_exit(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", _FakeTTY(""))
    with pytest.raises(ShellExit) as info:
        reader(0)
    assert info.value.code == 0
    assert capsys.readouterr().out == "minishell$ exit\n"


def test_handle_sigint_writes_newline(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    handle_sigint(signal.SIGINT, None)
    assert capsys.readouterr().out == "\n"


def test_setup_sigint_handles_interrupt(restore_signals, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    setup_sigint()
    os.kill(os.getpid(), signal.SIGINT)
    assert capsys.readouterr().out == "\n"
    assert signal.getsignal(signal.SIGINT) is handle_sigint


def test_setup_sigquit_ignores_quit(restore_signals, capsys):
    setup_sigquit()
    os.kill(os.getpid(), signal.SIGQUIT)
    assert capsys.readouterr().out == ""
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN


def test_handle_signals_installs_both(restore_signals, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    handle_signals()
    os.kill(os.getpid(), signal.SIGQUIT)
    os.kill(os.getpid(), signal.SIGINT)
    assert capsys.readouterr().out == "\n"
    assert signal.getsignal(signal.SIGINT) is handle_sigint
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN