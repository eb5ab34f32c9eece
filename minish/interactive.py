"""Prompt reading and signal set-up for the interactive shell."""

from __future__ import annotations

import signal
import sys

from .builtins import ShellExit

try:
    import readline as _readline  # line editing and history for input()
except ImportError:
    _readline = None

PROMPT = "minishell$ "


def _stdin_is_tty() -> bool:
    stream = sys.stdin
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def reader(exit_status: int = 0) -> str:
    """Read one command line; on end of input leave with ``exit_status``."""
    interactive = _stdin_is_tty()
    try:
        return input(PROMPT if interactive else "")
    except EOFError:
        if interactive:
            sys.stdout.write("exit\n")
            sys.stdout.flush()
        raise ShellExit(exit_status) from None


def handle_sigint(sig, frame) -> None:
    """On Ctrl-C, move to a fresh line and show the prompt again."""
    sys.stdout.write("\n")
    sys.stdout.flush()
    if _readline is not None and _stdin_is_tty():
        _readline.redisplay()


def setup_sigint() -> None:
    """Install the Ctrl-C handler."""
    signal.signal(signal.SIGINT, handle_sigint)


def setup_sigquit() -> None:
    """Ignore the quit signal where the platform has one."""
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None:
        signal.signal(sigquit, signal.SIG_IGN)


def handle_signals() -> None:
    """Install the interactive signal handling."""
    setup_sigint()
    setup_sigquit()