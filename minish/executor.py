"""Running parsed commands: redirections, here-documents, programs and pipelines."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import tempfile
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import ExitStack, contextmanager, redirect_stdout
from dataclasses import dataclass
from typing import BinaryIO, Union

from .builtins import ShellExit, execute_builtin, is_builtin
from .commands import Command, Redirection
from .expand import expand_variables
from .tokens import TokenType

ReadLine = Callable[[str], Union[str, None]]

_HEREDOC_PREFIX = "/tmp/heredoc_"
_HEREDOC_PROMPT = "> "


class _ShellState:
    """Status of the last pipeline, used for ``$?`` inside here-documents."""

    last_status: int = 0


_state = _ShellState()


@dataclass
class _Streams:
    stdin: BinaryIO | None = None
    stdout: BinaryIO | None = None


def _err(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def _flush_std() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError):
            pass


def _report(exc: OSError) -> None:
    if exc.filename is not None:
        _err(f"{exc.filename}: {exc.strerror}\n")
    else:
        _err(f"minishell: {exc.strerror or exc}\n")


def _read_heredoc_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _status_of(returncode: int) -> int:
    return 128 - returncode if returncode < 0 else returncode


def find_executable_in_path(cmd: str | None) -> str | None:
    """Locate ``cmd`` on ``$PATH``; a name containing ``/`` is returned as is."""
    if cmd is None or "/" in cmd:
        return cmd
    path_env = os.environ.get("PATH")
    if path_env is None:
        return None
    return search_in_paths([part for part in path_env.split(":") if part], cmd)


def search_in_paths(paths: Iterable[str], cmd: str) -> str | None:
    """Return the first ``dir/cmd`` that is executable, or None."""
    for directory in paths:
        full_path = f"{directory}/{cmd}"
        if os.access(full_path, os.X_OK):
            return full_path
    return None


def create_tmpfile(count: int) -> str:
    """Return the path of the temporary file for here-document number ``count``."""
    return f"{_HEREDOC_PREFIX}{count}"


def _heredoc_lines(delimiter: str, read_line: ReadLine) -> Iterator[str]:
    while True:
        line = read_line(_HEREDOC_PROMPT)
        if line is None or line == delimiter:
            return
        yield line


def handle_heredoc(
    delimiter: str,
    count: int,
    expand: bool = True,
    exit_status: int = 0,
    read_line: ReadLine | None = None,
) -> BinaryIO:
    """Read a here-document up to ``delimiter`` and return it as an open file.

    Lines are expanded when ``expand`` is true. The backing temporary file is
    removed before returning; the returned file is positioned at its start.
    """
    read = read_line or _read_heredoc_line
    path = create_tmpfile(count)
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as out:
        for line in _heredoc_lines(delimiter, read):
            out.write((expand_variables(line, exit_status) if expand else line) + "\n")
    try:
        return open(path, "rb")
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass


def consume_heredocs(
    redirections: Iterable[Redirection],
    exit_status: int = 0,
    read_line: ReadLine | None = None,
) -> int:
    """Read and discard every here-document of a command; return how many."""
    count = 0
    for redir in redirections:
        if redir.type is TokenType.HEREDOC:
            handle_heredoc(redir.file, count, redir.expand, exit_status, read_line).close()
            count += 1
    return count


def _open_output(file: str, append: bool) -> BinaryIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = os.open(file, flags, 0o644)
    return os.fdopen(fd, "ab" if append else "wb")


def _open_redirections(redirections: Sequence[Redirection], stack: ExitStack) -> _Streams:
    streams = _Streams()
    for count, redir in enumerate(redirections):
        if redir.type is TokenType.REDIRECT_IN:
            streams.stdin = stack.enter_context(open(redir.file, "rb"))
        elif redir.type in (TokenType.REDIRECT_OUT, TokenType.REDIRECT_APPEND):
            append = redir.type is TokenType.REDIRECT_APPEND
            streams.stdout = stack.enter_context(_open_output(redir.file, append))
        elif redir.type is TokenType.HEREDOC:
            streams.stdin = stack.enter_context(
                handle_heredoc(redir.file, count, redir.expand, _state.last_status)
            )
    return streams


@contextmanager
def _subshell() -> Iterator[None]:
    """Undo working-directory and environment changes made inside the block."""
    cwd = os.getcwd()
    saved = dict(os.environ)
    try:
        yield
    finally:
        try:
            os.chdir(cwd)
        except OSError:
            pass
        os.environ.clear()
        os.environ.update(saved)


@contextmanager
def _stdout_to(out: BinaryIO | None) -> Iterator[None]:
    if out is None:
        yield
        return
    wrapper = io.TextIOWrapper(out, encoding="utf-8", write_through=True)
    try:
        with redirect_stdout(wrapper):
            yield
    finally:
        wrapper.flush()
        wrapper.detach()
        out.flush()


def _run_builtin_isolated(index: int, args: Sequence[str], out: BinaryIO | None) -> int:
    """Run a builtin as if in a child process: its side effects do not persist."""
    with _subshell(), _stdout_to(out):
        try:
            return execute_builtin(index, args)
        except ShellExit as exc:
            return int(exc.code or 0)


def _wait(proc: subprocess.Popen) -> int:
    return _status_of(proc.wait())


def _spawn(args: Sequence[str], path: str, stdin=None, stdout=None) -> subprocess.Popen | None:
    _flush_std()
    try:
        return subprocess.Popen(list(args), executable=path, stdin=stdin, stdout=stdout)
    except OSError as exc:
        _err(f"execve: {exc.strerror}\n")
        return None


def _not_found(name: str) -> int:
    _err(f"minishell: {name}: command not found\n")
    return 127


def execute_external_command(args: Sequence[str]) -> int:
    """Run a program found on ``$PATH`` and return its exit status."""
    if not args:
        return 127
    path = find_executable_in_path(args[0])
    if path is None:
        return _not_found(args[0])
    proc = _spawn(args, path)
    if proc is None:
        return 127
    return _wait(proc)


def _execute_with_redirections(cmd: Command) -> int:
    index = is_builtin(cmd.args[0])
    if index != -1:
        with ExitStack() as stack:
            try:
                streams = _open_redirections(cmd.redirections, stack)
            except OSError as exc:
                _report(exc)
                return 1
            return _run_builtin_isolated(index, cmd.args, streams.stdout)
    path = find_executable_in_path(cmd.args[0])
    if path is None:
        return _not_found(cmd.args[0])
    with ExitStack() as stack:
        try:
            streams = _open_redirections(cmd.redirections, stack)
        except OSError as exc:
            _report(exc)
            return 1
        proc = _spawn(cmd.args, path, stdin=streams.stdin, stdout=streams.stdout)
    if proc is None:
        return 127
    return _wait(proc)


def execute_command(cmd: Command | None) -> int:
    """Run a single command without pipes and return its exit status."""
    if cmd is None or not cmd.args:
        return 0
    if cmd.redirections:
        return _execute_with_redirections(cmd)
    index = is_builtin(cmd.args[0])
    if index != -1:
        return execute_builtin(index, cmd.args)
    return execute_external_command(cmd.args)


def _empty_input(is_last: bool) -> BinaryIO | None:
    return None if is_last else open(os.devnull, "rb")


def _run_stage(
    cmd: Command, feed: BinaryIO | None, is_last: bool
) -> tuple[int | subprocess.Popen, BinaryIO | None]:
    """Start one pipeline stage; return its status or process, and the next input."""
    with ExitStack() as stack:
        if feed is not None:
            stack.callback(feed.close)
        try:
            streams = _open_redirections(cmd.redirections, stack)
        except OSError as exc:
            _report(exc)
            return 1, _empty_input(is_last)
        if not cmd.args:
            return 127, _empty_input(is_last)
        index = is_builtin(cmd.args[0])
        if index != -1:
            if streams.stdout is not None or is_last:
                status = _run_builtin_isolated(index, cmd.args, streams.stdout)
                return status, _empty_input(is_last)
            buffer = tempfile.TemporaryFile()
            status = _run_builtin_isolated(index, cmd.args, buffer)
            buffer.seek(0)
            return status, buffer
        path = find_executable_in_path(cmd.args[0])
        if path is None:
            return _not_found(cmd.args[0]), _empty_input(is_last)
        stdin = streams.stdin if streams.stdin is not None else feed
        if streams.stdout is not None:
            stdout = streams.stdout
        else:
            stdout = None if is_last else subprocess.PIPE
        proc = _spawn(cmd.args, path, stdin=stdin, stdout=stdout)
        if proc is None:
            return 127, _empty_input(is_last)
        if stdout is subprocess.PIPE:
            return proc, proc.stdout
        return proc, _empty_input(is_last)


def _run_pipeline(commands: Sequence[Command]) -> int:
    last = len(commands) - 1
    results: list[int | subprocess.Popen] = []
    feed: BinaryIO | None = None
    try:
        for position, cmd in enumerate(commands):
            result, feed = _run_stage(cmd, feed, position == last)
            results.append(result)
    finally:
        if feed is not None:
            feed.close()
        statuses = [_wait(r) if isinstance(r, subprocess.Popen) else r for r in results]
    return statuses[-1] if statuses else 0


def execute_pipeline(cmds: Iterable[Command]) -> int:
    """Run commands connected by pipes; return the last command's status."""
    commands = list(cmds)
    if len(commands) == 1:
        status = execute_command(commands[0])
    else:
        status = _run_pipeline(commands)
    _state.last_status = status
    return status