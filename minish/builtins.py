"""Commands that the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence

_LONG_MAX = 2**63 - 1
_ATOI_SPACES = " \t\n\v\f\r"
_ENV_HIDDEN = ("COLUMNS=", "LINES=")


class ShellExit(SystemExit):
    """Raised when the shell is asked to terminate with a given status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _err(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def _stdin_is_tty() -> bool:
    stream = sys.stdin
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _atoi(text: str) -> int:
    """Parse a leading decimal integer the way the C shell did, overflow included."""
    rest = text.lstrip(_ATOI_SPACES)
    sign = 1
    if rest[:1] == "-":
        sign = -1
        rest = rest[1:]
    elif rest[:1] == "+":
        rest = rest[1:]
    value = 0
    for ch in rest:
        if not "0" <= ch <= "9":
            break
        digit = ord(ch) - ord("0")
        if value - digit > _LONG_MAX // 10:
            return -1 if sign == 1 else 0
        value = value * 10 + digit
    return value * sign


def _is_number(text: str) -> bool:
    body = text[1:] if text[:1] in ("+", "-") else text
    return bool(body) and all("0" <= ch <= "9" for ch in body)


def builtin_echo(args: Sequence[str]) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    words = list(args[1:])
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    _out(" ".join(words) + ("\n" if newline else ""))
    return 0


def builtin_cd(args: Sequence[str]) -> int:
    """Change the working directory, to ``$HOME`` when no argument is given."""
    if len(args) < 2:
        path = os.environ.get("HOME")
        if path is None:
            _err("cd: HOME not set\n")
            return 1
    elif len(args) > 2:
        _err("cd: too many arguments\n")
        return 1
    else:
        path = args[1]
    try:
        os.chdir(path)
    except OSError as exc:
        _err(f"cd: {exc.strerror}\n")
        return 1
    return 0


def builtin_pwd(args: Sequence[str]) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _err(f"pwd: {exc.strerror}\n")
        return 1
    _out(cwd + "\n")
    return 0


def _print_exported_vars() -> None:
    _out("".join(f'declare -x {key}="{value}"\n' for key, value in os.environ.items()))


def _setenv(key: str, value: str) -> int:
    try:
        os.environ[key] = value
    except (ValueError, OSError) as exc:
        _err(f"export: {exc}\n")
        return 1
    return 0


def print_export_error(arg: str) -> int:
    """Report an invalid identifier given to ``export``; returns 1."""
    _err(f"minishell: export: `{arg}': not a valid identifier\n")
    return 1


def is_valid_identifier(arg: str | None) -> bool:
    """Tell whether the part of ``arg`` before any ``=`` is a variable name."""
    if not arg:
        return False
    first = arg[0]
    if not (first.isascii() and first.isalpha()) and first != "_":
        return False
    name = arg.split("=", 1)[0]
    return all((ch.isascii() and ch.isalnum()) or ch == "_" for ch in name[1:])


def set_env_var(arg: str) -> int:
    """Apply one ``export`` argument: ``NAME`` or ``NAME=value``."""
    if not is_valid_identifier(arg):
        return print_export_error(arg)
    key, sep, value = arg.partition("=")
    if not sep:
        return _setenv(arg, "")
    return _setenv(key, value)


def builtin_export(args: Sequence[str]) -> int:
    """Set environment variables, or list them all when given none."""
    if len(args) < 2:
        _print_exported_vars()
        return 0
    status = 0
    for arg in args[1:]:
        if set_env_var(arg) != 0:
            status = 1
    return status


def builtin_unset(args: Sequence[str]) -> int:
    """Remove environment variables."""
    status = 0
    for name in args[1:]:
        if not name or "=" in name:
            _err("unset: Invalid argument\n")
            status = 1
            continue
        os.environ.pop(name, None)
    return status


def builtin_env(args: Sequence[str]) -> int:
    """Print the environment, leaving out ``COLUMNS`` and ``LINES``."""
    lines = (f"{key}={value}" for key, value in os.environ.items())
    _out("".join(f"{line}\n" for line in lines if not line.startswith(_ENV_HIDDEN)))
    return 0


def builtin_exit(args: Sequence[str]) -> int:
    """Leave the shell by raising :class:`ShellExit`.

    Returns 1 without leaving when given more than one numeric argument.
    """
    if _stdin_is_tty():
        _out("exit\n")
    if len(args) < 2:
        raise ShellExit(0)
    if not _is_number(args[1]):
        _err(f"minishell: exit: {args[1]}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 2:
        _err("minishell: exit: too many arguments\n")
        return 1
    raise ShellExit(_atoi(args[1]) & 0xFF)


_BUILTINS: tuple[tuple[str, Callable[[Sequence[str]], int]], ...] = (
    ("echo", builtin_echo),
    ("cd", builtin_cd),
    ("pwd", builtin_pwd),
    ("export", builtin_export),
    ("unset", builtin_unset),
    ("env", builtin_env),
    ("exit", builtin_exit),
)


def is_builtin(cmd: str | None) -> int:
    """Return the index of a builtin command name, or -1."""
    if cmd is None:
        return -1
    return next((index for index, (name, _) in enumerate(_BUILTINS) if name == cmd), -1)


def execute_builtin(index: int, args: Sequence[str]) -> int:
    """Run the builtin at ``index`` with ``args``; -1 for an unknown index."""
    if index == -1:
        return -1
    return _BUILTINS[index][1](args)