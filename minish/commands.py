"""Parsed commands, their redirections, and a debug dump of them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .tokens import TokenType

_REDIRECTION_SYMBOLS = {
    TokenType.REDIRECT_OUT: ">",
    TokenType.REDIRECT_IN: "<",
    TokenType.REDIRECT_APPEND: ">>",
    TokenType.HEREDOC: "<<",
}


@dataclass
class Redirection:
    """A redirection of a command; ``expand`` applies to here-documents only."""

    type: TokenType
    file: str
    expand: bool = True


@dataclass
class Command:
    """One simple command of a pipeline."""

    name: str | None = None
    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    def add_argument(self, arg: str) -> None:
        """Append an argument to the command."""
        if not isinstance(arg, str):
            raise TypeError(f"argument must be a string, not {type(arg).__name__}")
        self.args.append(arg)


def _format_single(cmd: Command, number: int) -> list[str]:
    lines = [f"  Command {number}:\n", f"    Name: {cmd.name if cmd.name is not None else '(null)'}\n"]
    if cmd.args:
        lines.append("    Args: " + "".join(f"[{arg}] " for arg in cmd.args) + "\n")
    else:
        lines.append("    Args: (null)\n")
    if cmd.redirections:
        lines.append("    Redirections:\n")
        for redir in cmd.redirections:
            symbol = _REDIRECTION_SYMBOLS.get(redir.type, "?")
            lines.append(f"      Redirection: {symbol} {redir.file}\n")
    else:
        lines.append("    Redirections: none\n")
    return lines


def format_commands(cmds: Iterable[Command] | None) -> str:
    """Return a human-readable dump of a pipeline of commands."""
    commands = list(cmds) if cmds is not None else []
    if not commands:
        return "DEBUG: Command structure is NULL\n"
    parts = ["\033[1;93m=== DEBUG: Command Structure ===\n"]
    for number, cmd in enumerate(commands, start=1):
        parts.extend(_format_single(cmd, number))
        if number < len(commands):
            parts.append("    -> PIPE to next command\n")
    parts.append("=== End DEBUG ===\033[0m\n\n")
    return "".join(parts)


def debug_print_cmd(cmds: Iterable[Command] | None) -> None:
    """Print the debug dump of a pipeline to standard output."""
    print(format_commands(cmds), end="")