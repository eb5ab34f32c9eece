"""Expansion of ``$NAME`` and ``$?`` in a line of text."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

_DOLLAR = re.compile(r"\$(\?|[A-Za-z_][A-Za-z0-9_]*)?")


def expand_exit_status(exit_status: int) -> str:
    """Return the text that ``$?`` expands to."""
    return str(int(exit_status))


def expand_variables(
    line: str, exit_status: int = 0, env: Mapping[str, str] | None = None
) -> str:
    """Replace ``$?`` and ``$NAME`` in ``line``.

    Unset variables expand to nothing; a ``$`` not followed by ``?`` or a
    valid name start is kept as is.
    """
    environment = os.environ if env is None else env

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name is None:
            return "$"
        if name == "?":
            return expand_exit_status(exit_status)
        return environment.get(name, "")

    return _DOLLAR.sub(replace, line)