"""Token kinds produced by the lexer and small helpers to classify them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Kind of a lexical token."""

    PIPE = auto()
    REDIRECT_OUT = auto()
    REDIRECT_IN = auto()
    REDIRECT_APPEND = auto()
    HEREDOC = auto()
    COMMAND = auto()
    ARGUMENT = auto()
    FILE = auto()
    ENV_VAR = auto()
    OTHER = auto()


class QuoteType(Enum):
    """Quoting that surrounded a word in the input line."""

    NO_QUOTE = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()


@dataclass(frozen=True)
class Token:
    """A single token of a command line."""

    type: TokenType
    value: str
    quote_type: QuoteType = QuoteType.NO_QUOTE


_OPERATOR_TYPES = {
    "|": TokenType.PIPE,
    ">": TokenType.REDIRECT_OUT,
    "<": TokenType.REDIRECT_IN,
    ">>": TokenType.REDIRECT_APPEND,
    "<<": TokenType.HEREDOC,
}

_REDIRECTIONS = frozenset(
    {
        TokenType.REDIRECT_OUT,
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_APPEND,
        TokenType.HEREDOC,
    }
)


def get_token_type(value: str | None) -> TokenType:
    """Return the token type for an operator string, or ARGUMENT for a word."""
    if value is None:
        return TokenType.OTHER
    return _OPERATOR_TYPES.get(value, TokenType.ARGUMENT)


def is_operator(c: str) -> bool:
    """Tell whether a character starts a shell operator."""
    return c in ("|", "<", ">")


def is_redirection_token(type: TokenType) -> bool:
    """Tell whether a token type is one of the redirections."""
    return type in _REDIRECTIONS