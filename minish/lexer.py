"""Split a command line into tokens."""

from __future__ import annotations

from collections.abc import Iterator

from .tokens import QuoteType, Token, TokenType, get_token_type

_BLANKS = " \t"
_SPACES = " \t\n\v\f\r"
_QUOTES = {"'": QuoteType.SINGLE_QUOTE, '"': QuoteType.DOUBLE_QUOTE}


def skip_whitespace(line: str, i: int) -> int:
    """Return the first index at or after ``i`` that is not a space or tab."""
    while i < len(line) and line[i] in _BLANKS:
        i += 1
    return i


def get_operator_length(line: str, i: int) -> int:
    """Return the length of the operator starting at ``i``, or 0 if none."""
    if line[i:i + 2] in ("<<", ">>"):
        return 2
    if i < len(line) and line[i] in "|<>":
        return 1
    return 0


def extract_word(line: str, start: int, end: int) -> str:
    """Return the slice ``line[start:end]``; ``end`` may not precede ``start``."""
    if end < start:
        raise ValueError(f"end ({end}) is before start ({start})")
    return line[start:end]


def _ends_word(line: str, i: int, quote: QuoteType) -> bool:
    if quote is QuoteType.SINGLE_QUOTE:
        return line[i] == "'"
    if quote is QuoteType.DOUBLE_QUOTE:
        return line[i] == '"'
    return line[i] in _SPACES or get_operator_length(line, i) > 0


def _read_word(line: str, i: int) -> tuple[Token | None, int]:
    quote = _QUOTES.get(line[i], QuoteType.NO_QUOTE)
    if quote is not QuoteType.NO_QUOTE:
        i += 1
    start = i
    while i < len(line) and not _ends_word(line, i, quote):
        i += 1
    end = i
    if quote is not QuoteType.NO_QUOTE and i < len(line):
        i += 1  # closing quote
    if end > start or quote is not QuoteType.NO_QUOTE:
        return Token(TokenType.ARGUMENT, extract_word(line, start, end), quote), i
    # A whitespace character other than space or tab: step over it.
    return None, i + 1


def _tokenize(line: str) -> Iterator[Token]:
    i = 0
    while i < len(line):
        i = skip_whitespace(line, i)
        if i >= len(line):
            break
        op_len = get_operator_length(line, i)
        if op_len:
            value = extract_word(line, i, i + op_len)
            yield Token(get_token_type(value), value)
            i += op_len
            continue
        token, i = _read_word(line, i)
        if token is not None:
            yield token


def lexer(line: str | None) -> list[Token]:
    """Tokenize a command line; an empty line gives no tokens."""
    if not line:
        return []
    return list(_tokenize(line))