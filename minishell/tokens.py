"""Splitting a command line into tokens."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Kinds of token produced by :func:`tokenize`."""

    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    HEREDOC = enum.auto()
    APPEND = enum.auto()
    OPEN_PAREN = enum.auto()
    CLOSE_PAREN = enum.auto()
    SEMICOLON = enum.auto()
    AND_IF = enum.auto()
    OR_IF = enum.auto()
    DOLLAR = enum.auto()
    SINGLE_QUOTE = enum.auto()
    DOUBLE_QUOTE = enum.auto()
    WORD = enum.auto()


@dataclass(frozen=True)
class Token:
    """A single token: its kind and its text (quotes stripped)."""

    type: TokenType
    value: str


class TokenizeError(ValueError):
    """Raised when a command line cannot be split into tokens."""


_SPACES = frozenset(" \t\n\v\f\r")
_METACHARS = frozenset("|<>();&$`\\=")

_OPERATORS = {
    "<<": TokenType.HEREDOC,
    ">>": TokenType.APPEND,
    "&&": TokenType.AND_IF,
    "||": TokenType.OR_IF,
    "|": TokenType.PIPE,
    "<": TokenType.REDIR_IN,
    ">": TokenType.REDIR_OUT,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    ";": TokenType.SEMICOLON,
    "$": TokenType.DOLLAR,
}

_SPACE_CLASS = r" \t\n\v\f\r"
_META_CLASS = r"|<>();&$`\\="

_TOKEN_RE = re.compile(
    rf"(?P<space>[{_SPACE_CLASS}]+)"
    r"|'(?P<single>[^']*)'"
    r'|"(?P<double>[^"]*)"'
    r"|(?P<unclosed>['\"])"
    r"|(?P<op><<|>>|&&|\|\||[|<>();$])"
    r"|(?P<meta>[&`\\=])"
    rf"|(?P<word>[^{_SPACE_CLASS}{_META_CLASS}]+)"
)


def is_space(ch: str) -> bool:
    """Return True if *ch* is a blank character separating tokens."""
    return ch in _SPACES


def is_metachar(ch: str) -> bool:
    """Return True if *ch* ends a word and starts a token of its own."""
    return ch in _METACHARS


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens.

    Raises TokenizeError if a quote is left unclosed.
    """
    tokens: list[Token] = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == "space":
            continue
        if kind == "unclosed":
            raise TokenizeError(
                f"unclosed quote {match.group('unclosed')} at position {match.start()}"
            )
        if kind == "single":
            tokens.append(Token(TokenType.SINGLE_QUOTE, match.group("single")))
        elif kind == "double":
            tokens.append(Token(TokenType.DOUBLE_QUOTE, match.group("double")))
        elif kind == "op":
            op = match.group("op")
            tokens.append(Token(_OPERATORS[op], op))
        elif kind == "meta":
            tokens.append(Token(TokenType.WORD, match.group("meta")))
        else:
            tokens.append(Token(TokenType.WORD, match.group("word")))
    return tokens