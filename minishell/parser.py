"""Building a syntax tree from tokens."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from minishell.tokens import Token, TokenType


class NodeType(enum.Enum):
    """Kinds of syntax-tree node."""

    PIPE = enum.auto()
    CMD = enum.auto()
    SEMICOLON = enum.auto()
    AND_IF = enum.auto()
    OR_IF = enum.auto()


@dataclass
class Node:
    """A syntax-tree node: a command's tokens, or an operator with two sides."""

    type: NodeType
    tokens: list[Token] = field(default_factory=list)
    lhs: Node | None = None
    rhs: Node | None = None


class ParseError(ValueError):
    """Raised when the tokens do not form a valid command line."""


_COMMAND_END = frozenset(
    {
        TokenType.PIPE,
        TokenType.AND_IF,
        TokenType.OR_IF,
        TokenType.SEMICOLON,
        TokenType.CLOSE_PAREN,
    }
)


class _Parser:
    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, *kinds: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type in kinds

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def simple(self) -> Node | None:
        tok = self._peek()
        if tok is None:
            return None
        if tok.type is TokenType.OPEN_PAREN:
            self._advance()
            inner = self.sequence()
            if not self._at(TokenType.CLOSE_PAREN):
                raise ParseError("parse error: expected ')'")
            self._advance()
            return inner
        words: list[Token] = []
        while (tok := self._peek()) is not None and tok.type not in _COMMAND_END:
            words.append(self._advance())
        return Node(NodeType.CMD, words) if words else None

    def _binary(
        self,
        operand: Callable[[], Node | None],
        operators: dict[TokenType, NodeType],
        what: str,
    ) -> Node | None:
        left = operand()
        if left is None:
            return None
        while self._at(*operators):
            node_type = operators[self._advance().type]
            right = operand()
            if right is None:
                raise ParseError(f"parse error: missing right side of {what}")
            left = Node(node_type, lhs=left, rhs=right)
        return left

    def pipeline(self) -> Node | None:
        return self._binary(self.simple, {TokenType.PIPE: NodeType.PIPE}, "pipe")

    def and_or(self) -> Node | None:
        return self._binary(
            self.pipeline,
            {TokenType.AND_IF: NodeType.AND_IF, TokenType.OR_IF: NodeType.OR_IF},
            "&& or ||",
        )

    def sequence(self) -> Node | None:
        return self._binary(
            self.and_or, {TokenType.SEMICOLON: NodeType.SEMICOLON}, "semicolon"
        )


def parse(tokens: Iterable[Token]) -> Node | None:
    """Parse *tokens* into a syntax tree.

    Returns None when the line holds no command to start with. Raises
    ParseError when an operator lacks its right side or a parenthesis is
    left open.
    """
    return _Parser(tokens).sequence()