"""Expansion of environment variables in parsed commands."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping

from minishell.parser import Node, NodeType
from minishell.tokens import Token, TokenType

_VARIABLE_RE = re.compile(r"\$([A-Za-z0-9_]*)")


def _environment(env: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if env is None else env


def expand_string(text: str, env: Mapping[str, str] | None = None) -> str:
    """Replace every ``$NAME`` in *text* with its value, or nothing if unset."""
    variables = _environment(env)
    return _VARIABLE_RE.sub(lambda m: variables.get(m.group(1), ""), text)


def expand_tokens(
    tokens: Iterable[Token], env: Mapping[str, str] | None = None
) -> list[Token]:
    """Return the tokens with variables expanded and quotes turned into words.

    A ``$`` token followed by another token becomes one word holding the value
    of the variable named by that token. Double-quoted text is expanded,
    single-quoted text is kept as it is.
    """
    variables = _environment(env)
    result: list[Token] = []
    stream = iter(tokens)
    for tok in stream:
        if tok.type is TokenType.DOLLAR:
            name = next(stream, None)
            if name is None:
                result.append(tok)
            else:
                result.append(Token(TokenType.WORD, variables.get(name.value, "")))
        elif tok.type is TokenType.DOUBLE_QUOTE:
            result.append(Token(TokenType.WORD, expand_string(tok.value, variables)))
        elif tok.type is TokenType.SINGLE_QUOTE:
            result.append(Token(TokenType.WORD, tok.value))
        elif tok.type is TokenType.WORD and "$" in tok.value:
            result.append(Token(TokenType.WORD, expand_string(tok.value, variables)))
        else:
            result.append(tok)
    return result


def expand_ast(node: Node | None, env: Mapping[str, str] | None = None) -> None:
    """Expand the tokens of every command in the tree, in place."""
    if node is None:
        return
    variables = _environment(env)
    if node.type is NodeType.CMD:
        node.tokens = expand_tokens(node.tokens, variables)
    expand_ast(node.lhs, variables)
    expand_ast(node.rhs, variables)