import pytest

from minishell.expander import expand_ast, expand_string, expand_tokens
from minishell.parser import NodeType, parse
from minishell.tokens import Token, TokenType, tokenize

ENV = {"HOME": "/tmp/home", "USER": "tester", "A_1": "alpha"}


def words(tokens):
    return [t.value for t in tokens]


def test_expand_string_replaces_variable():
    assert expand_string("$HOME/x", ENV) == ENV["HOME"] + "/x"


def test_expand_string_several_variables():
    assert expand_string("$USER:$A_1", ENV) == ENV["USER"] + ":" + ENV["A_1"]


def test_expand_string_unset_variable_is_empty():
    assert expand_string("a$NOPE", ENV) == "a"


def test_expand_string_bare_dollar_vanishes():
    assert expand_string("cost $ 5", {}) == "cost " + " 5"


def test_expand_string_name_stops_at_non_name_char():
    assert expand_string("$USER-x", ENV) == ENV["USER"] + "-x"


@pytest.mark.parametrize("text", ["", "plain text", "no variables here!"])
def test_expand_string_without_dollar_is_unchanged(text):
    assert expand_string(text, ENV) == text


def test_expand_string_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("MINISHELL_TEST_VAR", "value")
    assert expand_string("$MINISHELL_TEST_VAR") == "value"


def test_dollar_token_pair_becomes_word():
    result = expand_tokens(tokenize("echo $HOME"), ENV)
    assert result == [
        Token(TokenType.WORD, "echo"),
        Token(TokenType.WORD, ENV["HOME"]),
    ]


def test_dollar_token_with_unset_name_becomes_empty_word():
    result = expand_tokens(tokenize("echo $NOPE"), ENV)
    assert words(result) == ["echo", ""]
    assert all(t.type is TokenType.WORD for t in result)


def test_trailing_dollar_token_is_kept():
    result = expand_tokens(tokenize("echo $"), ENV)
    assert result[-1] == Token(TokenType.DOLLAR, "$")
    assert len(result) == 2


def test_double_quotes_are_expanded():
    result = expand_tokens(tokenize('"hi $USER"'), ENV)
    assert result == [Token(TokenType.WORD, "hi " + ENV["USER"])]


def test_single_quotes_are_not_expanded():
    result = expand_tokens(tokenize("'hi $USER'"), ENV)
    assert result == [Token(TokenType.WORD, "hi $USER")]


def test_word_with_dollar_is_expanded():
    result = expand_tokens([Token(TokenType.WORD, "x$USER")], ENV)
    assert result == [Token(TokenType.WORD, "x" + ENV["USER"])]


def test_operator_tokens_pass_through():
    tokens = tokenize("cat < in")
    assert expand_tokens(tokens, ENV) == tokens


def test_expand_ast_walks_whole_tree():
    tree = parse(tokenize("echo $USER | cat \"$HOME\" && echo '$A_1'"))
    expand_ast(tree, ENV)
    assert tree.type is NodeType.AND_IF
    pipe = tree.lhs
    assert words(pipe.lhs.tokens) == ["echo", ENV["USER"]]
    assert words(pipe.rhs.tokens) == ["cat", ENV["HOME"]]
    assert words(tree.rhs.tokens) == ["echo", "$A_1"]
    for cmd in (pipe.lhs, pipe.rhs, tree.rhs):
        assert all(t.type is TokenType.WORD for t in cmd.tokens)


def test_expand_ast_accepts_none():
    assert expand_ast(None, ENV) is None