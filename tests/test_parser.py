import pytest

from minishell.parser import Node, NodeType, ParseError, parse
from minishell.tokens import Token, TokenType, tokenize


def shape(node):
    """Reduce a tree to nested tuples of node types and command words."""
    if node is None:
        return None
    if node.type is NodeType.CMD:
        return tuple(t.value for t in node.tokens)
    return (node.type, shape(node.lhs), shape(node.rhs))


def parse_line(line):
    return parse(tokenize(line))


def test_single_command():
    node = parse_line("echo hi")
    assert node.type is NodeType.CMD
    assert node.tokens == [Token(TokenType.WORD, "echo"), Token(TokenType.WORD, "hi")]
    assert node.lhs is None and node.rhs is None


def test_pipes_are_left_associative():
    assert shape(parse_line("a | b | c")) == (
        NodeType.PIPE,
        (NodeType.PIPE, ("a",), ("b",)),
        ("c",),
    )


def test_and_or_are_left_associative():
    assert shape(parse_line("a && b || c")) == (
        NodeType.OR_IF,
        (NodeType.AND_IF, ("a",), ("b",)),
        ("c",),
    )


def test_pipe_binds_tighter_than_and():
    assert shape(parse_line("a | b && c")) == (
        NodeType.AND_IF,
        (NodeType.PIPE, ("a",), ("b",)),
        ("c",),
    )


def test_semicolon_binds_loosest():
    assert shape(parse_line("a ; b && c")) == (
        NodeType.SEMICOLON,
        ("a",),
        (NodeType.AND_IF, ("b",), ("c",)),
    )


def test_parentheses_group():
    assert shape(parse_line("(a ; b) | c")) == (
        NodeType.PIPE,
        (NodeType.SEMICOLON, ("a",), ("b",)),
        ("c",),
    )


def test_nested_parentheses():
    assert shape(parse_line("((a))")) == ("a",)


def test_redirections_stay_in_command():
    node = parse_line("cat < in > out")
    assert node.type is NodeType.CMD
    assert [t.type for t in node.tokens] == [
        TokenType.WORD,
        TokenType.REDIR_IN,
        TokenType.WORD,
        TokenType.REDIR_OUT,
        TokenType.WORD,
    ]


def test_multiword_commands_on_both_sides():
    assert shape(parse_line("ls -l | grep x")) == (
        NodeType.PIPE,
        ("ls", "-l"),
        ("grep", "x"),
    )


def test_no_tokens_gives_none():
    assert parse([]) is None


def test_leading_operator_gives_none():
    assert parse_line("| a") is None


def test_empty_parentheses_give_none():
    assert parse_line("()") is None


@pytest.mark.parametrize(
    "line, fragment",
    [
        ("a |", "pipe"),
        ("a | | b", "pipe"),
        ("a &&", "&& or ||"),
        ("a ||", "&& or ||"),
        ("a ;", "semicolon"),
    ],
)
def test_missing_right_side_raises(line, fragment):
    with pytest.raises(ParseError, match="missing right side") as info:
        parse_line(line)
    assert fragment in str(info.value)


@pytest.mark.parametrize("line", ["(a", "(a ; b", "("])
def test_unclosed_parenthesis_raises(line):
    with pytest.raises(ParseError, match=r"expected '\)'"):
        parse_line(line)


def test_accepts_any_iterable_of_tokens():
    node = parse(iter(tokenize("a && b")))
    assert node == Node(
        NodeType.AND_IF,
        lhs=Node(NodeType.CMD, [Token(TokenType.WORD, "a")]),
        rhs=Node(NodeType.CMD, [Token(TokenType.WORD, "b")]),
    )