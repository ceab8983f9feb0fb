# minishell

Building blocks for a small POSIX-style shell: a tokenizer, a parser that
builds a syntax tree, and a variable expander. It also has `pipex`, a
command that runs a chain of programs between two files, and a line reader
with a fixed-size buffer.

## Installation

```
pip install .
```

## The `pipex` command

`pipex` runs commands piped together, reading from an input file and writing
to an output file, like `< file1 cmd1 | cmd2 | ... | cmdn > file2`:

```
pipex infile "grep foo" "wc -l" outfile
```

With `here_doc`, input is read from standard input up to a line that equals
the limiter exactly, and the output is appended to the output file instead of
replacing it:

```
pipex here_doc END "cat" "wc -l" outfile
```

Details:

- Each command is split on spaces only; quotes are not interpreted.
- A command that names an existing file is run as it is; otherwise it is
  looked up in the directories of `PATH`.
- Commands are run with an empty environment.
- An input file that cannot be opened is reported on standard error
  (`zsh: permission denied: <file>`) and empty input is used instead.
- A command that cannot be found is reported as
  `zsh: command not found: <name>`; if it is the last command, `pipex`
  exits with status 127.
- The exit status is that of the last command.
- With too few arguments, a usage message is written to standard error.

The same work is available from Python through `minishell.pipex`:
`run_pipeline(infile, commands, outfile, env=None)`,
`run_here_doc(limiter, commands, outfile, env=None, stdin=None)`,
`find_command(command, env=None)`, `open_file(path, mode)` (with mode `"r"`,
`"w"` or `"a"`) and `split_words(text, sep)`. Failures raise `PipexError`,
which carries a `message` and an exit `status`.

## Library use

```python
from minishell.tokens import tokenize
from minishell.parser import parse
from minishell.expander import expand_ast

tree = parse(tokenize("echo $HOME && echo 'no $expansion' | wc -c"))
expand_ast(tree, {"HOME": "/home/user"})
```

- `minishell.tokens.tokenize(text)` returns a list of `Token` objects, each
  with a `TokenType` and a `value`. It recognises `|`, `||`, `&&`, `;`, `<`,
  `<<`, `>`, `>>`, `(`, `)`, `$`, single- and double-quoted text (quotes
  removed) and plain words. An unclosed quote raises `TokenizeError`.
- `minishell.parser.parse(tokens)` returns a `Node` tree, or `None` when
  there is no command. Precedence from loosest to tightest is `;`, then `&&`
  and `||`, then `|`; parentheses group. A `Node` has a `type`
  (`NodeType.CMD`, `PIPE`, `AND_IF`, `OR_IF` or `SEMICOLON`), the command's
  `tokens`, and `lhs` / `rhs` sides. A missing right side of an operator or
  an unclosed `(` raises `ParseError`.
- `minishell.expander` replaces `$NAME` with the variable's value (or
  nothing when unset) in plain words and double-quoted text, leaves
  single-quoted text as it is, and turns quoted tokens into words.
  `expand_string(text, env)`, `expand_tokens(tokens, env)` and
  `expand_ast(node, env)` use `os.environ` when `env` is `None`.
- `minishell.linereader.LineReader(stream, buffer_size=10000)` reads a text
  or binary stream line by line, each line keeping its newline. Use
  `read_line()`, which returns `None` at the end, or iterate over it.

## What this package does not do

There is no interactive shell here: nothing runs a parsed tree, there is no
prompt, no built-in commands such as `echo`, `cd` or `exit`, and redirection
tokens are parsed but never applied. The only command installed is `pipex`.

## Running the tests

```
pip install .[test]
pytest
```