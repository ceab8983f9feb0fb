"""Chaining commands between an input file and an output file."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from collections.abc import Mapping, Sequence
from contextlib import ExitStack
from typing import IO, BinaryIO

from minishell.linereader import LineReader

NOT_FOUND = "zsh: command not found: "
DENIED = "zsh: permission denied: "
USAGE = (
    "usage: ./pipex file1 cmd1 cmd2 cmd3 ... cmdn file2\n"
    "usage: ./pipex here_doc LIMITER cmd cmd1 file\n"
)

_OPEN_FLAGS = {
    "r": os.O_RDONLY,
    "w": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}
_FILE_MODES = {"r": "rb", "w": "wb", "a": "ab"}


class PipexError(Exception):
    """A failure that ends the pipeline, with the exit status it gives."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def split_words(text: str, sep: str = " ") -> list[str]:
    """Split *text* on *sep*, dropping empty pieces."""
    return [word for word in text.split(sep) if word]


def find_command(command: str, env: Mapping[str, str] | None = None) -> str:
    """Return the path to run for *command*.

    A command that names an existing file is used as it is; otherwise the
    directories of PATH are searched in order. Raises PipexError (status 127)
    when nothing is found.
    """
    if not command:
        raise PipexError(NOT_FOUND, 127)
    if os.path.exists(command):
        return command
    variables = os.environ if env is None else env
    path = variables.get("PATH")
    if path is None:
        raise PipexError(NOT_FOUND + command, 127)
    for directory in split_words(path, ":"):
        candidate = f"{directory}/{command}"
        if os.path.exists(candidate):
            return candidate
    raise PipexError(NOT_FOUND + command, 127)


def open_file(path: str, mode: str = "r") -> BinaryIO:
    """Open *path* for reading ("r"), truncating ("w") or appending ("a").

    Raises PipexError when the file cannot be opened.
    """
    try:
        flags = _OPEN_FLAGS[mode]
    except KeyError:
        raise ValueError(f"unknown mode {mode!r}") from None
    try:
        fd = os.open(path, flags, 0o644)
    except OSError as exc:
        raise PipexError(DENIED + path, 1) from exc
    return open(fd, _FILE_MODES[mode])


def _report(error: PipexError) -> None:
    sys.stderr.write(error.message + "\n")
    sys.stderr.flush()


def _close(stream) -> None:
    if hasattr(stream, "close"):
        stream.close()


def _spawn(command: str, stdin, stdout, env: Mapping[str, str] | None):
    args = split_words(command)
    if not args:
        raise PipexError(NOT_FOUND, 127)
    path = find_command(args[0], env)
    try:
        return subprocess.Popen(args, executable=path, stdin=stdin, stdout=stdout, env={})
    except OSError as exc:
        raise PipexError(NOT_FOUND + args[0], 0) from exc


def _open_output(
    path: str, mode: str, stack: ExitStack
) -> tuple[BinaryIO | None, PipexError | None]:
    try:
        return stack.enter_context(open_file(path, mode)), None
    except PipexError as exc:
        return None, exc


def _chain(
    source: BinaryIO,
    commands: Sequence[str],
    out: BinaryIO | None,
    out_error: PipexError | None,
    env: Mapping[str, str] | None,
) -> int:
    procs: list[subprocess.Popen] = []
    stdin = source
    try:
        for command in commands[:-1]:
            try:
                proc = _spawn(command, stdin, subprocess.PIPE, env)
            except PipexError as exc:
                _report(exc)
                following = subprocess.DEVNULL
            else:
                procs.append(proc)
                following = proc.stdout
            if stdin is not source:
                _close(stdin)
            stdin = following
        if out_error is not None:
            raise out_error
        last = _spawn(commands[-1], stdin, out, env)
        procs.append(last)
    finally:
        if stdin is not source:
            _close(stdin)
        for proc in procs:
            proc.wait()
    status = last.returncode
    return status if status >= 0 else 128 - status


def run_pipeline(
    infile: str,
    commands: Sequence[str],
    outfile: str,
    env: Mapping[str, str] | None = None,
) -> int:
    """Run *commands* piped together from *infile* into *outfile*.

    An unreadable input file is reported and replaced by empty input. Returns
    the exit status of the last command; raises PipexError when the last
    command cannot be run or the output file cannot be opened.
    """
    commands = list(commands)
    if not commands:
        raise ValueError("at least one command is required")
    with ExitStack() as stack:
        try:
            source = stack.enter_context(open_file(infile, "r"))
        except PipexError as exc:
            _report(exc)
            source = stack.enter_context(open(os.devnull, "rb"))
        out, out_error = _open_output(outfile, "w", stack)
        return _chain(source, commands, out, out_error, env)


def _read_until(limiter: str, stream: IO) -> bytes:
    terminator = limiter.encode() + b"\n"
    chunks: list[bytes] = []
    for line in LineReader(stream):
        data = line if isinstance(line, bytes) else line.encode()
        if data == terminator:
            break
        chunks.append(data)
    return b"".join(chunks)


def run_here_doc(
    limiter: str,
    commands: Sequence[str],
    outfile: str,
    env: Mapping[str, str] | None = None,
    stdin: IO | None = None,
) -> int:
    """Feed the lines of *stdin* up to *limiter* through *commands*.

    The output is appended to *outfile*. Returns the exit status of the last
    command; raises PipexError as :func:`run_pipeline` does.
    """
    commands = list(commands)
    if not commands:
        raise ValueError("at least one command is required")
    stream = sys.stdin.buffer if stdin is None else stdin
    with ExitStack() as stack:
        out, out_error = _open_output(outfile, "a", stack)
        source = stack.enter_context(tempfile.TemporaryFile())
        source.write(_read_until(limiter, stream))
        source.seek(0)
        return _chain(source, commands, out, out_error, env)


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``file1 cmd1 ... cmdn file2`` or ``here_doc LIMITER cmd ... file``."""
    args = sys.argv[1:] if argv is None else list(argv)
    here = bool(args) and args[0] == "here_doc"
    if (len(args) >= 4 and not here) or len(args) >= 5:
        try:
            if here:
                return run_here_doc(args[1], args[2:-1], args[-1])
            return run_pipeline(args[0], args[1:-1], args[-1])
        except PipexError as exc:
            _report(exc)
            return exc.status
    sys.stderr.write(USAGE)
    return 0