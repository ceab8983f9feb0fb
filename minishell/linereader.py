"""Reading a stream line by line through a fixed-size buffer."""

from __future__ import annotations

from collections.abc import Iterator
from typing import AnyStr, IO

BUFFER_SIZE = 10000


class LineReader:
    """Reads lines from a binary or text stream, *buffer_size* units at a time.

    Each line keeps its trailing newline; the last line of the stream may lack
    one. Text read past the end of a line is kept for the next call.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._read = getattr(stream, "read1", stream.read)
        self._buffer_size = buffer_size
        self._pending: AnyStr | None = None

    def read_line(self) -> AnyStr | None:
        """Return the next line, or None when the stream has nothing left."""
        pending = self._pending
        while True:
            if pending:
                newline = "\n" if isinstance(pending, str) else b"\n"
                end = pending.find(newline)
                if end >= 0:
                    self._pending = pending[end + 1 :] or None
                    return pending[: end + 1]
            chunk = self._read(self._buffer_size)
            if not chunk:
                break
            pending = chunk if pending is None else pending + chunk
        self._pending = None
        return pending or None

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.read_line()) is not None:
            yield line