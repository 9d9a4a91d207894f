"""Indented line writer for diagram output."""

from contextlib import contextmanager
from typing import Iterator, TextIO


class LineEmitter:
    """Writes one line per call to an append-only text sink.

    Each line is prefixed with the indent unit repeated once per open
    nesting level. Depth only changes through nested(), so every increment
    is paired with a decrement.
    """

    def __init__(self, writer: TextIO, indent: str):
        self._writer = writer
        self._indent = indent
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    def write(self, line: str) -> None:
        self._writer.write(self._indent * self._depth + line + "\n")

    def write_flush(self, line: str) -> None:
        """Write at column zero regardless of the current depth."""
        self._writer.write(line + "\n")

    @contextmanager
    def nested(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
