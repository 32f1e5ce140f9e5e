"""
Placeholder streams installed for slots configured as ``None``, and the
minimal capability checks applied to caller supplied streams.
"""

from __future__ import annotations

import io
from typing import Any


class DiscardStream(io.TextIOBase):
    """Writable stream which accepts and drops everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, data: Any) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        return len(data)

    def isatty(self) -> bool:
        return False


class EmptyStream(io.TextIOBase):
    """Readable stream which contains no data.

    End of input is only reached once a read is requested, so ``ended`` stays
    False until then.
    """

    def __init__(self) -> None:
        super().__init__()
        self.ended = False

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> str:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        self.ended = True
        return ""

    def readline(self, size: int | None = -1) -> str:
        return self.read(size)

    def isatty(self) -> bool:
        return False


def is_readable(stream: object) -> bool:
    return callable(getattr(stream, "read", None))


def is_writable(stream: object) -> bool:
    return callable(getattr(stream, "write", None))
