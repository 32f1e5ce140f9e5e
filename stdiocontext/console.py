"""
Print-style logging facade bound to a pair of output and error streams.

``console`` is the process-wide facade.  StdioContexts which replace stdout or
stderr install a new :class:`Console` bound to the replacement streams here
for as long as they are entered, so code logging through
``stdiocontext.console.console`` follows the redirection.
"""

from __future__ import annotations

import sys
import traceback
from typing import Any
from typing import TextIO


class Console:
    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        # None means "whatever sys.stdout/sys.stderr is at the time of the call"
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        if self._stderr is not None:
            return self._stderr
        if self._stdout is not None:
            return self._stdout
        return sys.stderr

    def _print(self, stream: TextIO, args: tuple, sep: str, end: str) -> None:
        print(*args, sep=sep, end=end, file=stream)

    def log(self, *args: Any, sep: str = " ", end: str = "\n") -> None:
        self._print(self.stdout, args, sep, end)

    info = log
    debug = log

    def warn(self, *args: Any, sep: str = " ", end: str = "\n") -> None:
        self._print(self.stderr, args, sep, end)

    warning = warn
    error = warn

    def exception(self, *args: Any, sep: str = " ", end: str = "\n") -> None:
        """Like :meth:`error`, followed by the traceback being handled, if any."""
        if args:
            self.error(*args, sep=sep, end=end)
        if sys.exc_info()[0] is not None:
            self.stderr.write(traceback.format_exc())

    def __repr__(self) -> str:
        return f"<Console stdout={self._stdout!r} stderr={self._stderr!r}>"


console = Console()
