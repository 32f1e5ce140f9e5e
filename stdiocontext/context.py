"""
StdioContext replaces stdin, stdout and stderr (and the console logging
facade writing to them) while it is entered, and puts the previous streams
back when it exits.

Contexts can be entered and exited explicitly, used as a ``with`` statement,
or used to wrap functions so that the context is entered for exactly as long
as the function runs, including functions which complete later through a
callback, a future or a coroutine.  Contexts nest, and may be entered again
while already entered.
"""

from __future__ import annotations

import itertools
import logging
from types import MappingProxyType
from types import TracebackType
from typing import Any
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import Mapping
from typing import Sequence
from typing import Tuple
from typing import Type
from typing import TypeVar

from typing_extensions import ParamSpec

import stdiocontext.wrappers
from stdiocontext import config
from stdiocontext.environment import ERROR
from stdiocontext.environment import INPUT
from stdiocontext.environment import LOG_FACADE
from stdiocontext.environment import OUTPUT
from stdiocontext.environment import STREAM_SLOTS
from stdiocontext.environment import Environment
from stdiocontext.environment import process_environment
from stdiocontext.exception import ConfigurationError
from stdiocontext.lib.stack import ContextEntry
from stdiocontext.lib.stdio import DiscardStream
from stdiocontext.lib.stdio import EmptyStream
from stdiocontext.lib.stdio import is_readable
from stdiocontext.lib.stdio import is_writable
from stdiocontext.log import debug_inspect
from stdiocontext.wrappers import CompletionStyle

log = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

default_strict = config.add_param(
    "strict",
    False,
    "whether contexts raise on unpaired exit() calls and streams modified outside of them",
    help_docstring="Used by contexts whose options do not set 'strict'.",
    env="STDIOCONTEXT_STRICT",
)
default_overwrite = config.add_param(
    "overwrite",
    False,
    "whether contexts restore their streams even if they were modified outside of them",
    help_docstring="Used by contexts whose options do not set 'overwrite'.",
    env="STDIOCONTEXT_OVERWRITE",
)

# Option names accepted for each stream, including the index of the stream
# in the stdio list of subprocess-like APIs
STREAM_ALIASES: Dict[Any, str] = {
    INPUT: INPUT,
    OUTPUT: OUTPUT,
    ERROR: ERROR,
    "stdin": INPUT,
    "stdout": OUTPUT,
    "stderr": ERROR,
    "0": INPUT,
    "1": OUTPUT,
    "2": ERROR,
    0: INPUT,
    1: OUTPUT,
    2: ERROR,
}
FLAGS = ("overwrite", "strict")


class _Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


#: Option value for a stream which the context leaves alone, the same as
#: omitting it.  Lets a list of streams skip a stream which is not last.
UNCHANGED: Any = _Unchanged()

_instance_count = itertools.count(1)


def _option_items(options: object) -> Iterable[Tuple[Any, Any]]:
    if isinstance(options, Mapping):
        return options.items()
    if isinstance(options, Sequence) and not isinstance(options, (str, bytes, bytearray)):
        if len(options) > len(STREAM_SLOTS):
            raise ConfigurationError("options must list at most 3 streams (stdin, stdout, stderr)")
        return enumerate(options)
    raise ConfigurationError("options must be a mapping or a sequence of streams")


def normalize_options(options: object) -> Dict[str, Any]:
    """
    Converts the options accepted by :class:`StdioContext` to a dict keyed by
    ``input``, ``output``, ``error``, ``overwrite`` and ``strict``.  Streams
    which were not given or given as :data:`UNCHANGED` are absent from the
    result, streams given as None are present with a None value.
    """
    opts: Dict[str, Any] = {}
    for key, value in _option_items(options):
        if key in FLAGS:
            if value is UNCHANGED:
                continue
            if not isinstance(value, bool):
                raise ConfigurationError(f"{key} must be a bool, not {type(value).__name__}")
            opts[key] = value
            continue

        slot = None if isinstance(key, bool) else STREAM_ALIASES.get(key)
        if slot is None:
            raise ConfigurationError(f"unknown option {key!r}")
        if value is UNCHANGED:
            continue
        if slot in opts:
            raise ConfigurationError(f"{slot} stream given more than once")
        opts[slot] = value

    stream = opts.get(INPUT)
    if stream is not None and not is_readable(stream):
        raise ConfigurationError("input must be a readable stream with a read() method")
    for slot in (OUTPUT, ERROR):
        stream = opts.get(slot)
        if stream is not None and not is_writable(stream):
            raise ConfigurationError(f"{slot} must be a writable stream with a write() method")

    return opts


class StdioContext:
    def __init__(self, options: object, environment: Environment | None = None) -> None:
        opts = normalize_options(options)
        opts.setdefault("overwrite", bool(default_overwrite))
        opts.setdefault("strict", bool(default_strict))

        self._options = MappingProxyType(opts)
        self._environment = environment if environment is not None else process_environment
        # Name for debug logging
        self._name = format(next(_instance_count), "x")

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def overwrite(self) -> bool:
        return self._options["overwrite"]

    @property
    def strict(self) -> bool:
        return self._options["strict"]

    def __repr__(self) -> str:
        return f"<StdioContext {self._name}>"

    def enter(self) -> None:
        """Starts using the streams of this context.

        Streams configured as None are replaced by a fresh empty input or a
        sink discarding output.  Streams which were not configured are left
        alone.
        """
        log.debug("enter() %r %s", self, debug_inspect(dict(self._options)))

        environment = self._environment
        before_enter = {}
        after_enter = {}

        for slot in STREAM_SLOTS:
            if slot not in self._options:
                continue
            stream = self._options[slot]
            if stream is None:
                stream = EmptyStream() if slot == INPUT else DiscardStream()
            before_enter[slot] = environment.replace(slot, stream)
            after_enter[slot] = environment.descriptor(slot)

        if OUTPUT in before_enter or ERROR in before_enter:
            before_enter[LOG_FACADE] = environment.replace(LOG_FACADE, environment.new_console())
            after_enter[LOG_FACADE] = environment.descriptor(LOG_FACADE)

        environment.stack.push(
            ContextEntry(self, before_enter=before_enter, after_enter=after_enter)
        )

    def exit(self) -> None:
        """
        Stops using the streams of this context and restores the streams which
        were present when :meth:`enter` was called.

        Raises:
            ExitDisciplineError: if this context is strict and either
                ``exit()`` was not paired with ``enter()`` or a stream was
                modified outside of the context (and ``overwrite`` is off).
        """
        log.debug("exit() %r %s", self, debug_inspect(dict(self._options)))
        self._environment.stack.exit(self)

    def __enter__(self) -> StdioContext:
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.exit()

    def wrap(
        self, func: Callable[P, T], style: CompletionStyle = CompletionStyle.AUTO
    ) -> Callable[P, T]:
        return stdiocontext.wrappers.wrap(self, func, style)

    def wrap_sync(self, func: Callable[P, T]) -> Callable[P, T]:
        return stdiocontext.wrappers.wrap_sync(self, func)

    def exec(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Calls ``func`` as if it was wrapped with :meth:`wrap`."""
        return self.wrap(func)(*args, **kwargs)

    def exec_sync(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Calls ``func`` as if it was wrapped with :meth:`wrap_sync`."""
        return self.wrap_sync(func)(*args, **kwargs)
